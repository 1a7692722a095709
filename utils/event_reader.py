"""
CSV 事件读取

从带表头的 CSV 文件读取输入事件，按流定义中的属性类型转换每个单元格。
空单元格视为 None。
"""

from __future__ import annotations

import csv
import re
from pathlib import Path
from typing import Any, Callable, Dict, List

from core.attribute import INT_MAX, INT_MIN, LONG_MAX, LONG_MIN, AttributeType
from core.expression import StreamDefinition
from functions.math_functions import parse_double
from utils.logger import get_logger


logger = get_logger()

# 只接受 ASCII 十进制数字，不接受 "1_000" 或其他书写体系的数字
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def _to_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in ("true", "1"):
        return True
    if lowered in ("false", "0"):
        return False
    raise ValueError(f"不是合法的布尔值: {text!r}")


def _integer_converter(low: int, high: int) -> Callable[[str], int]:
    def convert(text: str) -> int:
        stripped = text.strip()
        if not _INTEGER_PATTERN.fullmatch(stripped):
            raise ValueError(f"不是合法的整数: {text!r}")
        value = int(stripped)
        if not low <= value <= high:
            raise ValueError(f"整数超出范围 [{low}, {high}]: {text!r}")
        return value

    return convert


_CONVERTERS: Dict[AttributeType, Callable[[str], Any]] = {
    AttributeType.STRING: str,
    AttributeType.INT: _integer_converter(INT_MIN, INT_MAX),
    AttributeType.LONG: _integer_converter(LONG_MIN, LONG_MAX),
    AttributeType.FLOAT: parse_double,
    AttributeType.DOUBLE: parse_double,
    AttributeType.BOOL: _to_bool,
    AttributeType.OBJECT: str,
}


def convert_cell(text: str | None, attr_type: AttributeType) -> Any:
    """按属性类型转换单元格，空单元格返回 None。"""
    if text is None or text == "":
        return None
    return _CONVERTERS[attr_type](text)


def read_events(path: str | Path, definition: StreamDefinition) -> List[Dict[str, Any]]:
    """
    读取 CSV 事件文件。

    Args:
        path: CSV 文件路径（第一行为表头）
        definition: 输入流定义；表头中未定义的列会被忽略

    Returns:
        事件列表，每个事件为 {属性名: 值}

    Raises:
        ValueError: 单元格无法按声明类型转换
    """
    path = Path(path)
    events: List[Dict[str, Any]] = []

    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row_number, row in enumerate(reader, start=2):
            event: Dict[str, Any] = {}
            for name, attr_type in definition.attributes.items():
                try:
                    event[name] = convert_cell(row.get(name), attr_type)
                except ValueError as exc:
                    raise ValueError(
                        f"{path.name} 第 {row_number} 行列 {name} 无法转换为 {attr_type}: {exc}"
                    ) from exc
            events.append(event)

    logger.info("Read %d events from %s", len(events), path)
    return events
