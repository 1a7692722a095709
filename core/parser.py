"""
查询配置解析器

负责从 YAML 文件中读取查询配置，例如：

    stream:
      name: InValueStream
      attributes:
        - {name: number, type: double}
        - {name: base, type: double}
    select:
      - {name: logValue, expression: "math:log(number, base)"}
    insert_into: OutMediationStream

注意：
- 本模块只做配置解析与结构检查，不编译表达式。
- 表达式的校验（函数参数个数、类型）在 QueryEngine 构造时完成。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

import pathlib

import yaml

from .attribute import AttributeType
from .expression import StreamDefinition


DEFAULT_OUTPUT_STREAM = "OutputStream"


@dataclass
class SelectItem:
    """
    单条 select 配置。

    Attributes:
        name: 输出属性名称，如 "logValue"
        expression: 表达式字符串，如 "math:log(number, base)"
    """

    name: str
    expression: str


@dataclass
class QueryConfig:
    """
    整体查询配置。

    Attributes:
        stream: 输入流定义
        select: select 列表（顺序即输出属性顺序）
        insert_into: 输出流名称
    """

    stream: StreamDefinition
    select: List[SelectItem]
    insert_into: str = DEFAULT_OUTPUT_STREAM


class QueryParser:
    """
    查询配置解析器。

    支持的顶层键：
    - stream: name + attributes（列表，每项包含 name, type）
    - select: 列表，每项包含 name, expression
    - insert_into: 输出流名称（可选）
    """

    def parse_file(self, path: str | pathlib.Path) -> QueryConfig:
        """
        从 YAML 文件解析 QueryConfig。

        Args:
            path: 配置文件路径。
        """
        path_obj = pathlib.Path(path)
        with path_obj.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> QueryConfig:
        """
        从已加载的字典解析 QueryConfig。

        Raises:
            ValueError: 配置结构错误
        """
        if not isinstance(data, dict):
            raise ValueError(f"查询配置必须是字典，实际为 {type(data).__name__}")

        stream = self._parse_stream(data.get("stream"))
        select = self._parse_select(data.get("select"))
        insert_into = str(data.get("insert_into") or DEFAULT_OUTPUT_STREAM)

        return QueryConfig(stream=stream, select=select, insert_into=insert_into)

    # ------------------------------------------------------------------#
    # 内部解析工具
    # ------------------------------------------------------------------#
    def _parse_stream(self, raw: Any) -> StreamDefinition:
        if not isinstance(raw, dict):
            raise ValueError("缺少 stream 配置")

        name = str(raw.get("name", "")).strip()
        if not name:
            raise ValueError("stream 缺少 name")

        attributes_raw = raw.get("attributes") or []
        if not isinstance(attributes_raw, list):
            raise ValueError(f"流 {name} 的 attributes 必须是列表")
        if not attributes_raw:
            raise ValueError(f"流 {name} 没有定义任何属性")

        attributes: Dict[str, AttributeType] = {}
        for item in attributes_raw:
            self._require_keys(item, ("name", "type"), f"流 {name} 的属性")
            attr_name = str(item["name"])
            if attr_name in attributes:
                raise ValueError(f"流 {name} 中属性重复定义: {attr_name}")
            attributes[attr_name] = AttributeType.from_name(item["type"])

        return StreamDefinition(name=name, attributes=attributes)

    def _parse_select(self, raw: Any) -> List[SelectItem]:
        if not raw:
            raise ValueError("缺少 select 配置")
        if not isinstance(raw, list):
            raise ValueError("select 必须是列表")

        items: List[SelectItem] = []
        seen: set[str] = set()
        for item in raw:
            self._require_keys(item, ("name",), "select 项")
            name = str(item["name"])
            expression = str(item.get("expression", "")).strip()
            if not expression:
                raise ValueError(f"select 项 {name} 缺少 expression")
            if name in seen:
                raise ValueError(f"select 输出名称重复: {name}")
            seen.add(name)
            items.append(SelectItem(name=name, expression=expression))

        return items

    @staticmethod
    def _require_keys(item: Any, keys: tuple[str, ...], where: str) -> None:
        if not isinstance(item, dict):
            raise ValueError(f"{where}必须是字典，实际为 {type(item).__name__}: {item!r}")
        missing = [key for key in keys if key not in item]
        if missing:
            raise ValueError(f"{where}缺少 {', '.join(missing)}: {item!r}")
