"""
属性类型

流中每个属性、每个表达式的结果都带有一个声明类型（AttributeType）。
函数在编译期根据参数的声明类型做校验，运行期只处理具体数值。
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from .errors import FunctionRuntimeError


INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1
LONG_MIN = -(2 ** 63)
LONG_MAX = 2 ** 63 - 1


class AttributeType(Enum):
    """属性类型。"""

    STRING = "string"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    BOOL = "bool"
    OBJECT = "object"

    @classmethod
    def from_name(cls, name: str) -> "AttributeType":
        """
        根据类型名称（不区分大小写）获取类型。

        Raises:
            ValueError: 未知的类型名称
        """
        key = str(name).strip().lower()
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(
            f"未知的属性类型: {name}，可选: {[m.value for m in cls]}"
        )

    def __str__(self) -> str:
        return self.name


NUMERIC_TYPES = frozenset(
    {AttributeType.INT, AttributeType.LONG, AttributeType.FLOAT, AttributeType.DOUBLE}
)


def type_of_constant(value: Any) -> AttributeType:
    """
    推断表达式常量的类型。

    - bool -> BOOL（需先于 int 判断）
    - int -> 32 位范围内为 INT，64 位范围内为 LONG，超出 64 位抛出 ValueError
    - float -> DOUBLE
    - str -> STRING
    - None -> OBJECT
    """
    if isinstance(value, bool):
        return AttributeType.BOOL
    if isinstance(value, int):
        if INT_MIN <= value <= INT_MAX:
            return AttributeType.INT
        if LONG_MIN <= value <= LONG_MAX:
            return AttributeType.LONG
        raise ValueError(f"整数常量超出 64 位范围: {value}")
    if isinstance(value, float):
        return AttributeType.DOUBLE
    if isinstance(value, str):
        return AttributeType.STRING
    if value is None:
        return AttributeType.OBJECT
    raise ValueError(f"不支持的常量类型: {type(value).__name__}")


def convert_to_double(value: Any) -> float:
    """
    将 int/long/float/double 数值统一转换为浮点数。

    Raises:
        FunctionRuntimeError: 值不是数值（bool 也不视为数值），或整数过大无法表示为 double
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FunctionRuntimeError(
            f"无法转换为 double: {value!r} ({type(value).__name__})"
        )
    try:
        return float(value)
    except OverflowError as exc:
        raise FunctionRuntimeError(f"整数过大，无法转换为 double: {value}") from exc
