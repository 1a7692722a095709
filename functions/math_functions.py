"""
math 命名空间函数

提供可以在查询表达式中以 math:xxx(...) 形式调用的数学函数。
所有函数都是无状态的，只接受参数并返回计算结果。

数值语义与 IEEE 754 双精度一致：
- 溢出返回 inf，而不是抛出 OverflowError
- 对数的非正数参数得到 NaN / -inf，而不是抛出 ValueError
"""

import math
import re
from typing import Optional, Union

from core.attribute import convert_to_double
from core.errors import FunctionRuntimeError, NumberFormatError


Number = Union[int, float]

# parseDouble 忽略首尾的空白与控制字符（码位 <= 0x20）
_TRIM_CHARS = "".join(chr(code) for code in range(0x21))

_DECIMAL_PATTERN = re.compile(
    r"[+-]?(?:NaN|Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?[fFdD]?)",
    re.ASCII,
)


def _ln(x: float) -> float:
    """自然对数：ln(0) = -inf，负数与 NaN 得到 NaN。"""
    if math.isnan(x) or x < 0:
        return math.nan
    if x == 0:
        return -math.inf
    return math.log(x)


def copy_sign(magnitude: Number, sign: Number) -> float:
    """
    返回 magnitude 的绝对值，符号取自 sign。

    Examples:
        copy_sign(5.6, -3.0) -> -5.6
        copy_sign(5.6, 3.0) -> 5.6
    """
    return math.copysign(convert_to_double(magnitude), convert_to_double(sign))


def cosh(x: Number) -> float:
    """
    计算双曲余弦（x 为弧度）。

    Examples:
        cosh(6.0) -> 201.7156361224559
    """
    try:
        return math.cosh(convert_to_double(x))
    except OverflowError:
        return math.inf


def exp(x: Number) -> float:
    """
    计算 e 的 x 次幂。

    Examples:
        exp(10.23) -> 27722.51006805505
    """
    try:
        return math.exp(convert_to_double(x))
    except OverflowError:
        return math.inf


def log(number: Optional[Number], base: Optional[Number]) -> Optional[float]:
    """
    计算以 base 为底 number 的对数：ln(number) / ln(base)。

    底数为 1 时对数无定义，无论 number 是否为 None 都抛出错误；
    其余情况下任一参数为 None 返回 None。

    Raises:
        FunctionRuntimeError: base == 1

    Examples:
        log(34, 2) -> 5.08746284125034
    """
    base_value = None if base is None else convert_to_double(base)
    if base_value == 1.0:
        raise FunctionRuntimeError(
            f"math:log() 函数的底数为 1，以 1 为底的对数无定义，"
            f"math:log({number}, {base}) 的结果无定义"
        )
    if number is None or base_value is None:
        return None
    return _ln(convert_to_double(number)) / _ln(base_value)


def parse_double(text: Optional[str]) -> float:
    """
    将十进制字符串解析为浮点数。

    接受可选的正负号、小数和指数部分、结尾的 d/D/f/F 类型后缀，
    以及 NaN、Infinity；首尾的空白会被忽略。

    Raises:
        FunctionRuntimeError: text 为 None
        NumberFormatError: text 不是合法的十进制数

    Examples:
        parse_double("123") -> 123.0
    """
    if text is None:
        raise FunctionRuntimeError("math:parseDouble() 函数的输入不能为 None")
    if not isinstance(text, str):
        raise FunctionRuntimeError(
            f"math:parseDouble() 函数的输入必须是字符串，实际为 {type(text).__name__}"
        )
    trimmed = text.strip(_TRIM_CHARS)
    if not _DECIMAL_PATTERN.fullmatch(trimmed):
        raise NumberFormatError(f"无法解析为 double: {text!r}")
    if trimmed[-1] in "fFdD":
        trimmed = trimmed[:-1]
    return float(trimmed)


def signum(x: Number) -> int:
    """
    返回数值的符号：正数 1，负数 -1，零（含 -0.0）与 NaN 为 0。

    Examples:
        signum(-6.32) -> -1
    """
    value = convert_to_double(x)
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0
