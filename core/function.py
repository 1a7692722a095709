"""
函数描述符

每个可在表达式中调用的函数由一个 FunctionDescriptor 描述：
- 命名空间与名称（如 "math:log"）
- 每个位置参数接受的类型集合
- 返回类型
- 实际计算的 handler

调用约定：
- validate(arg_types)：编译期调用一次，校验参数个数与参数声明类型。
- invoke(args)：每个事件调用一次，参数为按位置排列的数值序列。
  propagate_null 为 True 时，任一参数为 None 直接返回 None，不调用 handler；
  否则由 handler 自行处理 None。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Optional, Sequence, Tuple

from .attribute import AttributeType
from .errors import FunctionValidationError


@dataclass(frozen=True)
class ParameterSpec:
    """
    参数声明。

    Attributes:
        name: 参数名称（仅用于文档和错误信息）
        accepted_types: 允许的参数声明类型
        description: 参数说明
    """

    name: str
    accepted_types: FrozenSet[AttributeType]
    description: str = ""


@dataclass(frozen=True)
class FunctionDescriptor:
    """
    函数描述符。

    Attributes:
        namespace: 命名空间，如 "math"
        name: 函数名称，如 "log"
        parameters: 按位置排列的参数声明
        return_type: 返回类型
        handler: 计算函数，按位置接收参数值
        propagate_null: 参数为 None 时是否直接返回 None
        doc_metadata: 文档元数据（用于文档展示）
    """

    namespace: str
    name: str
    parameters: Tuple[ParameterSpec, ...]
    return_type: AttributeType
    handler: Callable[..., Any]
    propagate_null: bool = True
    doc_metadata: Optional[Dict[str, Any]] = field(default=None, compare=False)

    @property
    def qualified_name(self) -> str:
        """带命名空间的名称，例如 "math:log"。"""
        return f"{self.namespace}:{self.name}"

    @property
    def arity(self) -> int:
        return len(self.parameters)

    def _check_arity(self, found: int) -> None:
        if found != self.arity:
            raise FunctionValidationError(
                f"传给 {self.qualified_name}() 函数的参数个数错误，"
                f"需要 {self.arity} 个，实际 {found} 个"
            )

    def validate(self, arg_types: Sequence[AttributeType]) -> None:
        """
        编译期校验。

        Args:
            arg_types: 各参数表达式的声明类型

        Raises:
            FunctionValidationError: 参数个数不符，或某个参数类型不在允许集合中
        """
        self._check_arity(len(arg_types))
        for index, (param, arg_type) in enumerate(zip(self.parameters, arg_types)):
            if arg_type not in param.accepted_types:
                accepted = " 或 ".join(
                    str(t) for t in sorted(param.accepted_types, key=lambda t: t.name)
                )
                raise FunctionValidationError(
                    f"{self.qualified_name}() 函数第 {index + 1} 个参数 ({param.name}) 类型错误，"
                    f"需要 {accepted}，实际为 {arg_type}"
                )

    def invoke(self, args: Sequence[Any]) -> Any:
        """
        执行一次函数调用。

        Args:
            args: 按位置排列的参数值

        Returns:
            计算结果；propagate_null 时任一参数为 None 则返回 None
        """
        self._check_arity(len(args))
        if self.propagate_null and any(arg is None for arg in args):
            return None
        return self.handler(*args)
