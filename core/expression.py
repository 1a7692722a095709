"""
select 表达式编译与执行

支持的表达式：
- 函数调用：math:log(number, 2)，也可写作 math.log(number, 2)
- 嵌套调用：math:exp(math:log(x, 2))
- 流属性引用：number
- 常量：数字、字符串、None、True/False，以及负数常量 -3.5

表达式在编译期（查询加载时）解析为执行器树，并完成函数参数个数与类型的校验；
每个事件到来时只执行执行器树，不再解析。
"""

from __future__ import annotations

import ast
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

from .attribute import AttributeType, type_of_constant
from .function import FunctionDescriptor
from .registry import FunctionRegistry


# "namespace:name(" -> "namespace.name("，只在字符串常量之外替换
_NAMESPACE_CALL = re.compile(r"\b([A-Za-z_]\w*):([A-Za-z_]\w*)(\s*\()")
_STRING_LITERAL = re.compile(r"('(?:[^'\\]|\\.)*'|\"(?:[^\"\\]|\\.)*\")")


class ExpressionError(Exception):
    """表达式解析相关错误。"""


@dataclass
class StreamDefinition:
    """
    流定义。

    Attributes:
        name: 流名称，如 "InValueStream"
        attributes: {属性名: 属性类型}，顺序即定义顺序
    """

    name: str
    attributes: Dict[str, AttributeType]

    def type_of(self, attribute: str) -> AttributeType:
        """
        获取属性类型。

        Raises:
            ExpressionError: 属性未定义
        """
        try:
            return self.attributes[attribute]
        except KeyError:
            raise ExpressionError(
                f"流 {self.name} 中未定义属性: {attribute}，"
                f"已定义: {list(self.attributes)}"
            ) from None


class ExpressionExecutor:
    """执行器基类。"""

    return_type: AttributeType

    def execute(self, event: Mapping[str, Any]) -> Any:  # pragma: no cover - 由子类实现
        raise NotImplementedError


class ConstantExecutor(ExpressionExecutor):
    """常量。"""

    def __init__(self, value: Any) -> None:
        self.value = value
        self.return_type = type_of_constant(value)

    def execute(self, event: Mapping[str, Any]) -> Any:
        return self.value

    def __repr__(self) -> str:
        return f"<ConstantExecutor {self.value!r}:{self.return_type}>"


class AttributeExecutor(ExpressionExecutor):
    """流属性引用，事件中缺失的属性视为 None。"""

    def __init__(self, name: str, return_type: AttributeType) -> None:
        self.name = name
        self.return_type = return_type

    def execute(self, event: Mapping[str, Any]) -> Any:
        return event.get(self.name)

    def __repr__(self) -> str:
        return f"<AttributeExecutor {self.name}:{self.return_type}>"


class FunctionCallExecutor(ExpressionExecutor):
    """
    函数调用。

    构造时完成参数校验，执行时先执行所有参数执行器，再按位置调用函数。
    """

    def __init__(self, descriptor: FunctionDescriptor, args: List[ExpressionExecutor]) -> None:
        descriptor.validate([arg.return_type for arg in args])
        self.descriptor = descriptor
        self.args = args
        self.return_type = descriptor.return_type

    def execute(self, event: Mapping[str, Any]) -> Any:
        values = [arg.execute(event) for arg in self.args]
        return self.descriptor.invoke(values)

    def __repr__(self) -> str:
        return f"<FunctionCallExecutor {self.descriptor.qualified_name}/{len(self.args)}>"


def normalize_namespaces(expression: str) -> str:
    """
    将 namespace:name( 写法转换为 Python 可解析的 namespace.name(。

    字符串常量中的内容保持不变。
    """
    parts = _STRING_LITERAL.split(expression)
    # split 带捕获组时，奇数下标是字符串常量
    for index in range(0, len(parts), 2):
        parts[index] = _NAMESPACE_CALL.sub(r"\1.\2\3", parts[index])
    return "".join(parts)


class ExpressionCompiler:
    """
    表达式编译器。

    将表达式字符串编译为执行器树，编译期完成：
    - 语法与节点类型检查
    - 属性名检查
    - 函数查找与参数个数、参数类型校验
    """

    def __init__(self, definition: StreamDefinition) -> None:
        """
        Args:
            definition: 输入流定义，用于解析属性引用及其类型
        """
        self._definition = definition

    def compile(self, expression: str) -> ExpressionExecutor:
        """
        编译表达式。

        Raises:
            ExpressionError: 语法错误、不允许的节点、未定义的属性
            FunctionValidationError: 未知函数、参数个数或类型错误
        """
        source = normalize_namespaces(expression.strip())
        try:
            tree = ast.parse(source, mode="eval")
        except SyntaxError as exc:
            raise ExpressionError(f"表达式语法错误: {expression}, 错误: {exc}") from exc
        return self._build(tree.body, expression)

    def _build(self, node: ast.AST, expression: str) -> ExpressionExecutor:
        if isinstance(node, ast.Call):
            if node.keywords:
                raise ExpressionError(f"函数调用不支持关键字参数: {expression}")
            descriptor = FunctionRegistry.require_function(self._function_name(node.func, expression))
            args = [self._build(arg, expression) for arg in node.args]
            return FunctionCallExecutor(descriptor, args)

        if isinstance(node, ast.Name):
            return AttributeExecutor(node.id, self._definition.type_of(node.id))

        if isinstance(node, ast.Constant):
            try:
                return ConstantExecutor(node.value)
            except ValueError as exc:
                raise ExpressionError(f"{exc}: {expression}") from exc

        if isinstance(node, ast.UnaryOp) and isinstance(node.op, (ast.USub, ast.UAdd)):
            # 只允许对数值常量取正负，例如 -3.5；先取负再推断类型，-2**63 仍是 LONG
            operand = node.operand
            if (
                isinstance(operand, ast.Constant)
                and isinstance(operand.value, (int, float))
                and not isinstance(operand.value, bool)
            ):
                value = -operand.value if isinstance(node.op, ast.USub) else operand.value
                return self._build(ast.Constant(value=value), expression)
            raise ExpressionError(f"正负号只能用于数值常量: {expression}")

        raise ExpressionError(
            f"不允许的 AST 节点类型: {type(node).__name__}，表达式: {expression}"
        )

    @staticmethod
    def _function_name(func: ast.AST, expression: str) -> str:
        """
        提取带命名空间的函数名。

        - math.log -> "math:log"
        - log（无命名空间）-> "log"
        """
        if isinstance(func, ast.Attribute) and isinstance(func.value, ast.Name):
            return f"{func.value.id}:{func.attr}"
        if isinstance(func, ast.Name):
            return func.id
        raise ExpressionError(f"无法识别的函数调用: {expression}")
