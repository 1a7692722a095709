"""
无状态函数库

math 命名空间下的函数：
- copySign, cosh, exp, log, parseDouble, signum

所有函数在导入本包时通过 FunctionRegistry 注册，可以在查询表达式中以
math:xxx(...) 的形式调用。
"""

from core.attribute import NUMERIC_TYPES, AttributeType
from core.function import FunctionDescriptor, ParameterSpec
from core.registry import FunctionRegistry

from .function_docs import get_function_doc_metadata
from .math_functions import copy_sign, cosh, exp, log, parse_double, signum


NAMESPACE = "math"

STRING_TYPES = frozenset({AttributeType.STRING})


def _numeric(name: str, description: str) -> ParameterSpec:
    return ParameterSpec(name=name, accepted_types=NUMERIC_TYPES, description=description)


MATH_FUNCTIONS = (
    FunctionDescriptor(
        namespace=NAMESPACE,
        name="copySign",
        parameters=(
            _numeric("magnitude", "结果取该参数的大小"),
            _numeric("sign", "结果取该参数的符号"),
        ),
        return_type=AttributeType.DOUBLE,
        handler=copy_sign,
        doc_metadata=get_function_doc_metadata("copySign"),
    ),
    FunctionDescriptor(
        namespace=NAMESPACE,
        name="cosh",
        parameters=(_numeric("p1", "需要计算双曲余弦的值（弧度）"),),
        return_type=AttributeType.DOUBLE,
        handler=cosh,
        doc_metadata=get_function_doc_metadata("cosh"),
    ),
    FunctionDescriptor(
        namespace=NAMESPACE,
        name="exp",
        parameters=(_numeric("p1", "指数"),),
        return_type=AttributeType.DOUBLE,
        handler=exp,
        doc_metadata=get_function_doc_metadata("exp"),
    ),
    # log 自行处理 None：底数为 1 时无论真数是否为 None 都报错
    FunctionDescriptor(
        namespace=NAMESPACE,
        name="log",
        parameters=(
            _numeric("number", "真数"),
            _numeric("base", "底数"),
        ),
        return_type=AttributeType.DOUBLE,
        handler=log,
        doc_metadata=get_function_doc_metadata("log"),
        propagate_null=False,
    ),
    # parseDouble 的 None 输入是运行期错误，不做 None 传播
    FunctionDescriptor(
        namespace=NAMESPACE,
        name="parseDouble",
        parameters=(
            ParameterSpec(name="p1", accepted_types=STRING_TYPES, description="需要转换的字符串"),
        ),
        return_type=AttributeType.DOUBLE,
        handler=parse_double,
        doc_metadata=get_function_doc_metadata("parseDouble"),
        propagate_null=False,
    ),
    FunctionDescriptor(
        namespace=NAMESPACE,
        name="signum",
        parameters=(_numeric("p1", "需要判断符号的值"),),
        return_type=AttributeType.INT,
        handler=signum,
        doc_metadata=get_function_doc_metadata("signum"),
    ),
)


def register_math_functions() -> None:
    """注册 math 命名空间下的所有函数。"""
    for descriptor in MATH_FUNCTIONS:
        FunctionRegistry.register_function(descriptor)


register_math_functions()

__all__ = ["MATH_FUNCTIONS", "NAMESPACE", "register_math_functions"]
