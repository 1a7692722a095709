"""
函数注册表与编译期校验测试
"""

import pathlib
import sys

import pytest

# 添加项目根目录到路径
project_root = pathlib.Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import functions  # noqa: F401

from core.attribute import NUMERIC_TYPES, AttributeType
from core.errors import FunctionValidationError
from core.function import FunctionDescriptor, ParameterSpec
from core.registry import FunctionRegistry


NUMERIC = [AttributeType.INT, AttributeType.LONG, AttributeType.FLOAT, AttributeType.DOUBLE]
ONE_ARG = ["cosh", "exp", "signum"]
TWO_ARGS = ["copySign", "log"]


@pytest.fixture
def scratch_function():
    """临时注册一个测试函数，测试结束后移除。"""
    descriptor = FunctionDescriptor(
        namespace="test",
        name="double",
        parameters=(ParameterSpec(name="x", accepted_types=NUMERIC_TYPES),),
        return_type=AttributeType.DOUBLE,
        handler=lambda x: 2.0 * x,
    )
    FunctionRegistry.register_function(descriptor)
    yield descriptor
    FunctionRegistry.unregister_function(descriptor.qualified_name)


def test_math_functions_registered():
    names = FunctionRegistry.list_functions()
    for name in ["copySign", "cosh", "exp", "log", "parseDouble", "signum"]:
        assert f"math:{name}" in names
    assert "math" in FunctionRegistry.list_namespaces()


def test_lookup_is_case_sensitive():
    assert FunctionRegistry.get_function("math:log") is not None
    assert FunctionRegistry.get_function("math:LOG") is None
    assert FunctionRegistry.get_function("log") is None


def test_require_unknown_function():
    with pytest.raises(FunctionValidationError):
        FunctionRegistry.require_function("math:tanh")


def test_descriptor_shape():
    log = FunctionRegistry.require_function("math:log")
    assert log.qualified_name == "math:log"
    assert log.arity == 2
    assert log.return_type == AttributeType.DOUBLE
    assert FunctionRegistry.require_function("math:signum").return_type == AttributeType.INT
    assert FunctionRegistry.require_function("math:parseDouble").arity == 1


@pytest.mark.parametrize("name", ONE_ARG)
@pytest.mark.parametrize("arg_type", NUMERIC)
def test_one_arg_functions_accept_numeric(name, arg_type):
    FunctionRegistry.require_function(f"math:{name}").validate([arg_type])


@pytest.mark.parametrize("name", TWO_ARGS)
@pytest.mark.parametrize("arg_type", NUMERIC)
def test_two_arg_functions_accept_numeric(name, arg_type):
    FunctionRegistry.require_function(f"math:{name}").validate([arg_type, AttributeType.DOUBLE])
    FunctionRegistry.require_function(f"math:{name}").validate([AttributeType.INT, arg_type])


@pytest.mark.parametrize("name", ONE_ARG + ["parseDouble"])
def test_one_arg_functions_wrong_arity(name):
    descriptor = FunctionRegistry.require_function(f"math:{name}")
    with pytest.raises(FunctionValidationError, match="参数个数"):
        descriptor.validate([])
    with pytest.raises(FunctionValidationError, match="参数个数"):
        descriptor.validate([AttributeType.DOUBLE] * 2)


@pytest.mark.parametrize("name", TWO_ARGS)
def test_two_arg_functions_wrong_arity(name):
    descriptor = FunctionRegistry.require_function(f"math:{name}")
    with pytest.raises(FunctionValidationError):
        descriptor.validate([AttributeType.DOUBLE])
    with pytest.raises(FunctionValidationError):
        descriptor.validate([AttributeType.DOUBLE] * 3)


@pytest.mark.parametrize("name", ONE_ARG)
@pytest.mark.parametrize("arg_type", [AttributeType.STRING, AttributeType.BOOL, AttributeType.OBJECT])
def test_numeric_functions_reject_other_types(name, arg_type):
    with pytest.raises(FunctionValidationError, match="类型错误"):
        FunctionRegistry.require_function(f"math:{name}").validate([arg_type])


def test_log_rejects_string_base():
    log = FunctionRegistry.require_function("math:log")
    with pytest.raises(FunctionValidationError, match="第 2 个参数"):
        log.validate([AttributeType.DOUBLE, AttributeType.STRING])


def test_copy_sign_rejects_string_magnitude():
    copy_sign = FunctionRegistry.require_function("math:copySign")
    with pytest.raises(FunctionValidationError, match="第 1 个参数"):
        copy_sign.validate([AttributeType.STRING, AttributeType.DOUBLE])


@pytest.mark.parametrize("arg_type", NUMERIC + [AttributeType.BOOL, AttributeType.OBJECT])
def test_parse_double_requires_string(arg_type):
    with pytest.raises(FunctionValidationError):
        FunctionRegistry.require_function("math:parseDouble").validate([arg_type])


def test_parse_double_accepts_string():
    FunctionRegistry.require_function("math:parseDouble").validate([AttributeType.STRING])


def test_invoke_checks_arity():
    with pytest.raises(FunctionValidationError):
        FunctionRegistry.require_function("math:cosh").invoke([1.0, 2.0])


def test_register_custom_function(scratch_function):
    assert FunctionRegistry.get_function("test:double") is scratch_function
    assert scratch_function.invoke([4]) == 8.0
    assert scratch_function.invoke([None]) is None


def test_unregister(scratch_function):
    FunctionRegistry.unregister_function("test:double")
    assert FunctionRegistry.get_function("test:double") is None
    # 重复移除不报错
    FunctionRegistry.unregister_function("test:double")


def test_reregister_replaces(scratch_function):
    replacement = FunctionDescriptor(
        namespace="test",
        name="double",
        parameters=scratch_function.parameters,
        return_type=AttributeType.DOUBLE,
        handler=lambda x: 3.0 * x,
    )
    FunctionRegistry.register_function(replacement)
    assert FunctionRegistry.require_function("test:double").invoke([2]) == 6.0
