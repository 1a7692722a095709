"""
函数相关错误

- FunctionValidationError：编译期（组态加载时）校验失败，例如参数个数或类型错误，
  查询无法部署。
- FunctionRuntimeError：逐事件执行时的错误，例如 log 的底数为 1。
"""


class FunctionError(Exception):
    """函数错误基类。"""


class FunctionValidationError(FunctionError):
    """编译期校验错误（参数个数、参数类型、未知函数）。"""


class FunctionRuntimeError(FunctionError):
    """运行期执行错误。"""


class NumberFormatError(FunctionRuntimeError, ValueError):
    """字符串无法解析为数值。"""
