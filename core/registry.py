"""
函数注册表

统一管理 {"命名空间:函数名" -> FunctionDescriptor} 的映射。
函数在 functions 包导入时注册，表达式编译时按名称查找。
"""

from __future__ import annotations

from typing import Dict, List, Optional

from utils.logger import get_logger

from .errors import FunctionValidationError
from .function import FunctionDescriptor


logger = get_logger()


class FunctionRegistry:
    """
    函数注册表。

    所有注册/获取都通过类方法完成，便于在不同模块中统一使用。
    名称区分大小写。
    """

    _functions: Dict[str, FunctionDescriptor] = {}

    @classmethod
    def register_function(cls, descriptor: FunctionDescriptor) -> None:
        """
        注册函数。同名函数会被替换。

        Args:
            descriptor: 函数描述符，以 qualified_name 作为键
        """
        key = descriptor.qualified_name
        if key in cls._functions:
            logger.warning("Function %s re-registered, previous entry replaced", key)
        cls._functions[key] = descriptor
        logger.debug("Function registered: %s (arity=%d)", key, descriptor.arity)

    @classmethod
    def unregister_function(cls, qualified_name: str) -> None:
        """移除已注册的函数，不存在时忽略。"""
        cls._functions.pop(qualified_name, None)

    @classmethod
    def get_function(cls, qualified_name: str) -> Optional[FunctionDescriptor]:
        """根据名称获取函数，找不到时返回 None。"""
        return cls._functions.get(qualified_name)

    @classmethod
    def require_function(cls, qualified_name: str) -> FunctionDescriptor:
        """
        根据名称获取函数。

        Raises:
            FunctionValidationError: 函数未注册
        """
        descriptor = cls._functions.get(qualified_name)
        if descriptor is None:
            raise FunctionValidationError(
                f"未知的函数: {qualified_name}，已注册的函数: {cls.list_functions()}"
            )
        return descriptor

    @classmethod
    def list_functions(cls) -> List[str]:
        """返回已注册的函数名称列表。"""
        return sorted(cls._functions.keys())

    @classmethod
    def list_namespaces(cls) -> List[str]:
        """返回已注册的命名空间列表。"""
        return sorted({d.namespace for d in cls._functions.values()})
