"""
文档获取辅助模块

提供统一的接口，从已注册的函数获取文档信息，用于文档展示。
"""

from typing import Any, Dict, List, Optional

from core.registry import FunctionRegistry


class FunctionDocInfo:
    """函数文档信息"""

    def __init__(
        self,
        name: str,
        namespace: str,
        chinese_name: str,
        description: str,
        doc: str,
        params_table: str,
        return_type: str,
    ):
        """
        初始化函数文档信息。

        Args:
            name: 函数名称（不含命名空间）
            namespace: 命名空间
            chinese_name: 中文名称
            description: 一句话说明
            doc: 详细文档（markdown格式）
            params_table: 参数列表表格（markdown格式）
            return_type: 返回类型名称
        """
        self.name = name
        self.namespace = namespace
        self.chinese_name = chinese_name
        self.description = description
        self.doc = doc
        self.params_table = params_table
        self.return_type = return_type

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}:{self.name}"

    def to_dict(self) -> Dict[str, str]:
        """转换为字典格式，便于JSON序列化"""
        return {
            "name": self.name,
            "namespace": self.namespace,
            "qualified_name": self.qualified_name,
            "chinese_name": self.chinese_name,
            "description": self.description,
            "doc": self.doc,
            "params_table": self.params_table,
            "return_type": self.return_type,
        }


class DocHelper:
    """
    文档获取辅助类

    文档元数据挂在 FunctionDescriptor.doc_metadata 上；没有元数据的函数
    仍可从描述符本身生成最基本的文档。
    """

    @staticmethod
    def get_function_list() -> List[str]:
        """
        获取所有已注册的函数名称列表。

        Returns:
            带命名空间的函数名称列表（如 ["math:cosh", "math:log"]）
        """
        return FunctionRegistry.list_functions()

    @staticmethod
    def get_function_doc(function_name: str) -> Optional[FunctionDocInfo]:
        """
        获取指定函数的文档信息。

        Args:
            function_name: 带命名空间的函数名称（如 "math:log"）

        Returns:
            FunctionDocInfo 对象，函数不存在时返回 None
        """
        descriptor = FunctionRegistry.get_function(function_name)
        if descriptor is None:
            return None

        metadata: Dict[str, Any] = descriptor.doc_metadata or {}
        return FunctionDocInfo(
            name=descriptor.name,
            namespace=descriptor.namespace,
            chinese_name=metadata.get("chinese_name", descriptor.name),
            description=metadata.get("description", ""),
            doc=metadata.get("doc", ""),
            params_table=metadata.get("params_table", ""),
            return_type=str(descriptor.return_type.value),
        )

    @staticmethod
    def get_all_function_docs() -> Dict[str, FunctionDocInfo]:
        """
        获取所有函数的文档信息。

        Returns:
            字典，键为带命名空间的函数名称，值为 FunctionDocInfo 对象
        """
        result = {}
        for function_name in DocHelper.get_function_list():
            doc_info = DocHelper.get_function_doc(function_name)
            if doc_info:
                result[function_name] = doc_info
        return result
