"""
工具模块：日志、CSV 事件读取、函数文档。
"""
