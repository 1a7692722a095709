"""
查询执行引擎

一个查询 = 一个输入流定义 + 若干 select 表达式。

- 构造时编译所有 select 表达式（编译期校验，失败则查询无法创建）
- process() 对每个输入事件按顺序执行所有表达式，生成输出事件
"""

from __future__ import annotations

import pathlib
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from utils.logger import get_logger

from .errors import FunctionError
from .expression import ExpressionCompiler, ExpressionExecutor, StreamDefinition
from .parser import QueryConfig, QueryParser


logger = get_logger()


class QueryEngine:
    """
    查询执行引擎。

    特点：
    - 表达式只在构造时解析一次
    - 引擎本身不保存任何事件相关状态，process() 之间互不影响
    """

    def __init__(self, config: QueryConfig) -> None:
        self.config = config
        compiler = ExpressionCompiler(config.stream)
        self._executors: List[Tuple[str, ExpressionExecutor]] = [
            (item.name, compiler.compile(item.expression)) for item in config.select
        ]

        logger.info(
            "QueryEngine initialized: %s -> %s, %d select items",
            config.stream.name,
            config.insert_into,
            len(self._executors),
        )

    @classmethod
    def from_file(cls, path: str | pathlib.Path) -> "QueryEngine":
        """从 YAML 配置文件创建引擎。"""
        return cls(QueryParser().parse_file(path))

    def output_definition(self) -> StreamDefinition:
        """输出流定义：select 名称及对应表达式的返回类型。"""
        return StreamDefinition(
            name=self.config.insert_into,
            attributes={name: executor.return_type for name, executor in self._executors},
        )

    def process(self, event: Mapping[str, Any]) -> Dict[str, Any]:
        """
        处理一个输入事件。

        Args:
            event: {属性名: 值}，缺失的属性视为 None

        Returns:
            输出事件 {select 名称: 值}

        Raises:
            FunctionRuntimeError: 某个表达式执行失败
        """
        output: Dict[str, Any] = {}
        for name, executor in self._executors:
            try:
                output[name] = executor.execute(event)
            except FunctionError as exc:
                logger.error(
                    "Select item %s failed on event %r: %s", name, dict(event), exc
                )
                raise
        logger.debug("Processed event %r -> %r", dict(event), output)
        return output

    def process_all(self, events: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        """依次处理多个事件。"""
        return [self.process(event) for event in events]
