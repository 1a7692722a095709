"""
运行查询配置并打印输出事件

运行方式：
    python run_query.py [查询配置.yaml] [事件.csv]

默认使用 config/math_demo.yaml 与 config/math_demo_events.csv。
"""

import pathlib
import sys

# 导入函数（触发注册）
import functions  # noqa: F401

from core.engine import QueryEngine
from utils.event_reader import read_events
from utils.logger import close_logger


CONFIG_DIR = pathlib.Path(__file__).parent / "config"


def run_query(config_path: pathlib.Path, events_path: pathlib.Path) -> None:
    """运行查询并逐行打印输出事件。"""
    engine = QueryEngine.from_file(config_path)
    output_definition = engine.output_definition()

    print("=" * 60)
    print(f"{engine.config.stream.name} -> {output_definition.name}")
    print("输出属性: " + ", ".join(
        f"{name} {attr_type.value}" for name, attr_type in output_definition.attributes.items()
    ))
    print("=" * 60)

    events = read_events(events_path, engine.config.stream)
    for event in events:
        print(engine.process(event))


if __name__ == "__main__":
    args = sys.argv[1:]
    config_path = pathlib.Path(args[0]) if len(args) > 0 else CONFIG_DIR / "math_demo.yaml"
    events_path = pathlib.Path(args[1]) if len(args) > 1 else CONFIG_DIR / "math_demo_events.csv"
    try:
        run_query(config_path, events_path)
    finally:
        close_logger()
