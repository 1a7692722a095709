"""
CSV 事件读取与函数文档测试
"""

import pathlib
import sys

import pytest

# 添加项目根目录到路径
project_root = pathlib.Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import functions  # noqa: F401

from core.attribute import AttributeType
from core.engine import QueryEngine
from core.expression import StreamDefinition
from utils.doc_helper import DocHelper
from utils.event_reader import convert_cell, read_events


DEFINITION = StreamDefinition(
    name="InValueStream",
    attributes={
        "count": AttributeType.INT,
        "value": AttributeType.DOUBLE,
        "text": AttributeType.STRING,
        "flag": AttributeType.BOOL,
    },
)


# ---- CSV 事件 -------------------------------------------------------------
def test_convert_cell():
    assert convert_cell("3", AttributeType.LONG) == 3
    assert convert_cell("2.5", AttributeType.FLOAT) == 2.5
    assert convert_cell("abc", AttributeType.STRING) == "abc"
    assert convert_cell("true", AttributeType.BOOL) is True
    assert convert_cell("", AttributeType.DOUBLE) is None
    assert convert_cell(None, AttributeType.STRING) is None
    assert convert_cell(" -7 ", AttributeType.INT) == -7
    assert convert_cell("9223372036854775807", AttributeType.LONG) == 2 ** 63 - 1
    assert convert_cell("1.5d", AttributeType.DOUBLE) == 1.5


@pytest.mark.parametrize(
    "text, attr_type",
    [
        ("1_000", AttributeType.INT),
        ("\u0661\u0662\u0663", AttributeType.INT),
        ("\uff11\uff12", AttributeType.LONG),
        ("\uff11\uff12", AttributeType.DOUBLE),
        ("1_000.5", AttributeType.DOUBLE),
        ("inf", AttributeType.FLOAT),
        ("2.0", AttributeType.INT),
        ("3000000000", AttributeType.INT),
        ("9223372036854775808", AttributeType.LONG),
        ("-9223372036854775809", AttributeType.LONG),
    ],
)
def test_convert_cell_rejects(text, attr_type):
    with pytest.raises(ValueError):
        convert_cell(text, attr_type)


def test_read_events(tmp_path):
    path = tmp_path / "events.csv"
    path.write_text(
        "count,value,text,flag,extra\n"
        "1,5.6,123,true,ignored\n"
        ",,,,\n",
        encoding="utf-8",
    )
    events = read_events(path, DEFINITION)
    assert events == [
        {"count": 1, "value": 5.6, "text": "123", "flag": True},
        {"count": None, "value": None, "text": None, "flag": None},
    ]


def test_read_events_missing_column(tmp_path):
    path = tmp_path / "events.csv"
    path.write_text("value\n1.0\n", encoding="utf-8")
    assert read_events(path, DEFINITION) == [
        {"count": None, "value": 1.0, "text": None, "flag": None}
    ]


def test_read_events_bad_cell(tmp_path):
    path = tmp_path / "events.csv"
    path.write_text("count,value\n1,2.0\nx,3.0\n", encoding="utf-8")
    with pytest.raises(ValueError, match="第 3 行"):
        read_events(path, DEFINITION)


def test_read_events_int_out_of_range(tmp_path):
    path = tmp_path / "events.csv"
    path.write_text("count\n2147483648\n", encoding="utf-8")
    with pytest.raises(ValueError, match="第 2 行列 count"):
        read_events(path, DEFINITION)


def test_demo_events_run_through_demo_query():
    engine = QueryEngine.from_file(project_root / "config" / "math_demo.yaml")
    events = read_events(project_root / "config" / "math_demo_events.csv", engine.config.stream)
    results = engine.process_all(events)
    assert len(results) == len(events)
    assert results[0]["copysignValue"] == -5.6
    assert results[2]["sign"] == 0
    # inValue1 为空的事件：依赖它的输出为 None
    assert results[3]["coshValue"] is None
    assert results[3]["sign"] == -1


# ---- 文档 -----------------------------------------------------------------
def test_function_list():
    names = DocHelper.get_function_list()
    assert "math:parseDouble" in names
    assert names == sorted(names)


def test_function_doc():
    doc = DocHelper.get_function_doc("math:log")
    assert doc is not None
    assert doc.qualified_name == "math:log"
    assert doc.return_type == "double"
    assert "5.08746284125034" in doc.doc
    assert "base" in doc.params_table
    data = doc.to_dict()
    assert data["namespace"] == "math"
    assert data["chinese_name"] == "对数"


def test_signum_doc_return_type():
    assert DocHelper.get_function_doc("math:signum").return_type == "int"


def test_unknown_function_doc():
    assert DocHelper.get_function_doc("math:tanh") is None


def test_all_math_functions_documented():
    docs = DocHelper.get_all_function_docs()
    for name in ["copySign", "cosh", "exp", "log", "parseDouble", "signum"]:
        info = docs[f"math:{name}"]
        assert info.doc
        assert info.params_table
        assert info.description
