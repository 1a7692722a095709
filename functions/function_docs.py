"""
函数文档元数据

为 math 命名空间的函数提供文档元数据，用于文档展示（DocHelper）。
每条元数据包含说明、参数表格以及一个完整的查询示例。
"""

from typing import Any, Dict, Optional


FUNCTION_DOCS: Dict[str, Dict[str, Any]] = {
    "copySign": {
        "name": "copySign",
        "namespace": "math",
        "chinese_name": "复制符号",
        "description": "返回一个数值，其大小取自 magnitude，符号取自 sign。",
        "doc": """
# math:copySign 函数

返回 magnitude 的绝对值，并带上 sign 的符号。

## 使用示例

```
stream: InValueStream (inValue1 double, inValue2 double)
select: math:copySign(inValue1, inValue2) as copysignValue
```

copySign(5.6, -3.0) 返回 -5.6。
""",
        "params_table": """
| 参数名 | 含义 | 类型 |
|--------|------|------|
| magnitude | 结果取该参数的大小 | int、long、float 或 double |
| sign | 结果取该参数的符号 | int、long、float 或 double |
""",
    },
    "cosh": {
        "name": "cosh",
        "namespace": "math",
        "chinese_name": "双曲余弦",
        "description": "返回 p1（弧度）的双曲余弦值。",
        "doc": """
# math:cosh 函数

计算输入值的双曲余弦，输入为弧度。

## 使用示例

```
stream: InValueStream (inValue double)
select: math:cosh(inValue) as cosValue
```

cosh(6.0) 返回 201.7156361224559。
""",
        "params_table": """
| 参数名 | 含义 | 类型 |
|--------|------|------|
| p1 | 需要计算双曲余弦的值（弧度） | int、long、float 或 double |
""",
    },
    "exp": {
        "name": "exp",
        "namespace": "math",
        "chinese_name": "指数",
        "description": "返回自然常数 e 的 p1 次幂。",
        "doc": """
# math:exp 函数

计算 e 的 p1 次幂，溢出时返回 inf。

## 使用示例

```
stream: InValueStream (inValue double)
select: math:exp(inValue) as expValue
```

exp(10.23) 返回 27722.51006805505。
""",
        "params_table": """
| 参数名 | 含义 | 类型 |
|--------|------|------|
| p1 | 指数 | int、long、float 或 double |
""",
    },
    "log": {
        "name": "log",
        "namespace": "math",
        "chinese_name": "对数",
        "description": "返回 number 以 base 为底的对数。",
        "doc": """
# math:log 函数

计算 ln(number) / ln(base)。

## 注意

- base 为 1 时对数无定义，抛出运行期错误。
- number 或 base 不为正数时按浮点规则得到 NaN 或 inf，不抛出错误。

## 使用示例

```
stream: InValueStream (number double, base double)
select: math:log(number, base) as logValue
```

log(34, 2) 返回 5.08746284125034。
""",
        "params_table": """
| 参数名 | 含义 | 类型 |
|--------|------|------|
| number | 真数 | int、long、float 或 double |
| base | 底数（不能为 1） | int、long、float 或 double |
""",
    },
    "parseDouble": {
        "name": "parseDouble",
        "namespace": "math",
        "chinese_name": "解析浮点数",
        "description": "将字符串解析为 double。",
        "doc": """
# math:parseDouble 函数

将十进制字符串转换为 double。

## 注意

- 输入为 None 时抛出运行期错误（不会返回 None）。
- 非法字符串抛出解析错误。

## 使用示例

```
stream: InValueStream (inValue string)
select: math:parseDouble(inValue) as output
```

parseDouble("123") 返回 123.0。
""",
        "params_table": """
| 参数名 | 含义 | 类型 |
|--------|------|------|
| p1 | 需要转换的字符串 | string |
""",
    },
    "signum": {
        "name": "signum",
        "namespace": "math",
        "chinese_name": "符号",
        "description": "正数返回 1，零返回 0，负数返回 -1。",
        "doc": """
# math:signum 函数

判断输入值的符号，结果为整数。

## 使用示例

```
stream: InValueStream (inValue double)
select: math:signum(inValue) as sign
```

signum(-6.32) 返回 -1。
""",
        "params_table": """
| 参数名 | 含义 | 类型 |
|--------|------|------|
| p1 | 需要判断符号的值 | int、long、float 或 double |
""",
    },
}


def get_function_doc_metadata(name: str) -> Optional[Dict[str, Any]]:
    """
    获取函数的文档元数据。

    Args:
        name: 函数名称，可以带命名空间（"math:log"）或不带（"log"）
    """
    _, _, short_name = name.rpartition(":")
    return FUNCTION_DOCS.get(short_name)
