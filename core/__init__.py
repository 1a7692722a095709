"""
stream_math.core

查询执行相关模块：
- 属性类型 `attribute`
- 函数描述符与注册表 `function` / `registry`
- 表达式编译与执行 `expression`
- 查询配置解析 `parser`
- 查询执行引擎 `engine`
"""
