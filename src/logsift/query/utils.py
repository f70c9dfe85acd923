"""
查询工具函数模块

提供 Query String 相关的工具函数
"""

import re

# 匹配需要转义的特殊字符：+ - = & | > < ! ( ) { } [ ] ^ " ~ * ? : \ / 空格
_SPECIAL_CHARS = re.compile(r'([+\-=&|><!(){}\[\]^"~*?\\:\/ ])')


def escape_field_name(name: str) -> str:
    r"""
    转义 Query String 字段名中的特殊字符。

    示例:
        >>> escape_field_name("hostname")
        'hostname'
        >>> escape_field_name("x-forwarded-for")
        'x\\-forwarded\\-for'
    """
    return _SPECIAL_CHARS.sub(r"\\\1", name)


def quote_phrase(value: str) -> str:
    r"""
    将值包装为 Query String 短语（精确匹配），转义反斜杠和双引号。

    示例:
        >>> quote_phrase('say "hi"')
        '"say \\"hi\\""'
    """
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
