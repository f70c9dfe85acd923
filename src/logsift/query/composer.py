"""Query String 组合器模块."""

from __future__ import annotations

import logging

from luqum.exceptions import ParseError
from luqum.parser import lexer, parser
from luqum.tree import Item

from logsift.exceptions import QueryStringParseError
from logsift.query.utils import escape_field_name, quote_phrase

logger = logging.getLogger(__name__)


class QueryComposer:
    """
    Query String 组合器.

    基于 luqum 校验用户输入的查询，并在已有查询后追加字段过滤条件
    （"只看该值" / "排除该值"）。

    使用示例:
        composer = QueryComposer()

        query = composer.append_filter("", "hostname", "web-1")
        # 输出: hostname:"web-1"

        query = composer.append_filter(query, "level", "debug", exclude=True)
        # 输出: (hostname:"web-1") AND NOT level:"debug"
    """

    # 过滤条件模板
    INCLUDE_TEMPLATE = "{field}:{value}"
    EXCLUDE_TEMPLATE = "NOT {field}:{value}"

    def parse(self, query: str) -> Item | None:
        """
        解析 Query String 为语法树.

        Args:
            query: 查询文本

        Returns:
            语法树，空查询返回 None

        Raises:
            QueryStringParseError: 解析失败时抛出
        """
        if not query or not query.strip():
            return None
        try:
            return parser.parse(query, lexer=lexer)
        except ParseError as e:
            raise QueryStringParseError(f"Failed to parse query string: {e}") from e

    def validate(self, query: str) -> str:
        """
        校验 Query String，返回去除首尾空白后的文本.

        Raises:
            QueryStringParseError: 解析失败时抛出
        """
        self.parse(query)
        return query.strip() if query else ""

    def filter_clause(self, field: str, value: str, exclude: bool = False) -> str:
        """
        构建单个字段过滤条件.

        Args:
            field: 字段名
            value: 字段值（精确匹配）
            exclude: 是否排除该值

        Returns:
            如 hostname:"web-1" 或 NOT hostname:"web-1"
        """
        if not field or not field.strip():
            raise ValueError("字段名不能为空")

        template = self.EXCLUDE_TEMPLATE if exclude else self.INCLUDE_TEMPLATE
        return template.format(field=escape_field_name(field.strip()), value=quote_phrase(value))

    def append_filter(
        self,
        current: str,
        field: str,
        value: str,
        exclude: bool = False,
    ) -> str:
        """
        在已有查询后追加过滤条件.

        已有查询为空时直接返回过滤条件，否则用括号包裹已有查询以确保优先级。

        Args:
            current: 当前查询文本
            field: 字段名
            value: 字段值
            exclude: 是否排除该值

        Returns:
            新的查询文本

        Raises:
            QueryStringParseError: 当前查询无法解析时抛出
        """
        current = self.validate(current)
        clause = self.filter_clause(field, value, exclude=exclude)
        if not current:
            result = clause
        else:
            result = f"({current}) AND {clause}"

        logger.debug(f"追加过滤条件: {clause} -> {result}")
        return result
