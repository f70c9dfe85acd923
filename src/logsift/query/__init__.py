"""查询模块.

提供搜索请求、Query String 组合和 ES DSL 构建功能.
"""

from logsift.query.composer import QueryComposer
from logsift.query.dsl import SearchDslBuilder, histogram_interval
from logsift.query.models import SearchRequest
from logsift.query.utils import escape_field_name, quote_phrase

__all__ = [
    "SearchRequest",
    "QueryComposer",
    "SearchDslBuilder",
    "histogram_interval",
    "escape_field_name",
    "quote_phrase",
]
