"""结果解析器模块.

提供搜索响应的解码功能.
"""

from logsift.parsers.exceptions import EventDecodeError, ResponseParseError
from logsift.parsers.response import SearchResponseParser, parse_timestamp
from logsift.parsers.types import (
    CountBucket,
    FieldSummary,
    FieldValueCount,
    SearchResult,
)

__all__ = [
    "SearchResponseParser",
    "SearchResult",
    "FieldSummary",
    "FieldValueCount",
    "CountBucket",
    "parse_timestamp",
    "ResponseParseError",
    "EventDecodeError",
]
