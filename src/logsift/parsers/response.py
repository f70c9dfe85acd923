"""
搜索响应解析器.

提供将搜索接口响应（或 Elasticsearch 原始响应）解码为日志事件、字段统计
和时间直方图的功能.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from logsift.parsers.exceptions import EventDecodeError, ResponseParseError
from logsift.parsers.types import (
    CountBucket,
    FieldSummary,
    FieldValueCount,
    SearchResult,
)
from logsift.projection import LogEvent, stringify_value
from logsift.time_spec import to_utc
from logsift.typing import PayloadDict

# 模块级别日志记录器
logger = logging.getLogger(__name__)


class SearchResponseParser:
    """
    搜索响应解析器.

    搜索接口响应格式:
        {
            "events": [{"timestamp": "...", "id": 1, "source": {...}}, ...],
            "fields": {"hostname": {"web-1": 42, "web-2": 8}, ...},
            "counts": {"2024-01-01T12:00:00Z": 3, ...}
        }

    特性:
    - 时间统一转换为 UTC
    - 字段值在解码时一次性转换为字符串
    - 宽松模式下跳过无法解码的事件并记录日志

    使用示例:
        parser = SearchResponseParser()
        result = parser.parse(payload)

        projection.set_events(result.events)
        for summary in result.fields:
            print(summary.key, summary.values[:3])
    """

    def __init__(self, strict: bool = False, time_field: str = "@timestamp") -> None:
        """
        初始化解析器.

        Args:
            strict: 严格模式，事件解码失败时抛出异常而不是跳过
            time_field: Elasticsearch 原始文档中的时间字段名
        """
        self._strict = strict
        self._time_field = time_field

    # ========== 搜索接口响应 ==========

    def parse(self, payload: Any) -> SearchResult:
        """
        解析搜索接口响应.

        Args:
            payload: 响应字典（或带 to_dict 方法的对象）

        Returns:
            SearchResult 对象

        Raises:
            ResponseParseError: 响应结构不合法
            EventDecodeError: 严格模式下事件解码失败
        """
        data = self._ensure_dict(payload)

        events, skipped = self._decode_all(data.get("events") or [], self.decode_event)
        return SearchResult(
            events=events,
            fields=self.parse_fields(data.get("fields") or {}),
            counts=self.parse_counts(data.get("counts") or {}),
            skipped=skipped,
        )

    def decode_event(self, item: Any) -> LogEvent:
        """
        解码单条事件.

        支持 "source" 或 "fields" 作为字段容器.

        Raises:
            EventDecodeError: 缺少时间、时间无法解析或字段不是映射
        """
        if not isinstance(item, Mapping):
            raise EventDecodeError(f"事件必须是对象: {item!r}")
        if "timestamp" not in item:
            raise EventDecodeError(f"事件缺少 timestamp: {item!r}")

        source = item.get("source", item.get("fields", {}))
        if source is None:
            source = {}
        if not isinstance(source, Mapping):
            raise EventDecodeError(f"事件字段必须是对象: {source!r}")

        event_id = item.get("id")
        return LogEvent(
            timestamp=parse_timestamp(item["timestamp"]),
            fields=source,
            event_id=None if event_id is None else str(event_id),
        )

    def parse_fields(self, fields: Any) -> list[FieldSummary]:
        """
        解析字段高频取值.

        Args:
            fields: {字段名: {取值: 次数}}

        Returns:
            按字段名排序的 FieldSummary 列表
        """
        if not isinstance(fields, Mapping):
            raise ResponseParseError(f"fields 必须是对象: {fields!r}")

        summaries: list[FieldSummary] = []
        for key in sorted(fields):
            values = fields[key]
            if not isinstance(values, Mapping):
                logger.warning(f"跳过无效字段统计: {key}={values!r}")
                continue
            counts: list[FieldValueCount] = []
            for value, count in values.items():
                try:
                    counts.append(
                        FieldValueCount(value=stringify_value(value), count=int(count))
                    )
                except (TypeError, ValueError) as e:
                    if self._strict:
                        raise ResponseParseError(
                            f"无效的字段统计: {key}.{value}={count!r}"
                        ) from e
                    logger.warning(f"跳过无效的字段统计: {key}.{value}={count!r}, 错误: {e}")
            counts.sort(key=lambda item: (-item.count, item.value))
            summaries.append(FieldSummary(key=str(key), values=counts))
        return summaries

    def parse_counts(self, counts: Any) -> list[CountBucket]:
        """
        解析时间直方图.

        Args:
            counts: {ISO 时间: 次数}

        Returns:
            按时间排序的 CountBucket 列表
        """
        if not isinstance(counts, Mapping):
            raise ResponseParseError(f"counts 必须是对象: {counts!r}")

        buckets: list[CountBucket] = []
        for key, count in counts.items():
            try:
                buckets.append(CountBucket(timestamp=parse_timestamp(key), count=int(count)))
            except (EventDecodeError, TypeError, ValueError) as e:
                if self._strict:
                    raise ResponseParseError(f"无效的直方图桶: {key}={count!r}") from e
                logger.warning(f"跳过无效的直方图桶: {key}={count!r}, 错误: {e}")
        buckets.sort(key=lambda bucket: bucket.timestamp)
        return buckets

    # ========== Elasticsearch 原始响应 ==========

    def parse_hits(self, response: Any) -> list[LogEvent]:
        """
        解析 Elasticsearch 原始响应中的命中文档.

        时间取自 _source 中的时间字段，其余字段作为事件字段.

        Args:
            response: ES 原始响应（dict 或 Response 对象）

        Returns:
            日志事件列表
        """
        response_dict = self._ensure_dict(response)
        hits = response_dict.get("hits", {}).get("hits", [])
        events, _ = self._decode_all(hits, self.decode_hit)
        return events

    def decode_hit(self, hit: Any) -> LogEvent:
        """
        解码单个 ES 命中文档.

        Raises:
            EventDecodeError: 文档缺少时间字段
        """
        if not isinstance(hit, Mapping):
            raise EventDecodeError(f"命中文档必须是对象: {hit!r}")
        source = dict(hit.get("_source") or {})
        if self._time_field not in source:
            raise EventDecodeError(f"文档缺少时间字段 {self._time_field}: {hit.get('_id')}")

        timestamp = parse_timestamp(source.pop(self._time_field))
        doc_id = hit.get("_id")
        return LogEvent(
            timestamp=timestamp,
            fields=source,
            event_id=None if doc_id is None else str(doc_id),
        )

    # ========== 内部辅助方法 ==========

    def _decode_all(
        self, items: Any, decoder: Callable[[Any], LogEvent]
    ) -> tuple[list[LogEvent], int]:
        """逐条解码，宽松模式下跳过失败的条目."""
        if not isinstance(items, list):
            raise ResponseParseError(f"事件列表必须是数组: {type(items)}")

        events: list[LogEvent] = []
        skipped = 0
        for index, item in enumerate(items):
            try:
                events.append(decoder(item))
            except EventDecodeError as e:
                if self._strict:
                    raise
                skipped += 1
                logger.warning(f"跳过无法解码的事件 #{index}: {e}")
        return events, skipped

    def _ensure_dict(self, response: Any) -> PayloadDict:
        """
        确保响应为字典格式.

        支持 elasticsearch Response 对象和原始字典.
        """
        if hasattr(response, "to_dict"):
            return response.to_dict()
        if isinstance(response, dict):
            return response
        raise ResponseParseError(f"不支持的响应类型: {type(response)}")


def parse_timestamp(value: Any) -> datetime:
    """
    解析事件时间.

    支持 ISO-8601 字符串（含 Z 或时区偏移）和毫秒级时间戳.

    Raises:
        EventDecodeError: 无法解析
    """
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, bool):
        raise EventDecodeError(f"无效的时间: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (ValueError, OSError, OverflowError) as e:
            raise EventDecodeError(f"无效的时间戳: {value!r}") from e
    if isinstance(value, str):
        try:
            return to_utc(datetime.fromisoformat(value.strip()))
        except ValueError as e:
            raise EventDecodeError(f"无法解析时间: {value!r}") from e
    raise EventDecodeError(f"无效的时间: {value!r}")
