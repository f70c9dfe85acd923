"""DSL 搜索构建器模块."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import timedelta
from typing import Any

from elasticsearch.dsl import Search

from logsift.query.composer import QueryComposer
from logsift.query.models import SearchRequest

# 模块级别日志记录器
logger = logging.getLogger(__name__)

# 直方图间隔：时间范围上限 -> 桶间隔
HISTOGRAM_INTERVALS: list[tuple[timedelta, str]] = [
    (timedelta(hours=1), "1s"),
    (timedelta(days=1), "1m"),
    (timedelta(days=30), "1h"),
]
DEFAULT_HISTOGRAM_INTERVAL = "1d"


def histogram_interval(duration: timedelta) -> str:
    """
    根据时间范围长度选择直方图桶间隔.

    - <= 1 小时: 秒
    - <= 1 天: 分钟
    - <= 30 天: 小时
    - 其他: 天
    """
    for limit, interval in HISTOGRAM_INTERVALS:
        if duration <= limit:
            return interval
    return DEFAULT_HISTOGRAM_INTERVAL


class SearchDslBuilder:
    """
    ES DSL 搜索构建器.

    将 SearchRequest 构建为 Elasticsearch Search 对象:
    - 时间范围过滤 (filter)
    - Query String 查询 (query)
    - 按时间倒序排列 (sort)
    - 数量限制 (size)
    - 时间直方图聚合 (aggregations，可选)

    使用示例:
        builder = SearchDslBuilder(
            search_factory=lambda: Search(index="logs-*"),
            time_field="@timestamp",
        )

        search = builder.build(request, size=500, with_counts=True)
        response = search.execute()
    """

    COUNTS_AGG_NAME = "counts"

    def __init__(
        self,
        search_factory: Callable[[], Search] | None = None,
        time_field: str = "@timestamp",
        composer: QueryComposer | None = None,
    ):
        """
        初始化构建器.

        Args:
            search_factory: Search 对象工厂函数，默认为不指定索引的 Search
            time_field: 时间字段名
            composer: 查询组合器，用于校验查询文本
        """
        self._search_factory = search_factory or Search
        self._time_field = time_field
        self._composer = composer or QueryComposer()

    def build(
        self,
        request: SearchRequest,
        size: int = 500,
        with_counts: bool = False,
    ) -> Search:
        """
        构建 Search 对象.

        Args:
            request: 搜索请求
            size: 返回事件数量上限
            with_counts: 是否添加时间直方图聚合

        Returns:
            Search 对象

        Raises:
            QueryStringParseError: 查询文本无法解析时抛出
        """
        search = self._search_factory()
        search = search.filter(
            "range", **request.time_range(self._time_field).to_filter()
        )

        query_string = self._composer.validate(request.query)
        if query_string:
            search = search.query("query_string", query=query_string)

        search = search.sort(f"-{self._time_field}")
        search = search[0 : max(0, size)]

        if with_counts:
            self._apply_counts(search, request)

        return search

    def _apply_counts(self, search: Search, request: SearchRequest) -> None:
        """
        应用时间直方图聚合.

        注意: search.aggs.bucket() 是原地修改，不需要重新赋值
        """
        time_range = request.time_range(self._time_field)
        interval = histogram_interval(request.end - request.start)
        bounds = time_range.to_params()
        search.aggs.bucket(
            self.COUNTS_AGG_NAME,
            "date_histogram",
            field=self._time_field,
            fixed_interval=interval,
            min_doc_count=0,
            extended_bounds={"min": bounds["start"], "max": bounds["end"]},
        )
        logger.debug(f"时间直方图间隔: {interval}")

    def to_dict(
        self,
        request: SearchRequest,
        size: int = 500,
        with_counts: bool = False,
    ) -> dict[str, Any]:
        """
        导出为字典格式的 DSL.

        Returns:
            字典格式的 DSL
        """
        return self.build(request, size=size, with_counts=with_counts).to_dict()
