"""搜索会话实现模块.

LogSearchSession 把时间范围选项、查询文本、日志表格投影和视图存储串联起来，
对应界面层的主窗口逻辑，但不涉及任何界面和网络操作。
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from elasticsearch.dsl import Search

from logsift.choices import TimeRangeChoice, TimeRangeChoiceList
from logsift.exceptions import RowIndexError
from logsift.parsers import CountBucket, FieldSummary, SearchResponseParser
from logsift.projection import LogTableProjection
from logsift.query import QueryComposer, SearchDslBuilder, SearchRequest
from logsift.time_spec import TimeSpec, TimeSpecFormatError, to_utc
from logsift.views import ViewSnapshot, ViewStore, ViewStoreError

from .models import SessionConfig

logger = logging.getLogger(__name__)


class LogSearchSession:
    """日志搜索会话.

    同一时间只有最新发出的请求"拥有"投影：较早请求的响应到达时会被丢弃。

    Args:
        config: 会话配置
        view_store: 视图存储，None 时不支持保存/读取视图
        now_func: 自定义获取当前时间的函数，主要用于测试
        search_factory: Search 对象工厂函数，如 lambda: Search(using=client, index="logs-*")

    使用示例:
        session = LogSearchSession(SessionConfig(), view_store=JsonFileViewStore(path))
        request = session.build_request()
        payload = transport.get(request.to_url(session.config.search_url))
        session.apply_response(request, payload)
    """

    def __init__(
        self,
        config: SessionConfig | None = None,
        view_store: ViewStore | None = None,
        now_func: Callable[[], datetime] | None = None,
        search_factory: Callable[[], Search] | None = None,
    ) -> None:
        self.config = config or SessionConfig()
        self.choices = TimeRangeChoiceList.with_defaults()
        self.projection = LogTableProjection(self.config.default_columns)
        self.query = ""
        self.fields: list[FieldSummary] = []
        self.counts: list[CountBucket] = []

        self._view_store = view_store
        self._now_func = now_func
        self._composer = QueryComposer()
        self._parser = SearchResponseParser(time_field=self.config.time_field)
        self._dsl_builder = SearchDslBuilder(
            search_factory=search_factory,
            time_field=self.config.time_field,
            composer=self._composer,
        )
        self._current_row = 0
        self._generation = 0

    def now(self) -> datetime:
        """获取当前时间（UTC）."""
        if self._now_func is not None:
            return to_utc(self._now_func())
        return datetime.now(tz=UTC)

    # ------------------------------------------------------------------
    # 时间范围
    # ------------------------------------------------------------------

    @property
    def current_row(self) -> int:
        return self._current_row

    @property
    def current_choice(self) -> TimeRangeChoice:
        return self.choices.at(self._current_row)

    def select_range(
        self,
        row: int,
        custom: tuple[TimeSpec, TimeSpec] | None = None,
    ) -> int:
        """
        选择时间范围.

        选择 "Custom ..." 行时必须提供自定义的 (start, end)，
        自定义范围按值去重后加入选项列表。

        Args:
            row: 显示行号
            custom: 自定义时间范围

        Returns:
            实际选中的行号

        Raises:
            ValueError: 选择 "Custom ..." 行但未提供自定义范围
            RowIndexError: 行号越界
        """
        if self.choices.is_custom_row(row):
            if custom is None:
                raise ValueError("选择自定义时间范围时必须提供 (start, end)")
            row = self.choices.add_choice(*custom)
        elif not 0 <= row < self.choices.size():
            raise RowIndexError(f"时间范围行号越界: {row}")

        self._current_row = row
        logger.debug(f"选中时间范围 #{row}: {self.choices.row_label(row)}")
        return row

    # ------------------------------------------------------------------
    # 查询
    # ------------------------------------------------------------------

    def set_query(self, query: str) -> None:
        """设置查询文本（会先校验语法）."""
        self.query = self._composer.validate(query)

    def append_filter(self, field: str, value: str, exclude: bool = False) -> str:
        """追加字段过滤条件，返回新的查询文本."""
        self.query = self._composer.append_filter(self.query, field, value, exclude=exclude)
        return self.query

    def build_request(self) -> SearchRequest:
        """以当前选中的时间范围和查询构建新的搜索请求."""
        self._generation += 1
        return SearchRequest.from_choice(
            self.current_choice,
            self.query,
            self.now(),
            generation=self._generation,
        )

    def build_search(self, request: SearchRequest, with_counts: bool = False) -> Search:
        """构建请求对应的 Elasticsearch 查询，事件数量上限取自配置."""
        return self._dsl_builder.build(
            request, size=self.config.max_events, with_counts=with_counts
        )

    def is_current(self, request: SearchRequest) -> bool:
        """请求是否为最新发出的请求."""
        return request.generation == self._generation

    def apply_response(self, request: SearchRequest, payload: Any) -> bool:
        """
        应用搜索响应.

        Returns:
            是否已应用；过期请求的响应会被丢弃并返回 False
        """
        if not self.is_current(request):
            logger.info(
                f"丢弃过期响应: generation={request.generation}, "
                f"最新 generation={self._generation}"
            )
            return False

        result = self._parser.parse(payload)
        self.projection.set_events(result.events)
        self.fields = result.fields
        self.counts = result.counts
        logger.debug(
            f"应用搜索响应: {len(result.events)} 条事件，跳过 {result.skipped} 条"
        )
        return True

    # ------------------------------------------------------------------
    # 列
    # ------------------------------------------------------------------

    def toggle_column(self, name: str) -> None:
        self.projection.toggle_column(name)

    def reset_columns(self) -> None:
        """恢复默认显示列."""
        self.projection.set_columns(self.config.default_columns)

    # ------------------------------------------------------------------
    # 视图
    # ------------------------------------------------------------------

    def view_names(self) -> list[str]:
        if self._view_store is None:
            return []
        return self._view_store.names()

    def save_view(self, name: str, save_query: bool = True, save_range: bool = True) -> ViewSnapshot:
        """
        保存当前视图.

        显示列总是保存；查询和时间范围按参数决定是否保存。
        """
        store = self._require_store()
        choice = self.current_choice
        snapshot = ViewSnapshot.capture(
            list(self.projection.columns),
            query=self.query if save_query else None,
            time_range=(choice.start, choice.end) if save_range else None,
        )
        store.save(name, snapshot)
        return snapshot

    def load_view(self, name: str) -> ViewSnapshot:
        """
        读取视图并应用.

        未保存查询时清空当前查询；保存了显示列（包括空列表）时总是应用。
        视图中的时间范围通过 add_choice 加入选项列表（按值去重）；
        格式错误的时间范围会被跳过并记录警告，不影响其余设置。

        Raises:
            ViewNotFoundError: 视图不存在
        """
        snapshot = self._require_store().load(name)

        self.query = snapshot.query or ""
        if snapshot.columns is not None:
            self.projection.set_columns(snapshot.columns)

        try:
            time_range = snapshot.time_range()
        except TimeSpecFormatError as e:
            logger.warning(f"视图 {name} 的时间范围格式错误，已跳过: {e}")
            time_range = None

        if time_range is not None:
            self._current_row = self.choices.add_choice(*time_range)

        logger.info(f"读取视图: {name}")
        return snapshot

    def _require_store(self) -> ViewStore:
        if self._view_store is None:
            raise ViewStoreError("未配置视图存储")
        return self._view_store
