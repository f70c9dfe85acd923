"""时间范围选项列表实现模块."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from logsift.core import ChangeAxis, ChangeKind, ChangeNotifier, StructuralChange
from logsift.exceptions import RowIndexError
from logsift.time_spec import TimeSpec

from .models import DEFAULT_CHOICES, TimeRangeChoice

logger = logging.getLogger(__name__)


class TimeRangeChoiceList:
    """按插入顺序保存、按值去重的时间范围选项列表.

    列表作为下拉框的数据源：每个选项占一行，最后额外有一行
    "Custom ..."，该行没有对应的选项，调用方应在选中时提示用户输入自定义范围。

    示例:
        >>> choices = TimeRangeChoiceList()
        >>> choices.add_choice(RelativeTime(15, TimeUnit.MINUTES), NOW)
        0
        >>> choices.add_choice(RelativeTime(15, TimeUnit.MINUTES), NOW)
        0
        >>> choices.row_count()
        2
    """

    HEADER_LABEL = "Time Range"
    CUSTOM_LABEL = "Custom ..."

    def __init__(self, choices: Iterable[TimeRangeChoice] | None = None) -> None:
        self._data: list[TimeRangeChoice] = []
        self.changes = ChangeNotifier()
        for choice in choices or []:
            self.add_choice(choice.start, choice.end)

    @classmethod
    def with_defaults(cls) -> TimeRangeChoiceList:
        """创建带预置选项（最近 15 分钟 ~ 最近 1 年）的列表."""
        return cls(DEFAULT_CHOICES)

    def add_choice(self, start: TimeSpec, end: TimeSpec) -> int:
        """添加选项，已存在相等的选项时返回其索引.

        已有选项不会被移动位置。

        Returns:
            选项所在索引
        """
        index = self.index_of(start, end)
        if index is not None:
            return index

        self._data.append(TimeRangeChoice(start, end))
        index = len(self._data) - 1
        logger.debug(f"添加时间范围选项 #{index}: {self._data[index].label()}")
        self.changes.notify(
            StructuralChange(ChangeKind.ROWS_APPENDED, ChangeAxis.ROWS, index, index)
        )
        return index

    def index_of(self, start: TimeSpec, end: TimeSpec) -> int | None:
        """查找与给定起止时间相等的选项索引，不存在时返回 None."""
        wanted = TimeRangeChoice(start, end)
        for index, choice in enumerate(self._data):
            if choice == wanted:
                return index
        return None

    def size(self) -> int:
        """选项数量（不含 "Custom ..." 行）."""
        return len(self._data)

    def at(self, index: int) -> TimeRangeChoice:
        """获取指定索引的选项.

        Raises:
            RowIndexError: 索引不在 [0, size) 范围内
        """
        if not 0 <= index < len(self._data):
            raise RowIndexError(
                f"时间范围选项索引越界: {index}，当前数量: {len(self._data)}"
            )
        return self._data[index]

    # ------------------------------------------------------------------
    # 显示行
    # ------------------------------------------------------------------

    def row_count(self) -> int:
        """显示行数，包含最后的 "Custom ..." 行."""
        return len(self._data) + 1

    def is_custom_row(self, row: int) -> bool:
        """是否为 "Custom ..." 行."""
        return row == len(self._data)

    def choice_at_row(self, row: int) -> TimeRangeChoice | None:
        """获取显示行对应的选项，"Custom ..." 行返回 None.

        Raises:
            RowIndexError: 行号不在 [0, row_count) 范围内
        """
        if self.is_custom_row(row):
            return None
        return self.at(row)

    def row_label(self, row: int) -> str:
        """显示行文本."""
        choice = self.choice_at_row(row)
        if choice is None:
            return self.CUSTOM_LABEL
        return choice.label()

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[TimeRangeChoice]:
        return iter(list(self._data))

    def __contains__(self, choice: object) -> bool:
        return choice in self._data
