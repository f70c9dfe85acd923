"""日志表格投影实现模块."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime

from logsift.core import ChangeAxis, ChangeKind, ChangeNotifier, StructuralChange
from logsift.exceptions import RowIndexError

from .models import LogEvent

logger = logging.getLogger(__name__)


class LogTableProjection:
    """将日志事件序列投影为列可变的表格.

    列只是对事件字段的"视图"：哪些字段存在由数据决定，哪些字段显示由调用方
    按名称切换，切换列不需要重新查询或解析数据。

    特性:
    - 列按名称切换（按值查找，不保存索引）
    - 事件整体替换，不做增量比较
    - 事件缺少某列字段时显示为空字符串

    使用示例:
        projection = LogTableProjection(["host", "msg"])
        projection.set_events([LogEvent(timestamp=now, fields={"host": "h1"})])

        projection.cell_value(0, "host")  # "h1"
        projection.cell_value(0, "msg")   # ""

        projection.toggle_column("msg")   # 移除 msg 列
    """

    def __init__(self, columns: Iterable[str] | None = None) -> None:
        """
        初始化投影.

        Args:
            columns: 初始显示列
        """
        self._columns: list[str] = _unique(columns or [])
        self._events: list[LogEvent] = []
        self.changes = ChangeNotifier()

    # ========== 列操作 ==========

    @property
    def columns(self) -> tuple[str, ...]:
        """当前显示列（按显示顺序）."""
        return tuple(self._columns)

    def column_count(self) -> int:
        """显示列数量."""
        return len(self._columns)

    def column_name(self, index: int) -> str:
        """
        获取指定位置的列名.

        Raises:
            RowIndexError: 列索引越界
        """
        if not 0 <= index < len(self._columns):
            raise RowIndexError(f"列索引越界: {index}，当前列数: {len(self._columns)}")
        return self._columns[index]

    def set_columns(self, names: Sequence[str]) -> None:
        """
        整体替换显示列.

        与当前列完全相同时不做任何处理，否则发出一次列的 FULL_RESET 通知。
        重复的列名只保留第一次出现的位置。

        Args:
            names: 新的显示列
        """
        columns = _unique(names)
        if columns == self._columns:
            return

        self._columns = columns
        logger.debug(f"显示列已替换: {columns}")
        self.changes.notify(
            StructuralChange(
                ChangeKind.FULL_RESET, ChangeAxis.COLUMNS, 0, len(columns) - 1
            )
        )

    def toggle_column(self, name: str) -> None:
        """
        切换列的显示状态.

        列已显示时移除（按名称查找），否则追加到末尾；不会改变其他列的顺序。

        Args:
            name: 列名（字段名）
        """
        if name in self._columns:
            index = self._columns.index(name)
            del self._columns[index]
            logger.debug(f"移除列: {name} (位置 {index})")
            self.changes.notify(
                StructuralChange(
                    ChangeKind.COLUMNS_REMOVED, ChangeAxis.COLUMNS, index, index
                )
            )
        else:
            self._columns.append(name)
            index = len(self._columns) - 1
            logger.debug(f"追加列: {name} (位置 {index})")
            self.changes.notify(
                StructuralChange(
                    ChangeKind.COLUMNS_APPENDED, ChangeAxis.COLUMNS, index, index
                )
            )

    def is_visible(self, name: str) -> bool:
        """列是否正在显示."""
        return name in self._columns

    # ========== 行操作 ==========

    def set_events(self, events: Iterable[LogEvent]) -> None:
        """
        整体替换事件序列.

        总是发出一次行的 FULL_RESET 通知，不复用未变化的行。

        Args:
            events: 新的事件序列
        """
        self._events = list(events)
        logger.debug(f"事件已替换，共 {len(self._events)} 条")
        self.changes.notify(
            StructuralChange(
                ChangeKind.FULL_RESET, ChangeAxis.ROWS, 0, len(self._events) - 1
            )
        )

    def row_count(self) -> int:
        """事件行数."""
        return len(self._events)

    def size(self) -> int:
        """事件行数（row_count 的别名）."""
        return len(self._events)

    def cell_value(self, row: int, column_name: str) -> str:
        """
        获取单元格文本.

        Args:
            row: 行号
            column_name: 列名

        Returns:
            字段值，事件不含该字段时返回空字符串

        Raises:
            RowIndexError: 行号越界
        """
        return self._event(row).get(column_name, "")

    def cell(self, row: int, column: int) -> str:
        """按列位置获取单元格文本."""
        return self.cell_value(row, self.column_name(column))

    def row_values(self, row: int) -> list[str]:
        """获取一行中所有显示列的值（按列顺序）."""
        event = self._event(row)
        return [event.get(name, "") for name in self._columns]

    def row_timestamp(self, row: int) -> datetime:
        """获取行对应事件的时间，用于行头显示."""
        return self._event(row).timestamp

    def row_label(self, row: int) -> str:
        """行头文本，格式如 "2024-01-01 12:00:00.000"."""
        timestamp = self.row_timestamp(row)
        return timestamp.strftime("%Y-%m-%d %H:%M:%S.") + f"{timestamp.microsecond // 1000:03d}"

    def row_record(self, row: int) -> LogEvent:
        """获取完整事件（包含未显示的字段），用于详情视图."""
        return self._event(row)

    def available_fields(self) -> list[str]:
        """所有事件中出现过的字段名（排序后）."""
        names: set[str] = set()
        for event in self._events:
            names.update(event.fields)
        return sorted(names)

    def _event(self, row: int) -> LogEvent:
        if not 0 <= row < len(self._events):
            raise RowIndexError(f"行号越界: {row}，当前行数: {len(self._events)}")
        return self._events[row]


def _unique(names: Iterable[str]) -> list[str]:
    """去重并保持首次出现的顺序."""
    return list(dict.fromkeys(names))
