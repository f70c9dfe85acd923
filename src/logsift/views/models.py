"""视图快照数据模型定义模块."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from logsift.time_spec import TimeSpec, deserialize
from logsift.typing import SerializedTimeSpec


@dataclass
class ViewSnapshot:
    """已保存的视图.

    持久化格式与键名: columns / query / start / end，
    其中 start、end 为 TimeSpec 序列化后的字符串列表。

    Attributes:
        columns: 显示列，None 表示未保存显示列
        query: 查询文本，None 表示未保存查询
        start: 序列化的开始时间，None 表示未保存时间范围
        end: 序列化的结束时间
    """

    columns: list[str] | None = None
    query: str | None = None
    start: SerializedTimeSpec | None = None
    end: SerializedTimeSpec | None = None

    @classmethod
    def capture(
        cls,
        columns: list[str],
        query: str | None = None,
        time_range: tuple[TimeSpec, TimeSpec] | None = None,
    ) -> ViewSnapshot:
        """根据当前状态创建快照."""
        start, end = (None, None)
        if time_range is not None:
            start, end = time_range[0].serialize(), time_range[1].serialize()
        return cls(columns=list(columns), query=query, start=start, end=end)

    @property
    def has_time_range(self) -> bool:
        """是否保存了时间范围."""
        return self.start is not None and self.end is not None

    def time_range(self) -> tuple[TimeSpec, TimeSpec] | None:
        """
        还原时间范围.

        Returns:
            (start, end)，未保存时返回 None

        Raises:
            TimeSpecFormatError: 保存的时间范围格式错误
        """
        if not self.has_time_range:
            return None
        return deserialize(self.start), deserialize(self.end)

    def to_dict(self) -> dict[str, Any]:
        """序列化为字典."""
        return {
            "columns": None if self.columns is None else list(self.columns),
            "query": self.query,
            "start": None if self.start is None else list(self.start),
            "end": None if self.end is None else list(self.end),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ViewSnapshot:
        """从字典反序列化."""
        columns = data.get("columns")
        start = data.get("start")
        end = data.get("end")
        return cls(
            columns=None if columns is None else [str(name) for name in columns],
            query=data.get("query"),
            start=None if start is None else [str(token) for token in start],
            end=None if end is None else [str(token) for token in end],
        )
