"""
结果解析器数据类型定义.

包含搜索响应、字段统计、时间直方图等数据类.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from logsift.projection import LogEvent


@dataclass(frozen=True)
class FieldValueCount:
    """
    字段取值计数.

    Attributes:
        value: 字段值
        count: 出现次数
    """

    value: str
    count: int


@dataclass
class FieldSummary:
    """
    单个字段的高频取值.

    Attributes:
        key: 字段名
        values: 取值列表，按次数降序、取值升序排列
    """

    key: str
    values: list[FieldValueCount] = field(default_factory=list)

    @property
    def total(self) -> int:
        """所有取值的次数之和."""
        return sum(item.count for item in self.values)

    def percentage(self, value: str, sample_size: int) -> float:
        """
        获取取值占样本的百分比.

        Args:
            value: 字段值
            sample_size: 样本数量（为 0 时返回 0.0）
        """
        if sample_size <= 0:
            return 0.0
        for item in self.values:
            if item.value == value:
                return item.count * 100.0 / sample_size
        return 0.0


@dataclass(frozen=True)
class CountBucket:
    """
    时间直方图的一个桶.

    Attributes:
        timestamp: 桶的起始时间（UTC）
        count: 事件数量
    """

    timestamp: datetime
    count: int


@dataclass
class SearchResult:
    """
    搜索响应解析结果.

    Attributes:
        events: 日志事件（保持响应中的顺序）
        fields: 字段高频取值，按字段名排序
        counts: 时间直方图，按时间排序
        skipped: 解码失败被跳过的事件数量
    """

    events: list[LogEvent] = field(default_factory=list)
    fields: list[FieldSummary] = field(default_factory=list)
    counts: list[CountBucket] = field(default_factory=list)
    skipped: int = 0

    def field_names(self) -> list[str]:
        """所有统计到的字段名."""
        return [summary.key for summary in self.fields]

    def get_field(self, key: str) -> FieldSummary | None:
        """获取指定字段的统计."""
        for summary in self.fields:
            if summary.key == key:
                return summary
        return None
