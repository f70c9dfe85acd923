"""时间范围选项数据模型定义模块."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from logsift.time_spec import NOW, RelativeTime, TimeRange, TimeSpec, TimeUnit, resolve_range


@dataclass(frozen=True)
class TimeRangeChoice:
    """时间范围选项，由起止两个时间描述组成.

    Attributes:
        start: 开始时间描述
        end: 结束时间描述
    """

    start: TimeSpec
    end: TimeSpec

    def label(self) -> str:
        """显示文本，如 "15 minutes ago to now"."""
        return f"{self.start.describe()} to {self.end.describe()}"

    def resolve(self, now: datetime, field: str = "@timestamp") -> TimeRange:
        """以同一个 now 解析为具体时间范围."""
        return resolve_range(self.start, self.end, now, field=field)


# 预置选项（开始时间，均截止到 now）
DEFAULT_CHOICES: list[TimeRangeChoice] = [
    TimeRangeChoice(RelativeTime(15, TimeUnit.MINUTES), NOW),
    TimeRangeChoice(RelativeTime(1, TimeUnit.HOURS), NOW),
    TimeRangeChoice(RelativeTime(4, TimeUnit.HOURS), NOW),
    TimeRangeChoice(RelativeTime(1, TimeUnit.DAYS), NOW),
    TimeRangeChoice(RelativeTime(1, TimeUnit.WEEKS), NOW),
    TimeRangeChoice(RelativeTime(1, TimeUnit.MONTHS), NOW),
    TimeRangeChoice(RelativeTime(1, TimeUnit.YEARS), NOW),
]
