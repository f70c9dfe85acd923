"""搜索请求数据模型定义模块."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from urllib.parse import urlencode

from logsift.choices import TimeRangeChoice
from logsift.time_spec import TimeRange, format_instant, to_utc


@dataclass(frozen=True)
class SearchRequest:
    """搜索请求.

    Attributes:
        start: 开始时间（UTC）
        end: 结束时间（UTC）
        query: 用户输入的原始查询文本
        generation: 请求序号，用于丢弃过期的响应
    """

    start: datetime
    end: datetime
    query: str = ""
    generation: int = 0

    def __post_init__(self) -> None:
        """规范化为 UTC."""
        object.__setattr__(self, "start", to_utc(self.start))
        object.__setattr__(self, "end", to_utc(self.end))

    @classmethod
    def from_choice(
        cls,
        choice: TimeRangeChoice,
        query: str,
        now: datetime,
        generation: int = 0,
    ) -> SearchRequest:
        """以同一个 now 解析选项并构建请求."""
        time_range = choice.resolve(now)
        return cls(
            start=time_range.start,
            end=time_range.end,
            query=query,
            generation=generation,
        )

    def to_params(self) -> dict[str, str]:
        """转换为搜索接口参数，start/end 为 UTC ISO-8601，query 原样传递."""
        return {
            "start": format_instant(self.start),
            "end": format_instant(self.end),
            "query": self.query,
        }

    def to_url(self, base_url: str) -> str:
        """拼接完整的请求 URL."""
        separator = "&" if "?" in base_url else "?"
        return f"{base_url}{separator}{urlencode(self.to_params())}"

    def time_range(self, field: str = "@timestamp") -> TimeRange:
        """请求对应的时间范围."""
        return TimeRange(start=self.start, end=self.end, field=field)
