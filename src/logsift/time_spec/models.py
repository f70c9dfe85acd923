"""时间描述数据模型定义模块.

TimeSpec 是一个和类型（sum type）：
- AbsoluteTime: 绝对时间点，统一保存为 UTC
- RelativeTime: 相对当前时间的偏移量（数量 + 单位）

两种变体都是不可变的值对象，按值比较、可哈希。
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any, Union

from logsift.typing import SerializedTimeSpec

# 序列化标记
ABSOLUTE_TAG = "absolute"
RELATIVE_TAG = "relative"

# 可表示的最早/最晚时间点（UTC）
EARLIEST = datetime.min.replace(tzinfo=UTC)
LATEST = datetime.max.replace(tzinfo=UTC)


class TimeUnit(Enum):
    """相对时间单位，值为每单位的固定秒数.

    月按 30 天、年按 365 天计算，不做日历运算。
    """

    MINUTES = 60
    HOURS = 3600
    DAYS = 86400
    WEEKS = 604800
    MONTHS = 2592000  # 30 天
    YEARS = 31536000  # 365 天

    @property
    def seconds(self) -> int:
        """每单位秒数，同时也是持久化时使用的单位编码."""
        return self.value

    @property
    def label(self) -> str:
        """单位的显示名称，如 "minutes"."""
        return self.name.lower()

    @classmethod
    def from_seconds(cls, seconds: int) -> TimeUnit:
        """根据单位编码（秒数）获取单位.

        Raises:
            ValueError: 不支持的单位编码
        """
        return cls(seconds)


def to_utc(dt: datetime) -> datetime:
    """规范化 datetime 为 UTC.

    - naive datetime 视为 UTC
    - tz-aware datetime 转换为 UTC
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def format_instant(dt: datetime) -> str:
    """格式化为 UTC ISO-8601 字符串，如 "2024-01-01T00:00:00Z".

    微秒为 0 时省略小数部分。
    """
    dt = to_utc(dt)
    if dt.microsecond:
        return dt.strftime("%Y-%m-%dT%H:%M:%S.%fZ")
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass(frozen=True)
class AbsoluteTime:
    """绝对时间点.

    Attributes:
        instant: 时间点，构造时规范化为 UTC

    示例:
        >>> spec = AbsoluteTime(datetime(2024, 1, 1, tzinfo=UTC))
        >>> spec.serialize()
        ['absolute', '2024-01-01T00:00:00Z']
    """

    instant: datetime

    def __post_init__(self) -> None:
        """规范化为 UTC."""
        if not isinstance(self.instant, datetime):
            raise TypeError(f"instant 必须是 datetime，当前类型: {type(self.instant)}")
        object.__setattr__(self, "instant", to_utc(self.instant))

    def resolve(self, now: datetime) -> datetime:
        """返回保存的时间点，与 now 无关."""
        return self.instant

    def serialize(self) -> SerializedTimeSpec:
        """序列化为 ["absolute", iso_utc]."""
        return [ABSOLUTE_TAG, format_instant(self.instant)]

    def describe(self) -> str:
        """本地时区的短格式显示."""
        return self.instant.astimezone().strftime("%x %H:%M")

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class RelativeTime:
    """相对当前时间的偏移.

    Attributes:
        magnitude: 偏移数量（有符号整数），0 表示 "now"
        unit: 时间单位

    示例:
        >>> RelativeTime(1, TimeUnit.WEEKS).serialize()
        ['relative', '1', '604800']
    """

    magnitude: int
    unit: TimeUnit = TimeUnit.MINUTES

    def __post_init__(self) -> None:
        """校验参数类型."""
        if isinstance(self.magnitude, bool) or not isinstance(self.magnitude, int):
            raise TypeError(f"magnitude 必须是整数，当前值: {self.magnitude!r}")
        if not isinstance(self.unit, TimeUnit):
            raise TypeError(f"unit 必须是 TimeUnit，当前值: {self.unit!r}")

    @property
    def offset(self) -> timedelta:
        """相对 now 向过去偏移的时长."""
        return timedelta(seconds=self.magnitude * self.unit.seconds)

    @property
    def is_now(self) -> bool:
        """数量为 0 时表示当前时间，与单位无关."""
        return self.magnitude == 0

    def resolve(self, now: datetime) -> datetime:
        """计算 now - magnitude * 单位秒数，结果为 UTC.

        超出 datetime 可表示范围时截断到最早或最晚的时间点。
        """
        try:
            return to_utc(now) - self.offset
        except OverflowError:
            return EARLIEST if self.magnitude > 0 else LATEST

    def serialize(self) -> SerializedTimeSpec:
        """序列化为 ["relative", magnitude, unit_seconds]."""
        return [RELATIVE_TAG, str(self.magnitude), str(self.unit.seconds)]

    def describe(self) -> str:
        """如 "15 minutes ago"，数量为 0 时为 "now"."""
        if self.is_now:
            return "now"
        return f"{self.magnitude} {self.unit.label} ago"

    def __str__(self) -> str:
        return self.describe()


# 时间描述和类型
TimeSpec = Union[AbsoluteTime, RelativeTime]

# 当前时间
NOW = RelativeTime(0, TimeUnit.MINUTES)


@dataclass
class TimeRange:
    """解析后的时间范围.

    Attributes:
        start: 开始时间（UTC）
        end: 结束时间（UTC）
        field: 时间字段名，默认为 "@timestamp"
    """

    start: datetime
    end: datetime
    field: str = "@timestamp"

    def to_dsl(self) -> dict[str, Any]:
        """转换为 ES DSL range 查询.

        Returns:
            ES DSL range 查询字典
        """
        return {"range": self.to_filter()}

    def to_filter(self) -> dict[str, Any]:
        """转换为 ES DSL filter 子句（不含外层 range key）."""
        return {
            self.field: {
                "gte": format_instant(self.start),
                "lte": format_instant(self.end),
                "format": "strict_date_optional_time||epoch_millis",
            }
        }

    def to_params(self) -> dict[str, str]:
        """转换为搜索接口的 start/end 参数."""
        return {
            "start": format_instant(self.start),
            "end": format_instant(self.end),
        }

    @property
    def duration_seconds(self) -> float:
        """返回时间范围的持续时间（秒）."""
        return (self.end - self.start).total_seconds()

    def __repr__(self) -> str:
        return (
            f"TimeRange(start={format_instant(self.start)}, "
            f"end={format_instant(self.end)}, "
            f"field='{self.field}')"
        )
