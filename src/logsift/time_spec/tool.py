"""时间描述核心实现模块.

提供反序列化、时间字符串解析以及时间范围解析功能。
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from .exceptions import InvalidTimeRangeError, TimeSpecFormatError
from .models import (
    ABSOLUTE_TAG,
    NOW,
    RELATIVE_TAG,
    AbsoluteTime,
    RelativeTime,
    TimeRange,
    TimeSpec,
    TimeUnit,
    format_instant,
    to_utc,
)

# 匹配有符号整数
_INTEGER_PATTERN = re.compile(r"-?[0-9]+")

# 相对时间表达式单位（区分大小写：m=分钟, M=月）
RELATIVE_EXPRESSION_UNITS: dict[str, TimeUnit] = {
    "m": TimeUnit.MINUTES,
    "h": TimeUnit.HOURS,
    "d": TimeUnit.DAYS,
    "w": TimeUnit.WEEKS,
    "M": TimeUnit.MONTHS,
    "y": TimeUnit.YEARS,
}


def deserialize(tokens: Sequence[str]) -> TimeSpec:
    """将持久化的字符串列表还原为 TimeSpec.

    Args:
        tokens: ["absolute", iso] 或 ["relative", magnitude, unit_seconds]

    Returns:
        AbsoluteTime 或 RelativeTime

    Raises:
        TimeSpecFormatError: 标记未知、长度不符、数字或时间无法解析
    """
    if isinstance(tokens, str) or not tokens:
        raise TimeSpecFormatError(f"无效的时间描述: {tokens!r}")

    kind = tokens[0]
    if kind == ABSOLUTE_TAG:
        if len(tokens) != 2:
            raise TimeSpecFormatError(f"绝对时间需要 2 个元素: {list(tokens)!r}")
        try:
            instant = datetime.fromisoformat(tokens[1])
        except (TypeError, ValueError) as e:
            raise TimeSpecFormatError(f"无法解析时间点: {tokens[1]!r}") from e
        return AbsoluteTime(instant)

    if kind == RELATIVE_TAG:
        if len(tokens) != 3:
            raise TimeSpecFormatError(f"相对时间需要 3 个元素: {list(tokens)!r}")
        magnitude = _parse_integer(tokens[1], "magnitude")
        unit_code = _parse_integer(tokens[2], "unit")
        try:
            unit = TimeUnit.from_seconds(unit_code)
        except ValueError as e:
            raise TimeSpecFormatError(f"未知的时间单位编码: {unit_code}") from e
        return RelativeTime(magnitude, unit)

    raise TimeSpecFormatError(f"未知的时间描述类型: {kind!r}")


def _parse_integer(token: str, name: str) -> int:
    if not isinstance(token, str) or not _INTEGER_PATTERN.fullmatch(token):
        raise TimeSpecFormatError(f"{name} 不是整数: {token!r}")
    return int(token)


def resolve_range(
    start: TimeSpec,
    end: TimeSpec,
    now: datetime,
    field: str = "@timestamp",
) -> TimeRange:
    """以同一个 now 解析起止时间描述.

    Args:
        start: 开始时间描述
        end: 结束时间描述
        now: 参考的当前时间
        field: 时间字段名

    Returns:
        TimeRange 对象

    Raises:
        InvalidTimeRangeError: 解析后开始时间晚于结束时间
    """
    start_dt = start.resolve(now)
    end_dt = end.resolve(now)
    if start_dt > end_dt:
        raise InvalidTimeRangeError(
            f"开始时间不能晚于结束时间: start={format_instant(start_dt)}, "
            f"end={format_instant(end_dt)}"
        )
    return TimeRange(start=start_dt, end=end_dt, field=field)


class TimeSpecParser:
    """时间描述解析工具.

    将用户输入的时间字符串解析为 TimeSpec，并以注入的当前时间解析范围。

    Args:
        time_field: 时间字段名，默认为 "@timestamp"
        now_func: 自定义获取当前时间的函数，主要用于测试。
                  默认使用 datetime.now(tz=UTC)

    示例:
        >>> parser = TimeSpecParser()
        >>> parser.parse("now-15m")
        RelativeTime(magnitude=15, unit=<TimeUnit.MINUTES: 60>)
        >>> parser.parse("2024-01-01T00:00:00Z")
        AbsoluteTime(instant=datetime.datetime(2024, 1, 1, 0, 0, tzinfo=datetime.timezone.utc))
    """

    # 匹配相对时间表达式的正则：now-<数字><单位>
    _RELATIVE_TIME_PATTERN = re.compile(r"^now-(\d+)([mhdwMy])$")

    # 支持的 ISO 8601 格式列表
    _ISO_FORMATS = [
        "%Y-%m-%dT%H:%M:%S.%fZ",
        "%Y-%m-%dT%H:%M:%SZ",
        "%Y-%m-%dT%H:%M:%S.%f",
        "%Y-%m-%dT%H:%M:%S",
        "%Y-%m-%d %H:%M:%S",
        "%Y-%m-%d %H:%M",
        "%Y-%m-%d",
    ]

    def __init__(
        self,
        time_field: str = "@timestamp",
        now_func: Callable[[], datetime] | None = None,
    ) -> None:
        self.time_field = time_field
        self._now_func = now_func

    def now(self) -> datetime:
        """获取当前时间（UTC）."""
        if self._now_func is not None:
            return to_utc(self._now_func())
        return datetime.now(tz=UTC)

    def parse(self, time_str: str) -> TimeSpec:
        """解析时间字符串为 TimeSpec.

        支持以下格式:
        - "now": 当前时间
        - 相对时间表达式: "now-15m", "now-4h", "now-1M"
        - 时间戳（秒级或毫秒级）: "1704067200", "1704067200000"
        - ISO 8601 格式: "2024-01-01T00:00:00Z", "2024-01-01"

        Raises:
            TimeSpecFormatError: 无法解析时间字符串
        """
        if not time_str or not isinstance(time_str, str):
            raise TimeSpecFormatError(f"无效的时间字符串: {time_str!r}")

        time_str = time_str.strip()

        if time_str.lower() == "now":
            return NOW

        match = self._RELATIVE_TIME_PATTERN.match(time_str)
        if match:
            value = int(match.group(1))
            unit = RELATIVE_EXPRESSION_UNITS[match.group(2)]
            return RelativeTime(value, unit)

        if time_str.isdecimal():
            return AbsoluteTime(self._parse_timestamp(int(time_str)))

        return AbsoluteTime(self._parse_datetime_string(time_str))

    def parse_range(self, start_str: str, end_str: str) -> tuple[TimeSpec, TimeSpec]:
        """解析起止时间字符串对.

        Raises:
            TimeSpecFormatError: 无法解析时间字符串
            InvalidTimeRangeError: 当前时间下开始时间晚于结束时间
        """
        start = self.parse(start_str)
        end = self.parse(end_str)
        # 校验顺序
        self.resolve_range(start, end)
        return start, end

    def resolve_range(self, start: TimeSpec, end: TimeSpec) -> TimeRange:
        """以当前时间解析起止时间描述."""
        return resolve_range(start, end, self.now(), field=self.time_field)

    def _parse_timestamp(self, timestamp: int) -> datetime:
        """解析时间戳，自动区分秒级和毫秒级."""
        try:
            # 毫秒级时间戳（> 1e12 认为是毫秒）
            if timestamp > 1e12:
                return datetime.fromtimestamp(timestamp / 1000, tz=UTC)
            return datetime.fromtimestamp(timestamp, tz=UTC)
        except (ValueError, OSError, OverflowError) as e:
            raise TimeSpecFormatError(f"无效的时间戳: {timestamp}，错误: {e}") from e

    def _parse_datetime_string(self, time_str: str) -> datetime:
        """尝试多种格式解析日期时间字符串，无时区信息的视为 UTC."""
        for fmt in self._ISO_FORMATS:
            try:
                return to_utc(datetime.strptime(time_str, fmt))
            except ValueError:
                continue

        # 带时区偏移的格式，如 "2024-01-01T08:00:00+08:00"
        try:
            return to_utc(datetime.fromisoformat(time_str))
        except ValueError:
            pass

        raise TimeSpecFormatError(
            f"无法解析时间字符串: '{time_str}'，"
            f"支持的格式: ISO 8601 (如 '2024-01-01T00:00:00Z')、"
            f"日期 (如 '2024-01-01')、时间戳、相对时间 (如 'now-1h')"
        )


def parse_time_spec(time_str: str) -> TimeSpec:
    """使用默认解析器解析时间字符串（快捷方法）."""
    return TimeSpecParser().parse(time_str)
