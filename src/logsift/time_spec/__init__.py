"""
TimeSpec 模块 - 时间描述

该模块将用户指定的时间（绝对时间点或相对当前时间的偏移）表示为不可变的值，
并负责解析为具体时间点、序列化为字符串列表以及按值比较。

主要组件:
- AbsoluteTime / RelativeTime: 时间描述的两种变体，TimeSpec 为二者的和类型
- TimeUnit: 相对时间单位（值为每单位秒数）
- TimeRange: 解析后的时间范围
- TimeSpecParser: 时间字符串解析工具

示例用法:
    >>> from logsift.time_spec import RelativeTime, TimeUnit, deserialize
    >>> spec = RelativeTime(15, TimeUnit.MINUTES)
    >>> spec.serialize()
    ['relative', '15', '60']
    >>> deserialize(spec.serialize()) == spec
    True
"""

from .exceptions import (
    FormatError,
    InvalidTimeRangeError,
    TimeSpecError,
    TimeSpecFormatError,
)
from .models import (
    NOW,
    AbsoluteTime,
    RelativeTime,
    TimeRange,
    TimeSpec,
    TimeUnit,
    format_instant,
    to_utc,
)
from .tool import TimeSpecParser, deserialize, parse_time_spec, resolve_range

__all__ = [
    # 数据模型
    "TimeSpec",
    "AbsoluteTime",
    "RelativeTime",
    "TimeUnit",
    "TimeRange",
    "NOW",
    # 工具
    "TimeSpecParser",
    "deserialize",
    "parse_time_spec",
    "resolve_range",
    "format_instant",
    "to_utc",
    # 异常
    "TimeSpecError",
    "TimeSpecFormatError",
    "FormatError",
    "InvalidTimeRangeError",
]
