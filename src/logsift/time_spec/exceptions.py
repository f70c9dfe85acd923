"""时间描述异常定义模块."""

from logsift.exceptions import LogSiftError


class TimeSpecError(LogSiftError):
    """时间描述基础异常."""

    pass


class TimeSpecFormatError(TimeSpecError):
    """序列化时间描述或时间字符串格式错误."""

    pass


class InvalidTimeRangeError(TimeSpecError):
    """无效的时间范围异常（如解析后 start > end）."""

    pass


# 与持久化格式相关的通用名称
FormatError = TimeSpecFormatError
