"""结果解析器异常定义模块."""

from logsift.exceptions import LogSiftError


class ResponseParseError(LogSiftError):
    """搜索响应解析基础异常."""

    pass


class EventDecodeError(ResponseParseError):
    """单条日志事件解码失败."""

    pass
