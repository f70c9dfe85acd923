"""logsift 异常定义模块."""


class LogSiftError(Exception):
    """logsift 基础异常类."""

    pass


class RowIndexError(LogSiftError, IndexError):
    """行/列/选项索引越界异常.

    同时继承 IndexError，调用方可以按内置异常捕获。
    """

    pass


class QueryStringParseError(LogSiftError):
    """Query String 解析异常."""

    pass


class ConfigError(LogSiftError):
    """配置校验异常."""

    pass
