"""视图存储异常定义模块."""

from logsift.exceptions import LogSiftError


class ViewStoreError(LogSiftError):
    """视图存储基础异常."""

    pass


class ViewNotFoundError(ViewStoreError):
    """视图不存在异常."""

    pass
