"""视图存储模块.

按名称保存和读取显示列、查询和时间范围.
"""

from .exceptions import ViewNotFoundError, ViewStoreError
from .models import ViewSnapshot
from .tool import InMemoryViewStore, JsonFileViewStore, ViewStore

__all__ = [
    "ViewSnapshot",
    "ViewStore",
    "InMemoryViewStore",
    "JsonFileViewStore",
    "ViewStoreError",
    "ViewNotFoundError",
]
