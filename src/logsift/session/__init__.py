"""搜索会话模块.

串联时间范围选项、查询、日志表格投影和视图存储.
"""

from .models import DEFAULT_COLUMNS, SessionConfig
from .tool import LogSearchSession

__all__ = [
    "LogSearchSession",
    "SessionConfig",
    "DEFAULT_COLUMNS",
]
