"""日志表格投影模块.

将结构不固定的日志事件投影为列可按名称切换的表格.
"""

from logsift.projection.models import LogEvent, stringify_value
from logsift.projection.tool import LogTableProjection

__all__ = [
    "LogEvent",
    "LogTableProjection",
    "stringify_value",
]
