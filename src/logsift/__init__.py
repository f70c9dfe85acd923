"""logsift - 日志搜索工具的数据/视图层.

这是一个把时间范围解析、时间范围选项去重和日志事件表格投影组合起来的 Python 库。

主要功能:
    - TimeSpec: 绝对/相对时间描述，解析、序列化和按值比较
    - TimeRangeChoiceList: 按插入顺序显示、按值去重的时间范围选项
    - LogTableProjection: 列可按名称切换的日志事件表格
    - SearchResponseParser: 搜索响应解码
    - LogSearchSession: 串联以上组件的搜索会话

使用示例:
    from logsift import LogSearchSession

    session = LogSearchSession()
    request = session.build_request()
    params = request.to_params()
"""

__version__ = "0.1.0"

# 导出时间描述
from logsift.time_spec import (
    NOW,
    AbsoluteTime,
    FormatError,
    RelativeTime,
    TimeRange,
    TimeSpec,
    TimeSpecFormatError,
    TimeSpecParser,
    TimeUnit,
    deserialize,
)

# 导出时间范围选项
from logsift.choices import TimeRangeChoice, TimeRangeChoiceList

# 导出日志表格投影
from logsift.projection import LogEvent, LogTableProjection

# 导出结构变更通知
from logsift.core import ChangeAxis, ChangeKind, StructuralChange

# 导出解析器与查询
from logsift.parsers import SearchResponseParser, SearchResult
from logsift.query import QueryComposer, SearchDslBuilder, SearchRequest

# 导出视图与会话
from logsift.views import InMemoryViewStore, JsonFileViewStore, ViewSnapshot, ViewStore
from logsift.session import LogSearchSession, SessionConfig

# 导出异常
from logsift.exceptions import (
    ConfigError,
    LogSiftError,
    QueryStringParseError,
    RowIndexError,
)

__all__ = [
    # 版本
    "__version__",
    # 时间描述
    "TimeSpec",
    "AbsoluteTime",
    "RelativeTime",
    "TimeUnit",
    "TimeRange",
    "TimeSpecParser",
    "NOW",
    "deserialize",
    # 时间范围选项
    "TimeRangeChoice",
    "TimeRangeChoiceList",
    # 日志表格投影
    "LogEvent",
    "LogTableProjection",
    "ChangeAxis",
    "ChangeKind",
    "StructuralChange",
    # 解析器与查询
    "SearchResponseParser",
    "SearchResult",
    "SearchRequest",
    "QueryComposer",
    "SearchDslBuilder",
    # 视图与会话
    "ViewSnapshot",
    "ViewStore",
    "InMemoryViewStore",
    "JsonFileViewStore",
    "LogSearchSession",
    "SessionConfig",
    # 异常
    "LogSiftError",
    "RowIndexError",
    "QueryStringParseError",
    "ConfigError",
    "TimeSpecFormatError",
    "FormatError",
]
