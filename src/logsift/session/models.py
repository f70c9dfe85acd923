"""会话配置数据模型定义模块."""

from dataclasses import dataclass, field

from logsift.exceptions import ConfigError

DEFAULT_COLUMNS = ["hostname", "programname", "msg"]


@dataclass
class SessionConfig:
    """搜索会话配置.

    Attributes:
        search_url: 搜索接口地址，接口的 query 参数必须接受 Lucene Query String 语法
            （与 QueryComposer 追加的过滤条件一致），如转发到 Elasticsearch query_string 的服务
        time_field: 时间字段名
        default_columns: 默认显示列，重置视图时使用
        max_events: 单次搜索返回的事件数量上限，必须 >= 0

    Raises:
        ConfigError: 当参数不合法时抛出

    Examples:
        >>> config = SessionConfig(search_url="http://logs.internal:8000/search")
    """

    search_url: str = "http://localhost:8000/search"
    time_field: str = "@timestamp"
    default_columns: list[str] = field(default_factory=lambda: list(DEFAULT_COLUMNS))
    max_events: int = 500

    def __post_init__(self) -> None:
        """校验会话配置参数合法性."""
        if not self.search_url:
            raise ConfigError("search_url 不能为空")
        if not self.time_field:
            raise ConfigError("time_field 不能为空")
        if self.max_events < 0:
            raise ConfigError(f"max_events 必须 >= 0，当前值: {self.max_events}")
        if len(set(self.default_columns)) != len(self.default_columns):
            raise ConfigError(f"default_columns 存在重复列: {self.default_columns}")
