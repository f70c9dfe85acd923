"""日志搜索会话使用示例.

本文件展示了如何使用 LogSearchSession 选择时间范围、组合查询、
应用搜索响应以及保存/读取视图。
"""

from pathlib import Path

from elasticsearch import Elasticsearch
from elasticsearch.dsl import Search

from logsift import (
    NOW,
    LogSearchSession,
    SessionConfig,
    TimeSpecParser,
)
from logsift.views import JsonFileViewStore

# 创建 Elasticsearch 客户端连接
es_client = Elasticsearch(["http://localhost:9200"])

# 创建会话
session = LogSearchSession(
    config=SessionConfig(
        search_url="http://localhost:8000/search",
        max_events=200,  # 每次最多返回200条事件
    ),
    view_store=JsonFileViewStore(Path("~/.config/logsift/views.json").expanduser()),
    search_factory=lambda: Search(using=es_client, index="logs-*"),
)

# 表格刷新回调
session.projection.changes.add_listener(lambda change: print(f"表格变更: {change}"))


# ==================== 示例1：选择时间范围 ====================
def example_select_range():
    """选择预置时间范围和自定义时间范围."""
    for row in range(session.choices.row_count()):
        print(f"  {row}: {session.choices.row_label(row)}")

    # 最近 1 小时
    session.select_range(1)

    # 自定义范围（选择最后的 "Custom ..." 行）
    parser = TimeSpecParser()
    start = parser.parse("2024-01-01 00:00")
    session.select_range(session.choices.size(), custom=(start, NOW))
    print(f"当前时间范围: {session.current_choice.label()}")


# ==================== 示例2：搜索接口 ====================
def example_search_url():
    """通过搜索接口获取日志."""
    session.set_query("programname:sshd")
    session.append_filter("hostname", "web-1")

    request = session.build_request()
    print(f"请求地址: {request.to_url(session.config.search_url)}")

    # 模拟搜索接口响应
    payload = {
        "events": [
            {
                "timestamp": "2024-01-01T12:00:00Z",
                "id": 1,
                "source": {"hostname": "web-1", "programname": "sshd", "msg": "Accepted"},
            }
        ],
        "fields": {"hostname": {"web-1": 1}},
        "counts": {"2024-01-01T12:00:00Z": 1},
    }
    session.apply_response(request, payload)

    projection = session.projection
    for row in range(projection.row_count()):
        print(projection.row_label(row), projection.row_values(row))


# ==================== 示例3：直接查询 Elasticsearch ====================
def example_search_es():
    """直接查询 Elasticsearch 并解析命中文档."""
    from logsift.parsers import SearchResponseParser

    request = session.build_request()
    search = session.build_search(request, with_counts=True)
    print(f"DSL: {search.to_dict()}")

    response = search.execute()
    events = SearchResponseParser().parse_hits(response)
    session.projection.set_events(events)
    print(f"共 {len(events)} 条事件，字段: {session.projection.available_fields()}")


# ==================== 示例4：保存和读取视图 ====================
def example_views():
    """保存当前列和查询，之后再读取."""
    session.toggle_column("pid")
    session.save_view("ssh", save_range=False)
    print(f"已保存视图: {session.view_names()}")

    session.reset_columns()
    session.load_view("ssh")
    print(f"读取后的列: {session.projection.columns}")



if __name__ == "__main__":
    example_select_range()
    example_search_url()
    example_views()
