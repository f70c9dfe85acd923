"""DSL 搜索构建器单元测试."""

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest
from elasticsearch.dsl import Search

from logsift.exceptions import QueryStringParseError
from logsift.query import SearchDslBuilder, SearchRequest, histogram_interval

END = datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)


def make_request(query="", hours=1):
    return SearchRequest(start=END - timedelta(hours=hours), end=END, query=query)


class TestHistogramInterval:
    """histogram_interval 测试."""

    @pytest.mark.parametrize(
        "duration, expected",
        [
            (timedelta(minutes=15), "1s"),
            (timedelta(hours=1), "1s"),
            (timedelta(hours=4), "1m"),
            (timedelta(days=7), "1h"),
            (timedelta(days=365), "1d"),
        ],
    )
    def test_interval(self, duration, expected):
        """测试按时间范围长度选择间隔."""
        assert histogram_interval(duration) == expected


class TestSearchDslBuilder:
    """SearchDslBuilder 测试."""

    def test_build_calls_search(self):
        """测试构建时调用 Search 方法链."""
        mock_search = MagicMock(spec=Search)
        mock_search.filter.return_value = mock_search
        mock_search.query.return_value = mock_search
        mock_search.sort.return_value = mock_search
        mock_search.__getitem__.return_value = mock_search

        builder = SearchDslBuilder(search_factory=lambda: mock_search)
        builder.build(make_request("level:error"), size=100)

        mock_search.filter.assert_called_once()
        assert mock_search.filter.call_args.args == ("range",)
        assert "@timestamp" in mock_search.filter.call_args.kwargs
        mock_search.query.assert_called_once_with("query_string", query="level:error")
        mock_search.sort.assert_called_once_with("-@timestamp")
        mock_search.__getitem__.assert_called_once_with(slice(0, 100))

    def test_empty_query_skipped(self):
        """测试空查询不添加 query_string."""
        dsl = SearchDslBuilder().to_dict(make_request(""))

        assert "must" not in dsl["query"]["bool"]
        assert dsl["query"]["bool"]["filter"] == [
            {
                "range": {
                    "@timestamp": {
                        "gte": "2024-06-15T11:00:00Z",
                        "lte": "2024-06-15T12:00:00Z",
                        "format": "strict_date_optional_time||epoch_millis",
                    }
                }
            }
        ]

    def test_to_dict(self):
        """测试导出 DSL."""
        dsl = SearchDslBuilder(time_field="tstamp").to_dict(
            make_request("level:error"), size=50
        )

        assert dsl["size"] == 50
        assert dsl["sort"] == [{"tstamp": {"order": "desc"}}]
        assert {"query_string": {"query": "level:error"}} in dsl["query"]["bool"]["must"]
        assert "tstamp" in dsl["query"]["bool"]["filter"][0]["range"]

    def test_with_counts(self):
        """测试时间直方图聚合."""
        dsl = SearchDslBuilder().to_dict(make_request(hours=4), with_counts=True)

        histogram = dsl["aggs"]["counts"]["date_histogram"]
        assert histogram["field"] == "@timestamp"
        assert histogram["fixed_interval"] == "1m"
        assert histogram["min_doc_count"] == 0
        assert histogram["extended_bounds"] == {
            "min": "2024-06-15T08:00:00Z",
            "max": "2024-06-15T12:00:00Z",
        }

    def test_without_counts(self):
        """测试默认不添加聚合."""
        assert "aggs" not in SearchDslBuilder().to_dict(make_request())

    def test_invalid_query(self):
        """测试非法查询."""
        with pytest.raises(QueryStringParseError):
            SearchDslBuilder().build(make_request("level:(error"))
