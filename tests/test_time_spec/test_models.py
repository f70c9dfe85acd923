"""时间描述数据模型单元测试."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from logsift.time_spec import (
    NOW,
    AbsoluteTime,
    RelativeTime,
    TimeRange,
    TimeUnit,
    deserialize,
    format_instant,
)

FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)


class TestTimeUnit:
    """TimeUnit 枚举测试."""

    def test_seconds_per_unit(self) -> None:
        """测试每单位秒数."""
        assert TimeUnit.MINUTES.seconds == 60
        assert TimeUnit.HOURS.seconds == 3600
        assert TimeUnit.DAYS.seconds == 86400
        assert TimeUnit.WEEKS.seconds == 604800
        assert TimeUnit.MONTHS.seconds == 2592000
        assert TimeUnit.YEARS.seconds == 31536000

    def test_label(self) -> None:
        """测试单位显示名称."""
        assert TimeUnit.MINUTES.label == "minutes"
        assert TimeUnit.YEARS.label == "years"

    def test_from_seconds(self) -> None:
        """测试根据单位编码获取单位."""
        assert TimeUnit.from_seconds(604800) is TimeUnit.WEEKS

    def test_from_seconds_unknown(self) -> None:
        """测试未知单位编码."""
        with pytest.raises(ValueError):
            TimeUnit.from_seconds(61)


class TestAbsoluteTime:
    """AbsoluteTime 测试."""

    def test_naive_taken_as_utc(self) -> None:
        """测试 naive datetime 视为 UTC."""
        spec = AbsoluteTime(datetime(2024, 1, 1, 0, 0, 0))
        assert spec.instant == datetime(2024, 1, 1, tzinfo=UTC)
        assert spec.instant.tzinfo is UTC

    def test_normalized_to_utc(self) -> None:
        """测试带时区的时间转换为 UTC."""
        tz = timezone(timedelta(hours=8))
        spec = AbsoluteTime(datetime(2024, 1, 1, 8, 0, 0, tzinfo=tz))
        assert spec.instant == datetime(2024, 1, 1, 0, 0, 0, tzinfo=UTC)
        assert spec.serialize() == ["absolute", "2024-01-01T00:00:00Z"]

    def test_resolve_independent_of_now(self) -> None:
        """测试绝对时间解析与 now 无关."""
        spec = AbsoluteTime(datetime(2023, 5, 1, tzinfo=UTC))
        assert spec.resolve(FIXED_NOW) == spec.instant
        assert spec.resolve(FIXED_NOW + timedelta(days=365)) == spec.instant

    def test_serialize(self) -> None:
        """测试序列化."""
        spec = AbsoluteTime(datetime(2024, 1, 1, tzinfo=UTC))
        assert spec.serialize() == ["absolute", "2024-01-01T00:00:00Z"]

    def test_serialize_keeps_microseconds(self) -> None:
        """测试序列化保留微秒."""
        spec = AbsoluteTime(datetime(2024, 1, 1, 0, 0, 0, 123456, tzinfo=UTC))
        assert spec.serialize() == ["absolute", "2024-01-01T00:00:00.123456Z"]

    def test_describe_local_short_form(self) -> None:
        """测试本地短格式显示."""
        spec = AbsoluteTime(datetime(2024, 1, 1, tzinfo=UTC))
        expected = spec.instant.astimezone().strftime("%x %H:%M")
        assert spec.describe() == expected
        assert str(spec) == expected

    def test_rejects_non_datetime(self) -> None:
        """测试非 datetime 参数."""
        with pytest.raises(TypeError):
            AbsoluteTime("2024-01-01")  # type: ignore[arg-type]


class TestRelativeTime:
    """RelativeTime 测试."""

    def test_resolve_fifteen_minutes(self) -> None:
        """测试 15 分钟前."""
        spec = RelativeTime(15, TimeUnit.MINUTES)
        assert spec.resolve(FIXED_NOW) == datetime(2024, 1, 1, 11, 45, 0, tzinfo=UTC)

    @pytest.mark.parametrize("unit", list(TimeUnit))
    def test_zero_resolves_to_now(self, unit: TimeUnit) -> None:
        """测试数量为 0 时任何单位都解析为 now."""
        assert RelativeTime(0, unit).resolve(FIXED_NOW) == FIXED_NOW

    def test_months_use_fixed_thirty_days(self) -> None:
        """测试月按固定 30 天计算."""
        spec = RelativeTime(1, TimeUnit.MONTHS)
        assert spec.resolve(FIXED_NOW) == FIXED_NOW - timedelta(days=30)

    def test_years_use_fixed_365_days(self) -> None:
        """测试年按固定 365 天计算（闰年不额外补一天）."""
        spec = RelativeTime(1, TimeUnit.YEARS)
        assert spec.resolve(datetime(2024, 12, 31, tzinfo=UTC)) == datetime(
            2024, 1, 1, tzinfo=UTC
        )

    def test_negative_magnitude_resolves_to_future(self) -> None:
        """测试负数偏移解析为未来时间."""
        spec = RelativeTime(-2, TimeUnit.HOURS)
        assert spec.resolve(FIXED_NOW) == FIXED_NOW + timedelta(hours=2)

    def test_resolve_naive_now_taken_as_utc(self) -> None:
        """测试 naive now 视为 UTC."""
        spec = RelativeTime(1, TimeUnit.HOURS)
        result = spec.resolve(datetime(2024, 1, 1, 12, 0, 0))
        assert result == datetime(2024, 1, 1, 11, 0, 0, tzinfo=UTC)

    def test_resolve_converts_to_utc(self) -> None:
        """测试解析结果为 UTC."""
        tz = timezone(timedelta(hours=-5))
        now = datetime(2024, 1, 1, 7, 0, 0, tzinfo=tz)
        result = RelativeTime(0, TimeUnit.MINUTES).resolve(now)
        assert result.tzinfo is UTC
        assert result == datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)

    def test_serialize_weeks(self) -> None:
        """测试序列化使用秒数作为单位编码."""
        spec = RelativeTime(1, TimeUnit.WEEKS)
        assert spec.serialize() == ["relative", "1", "604800"]

    def test_describe(self) -> None:
        """测试显示文本."""
        assert RelativeTime(15, TimeUnit.MINUTES).describe() == "15 minutes ago"
        assert RelativeTime(1, TimeUnit.WEEKS).describe() == "1 weeks ago"
        assert RelativeTime(0, TimeUnit.DAYS).describe() == "now"
        assert str(NOW) == "now"

    def test_rejects_non_integer_magnitude(self) -> None:
        """测试非整数数量."""
        with pytest.raises(TypeError):
            RelativeTime(1.5, TimeUnit.HOURS)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            RelativeTime(True, TimeUnit.HOURS)

    def test_rejects_non_unit(self) -> None:
        """测试非 TimeUnit 单位."""
        with pytest.raises(TypeError):
            RelativeTime(1, 60)  # type: ignore[arg-type]

    def test_resolve_out_of_range_is_clamped(self) -> None:
        """测试超出可表示范围时截断."""
        past = RelativeTime(100000, TimeUnit.YEARS)
        future = RelativeTime(-100000, TimeUnit.YEARS)
        assert past.resolve(FIXED_NOW) == datetime.min.replace(tzinfo=UTC)
        assert future.resolve(FIXED_NOW) == datetime.max.replace(tzinfo=UTC)
        assert RelativeTime(10**20, TimeUnit.YEARS).resolve(FIXED_NOW).year == 1


class TestEquality:
    """按值比较测试."""

    def test_relative_equal_by_value(self) -> None:
        """测试相对时间按值相等."""
        assert RelativeTime(15, TimeUnit.MINUTES) == RelativeTime(15, TimeUnit.MINUTES)
        assert RelativeTime(15, TimeUnit.MINUTES) != RelativeTime(15, TimeUnit.HOURS)
        assert RelativeTime(15, TimeUnit.MINUTES) != RelativeTime(16, TimeUnit.MINUTES)

    def test_zero_units_differ(self) -> None:
        """测试数量为 0 时单位仍参与比较."""
        assert RelativeTime(0, TimeUnit.MINUTES) != RelativeTime(0, TimeUnit.HOURS)

    def test_absolute_equal_by_instant(self) -> None:
        """测试绝对时间按时间点相等（不同时区表示同一时刻）."""
        tz = timezone(timedelta(hours=8))
        a = AbsoluteTime(datetime(2024, 1, 1, 8, 0, 0, tzinfo=tz))
        b = AbsoluteTime(datetime(2024, 1, 1, 0, 0, 0, tzinfo=UTC))
        assert a == b
        assert hash(a) == hash(b)

    def test_different_kinds_never_equal(self) -> None:
        """测试绝对时间与相对时间不相等."""
        assert AbsoluteTime(FIXED_NOW) != RelativeTime(0, TimeUnit.MINUTES)


class TestRoundTrip:
    """序列化往返测试."""

    @pytest.mark.parametrize(
        "spec",
        [
            NOW,
            RelativeTime(15, TimeUnit.MINUTES),
            RelativeTime(-3, TimeUnit.DAYS),
            RelativeTime(1, TimeUnit.YEARS),
            AbsoluteTime(datetime(2024, 1, 1, tzinfo=UTC)),
            AbsoluteTime(datetime(2024, 2, 29, 23, 59, 59, 500000, tzinfo=UTC)),
        ],
    )
    def test_round_trip(self, spec) -> None:
        """测试 deserialize(serialize(t)) == t."""
        assert deserialize(spec.serialize()) == spec


class TestTimeRange:
    """TimeRange 数据类测试."""

    def test_to_dsl(self) -> None:
        """测试转换为 DSL."""
        tr = TimeRange(
            start=datetime(2024, 1, 1, tzinfo=UTC),
            end=datetime(2024, 1, 2, tzinfo=UTC),
        )
        dsl = tr.to_dsl()
        assert dsl["range"]["@timestamp"]["gte"] == "2024-01-01T00:00:00Z"
        assert dsl["range"]["@timestamp"]["lte"] == "2024-01-02T00:00:00Z"
        assert (
            dsl["range"]["@timestamp"]["format"]
            == "strict_date_optional_time||epoch_millis"
        )

    def test_to_params(self) -> None:
        """测试转换为搜索接口参数."""
        tr = TimeRange(
            start=datetime(2024, 1, 1, 11, 45, tzinfo=UTC),
            end=FIXED_NOW,
        )
        assert tr.to_params() == {
            "start": "2024-01-01T11:45:00Z",
            "end": "2024-01-01T12:00:00Z",
        }

    def test_duration_seconds(self) -> None:
        """测试持续时间."""
        tr = TimeRange(start=FIXED_NOW - timedelta(hours=1), end=FIXED_NOW)
        assert tr.duration_seconds == 3600.0

    def test_repr(self) -> None:
        """测试字符串表示."""
        tr = TimeRange(start=FIXED_NOW, end=FIXED_NOW, field="ts")
        assert "TimeRange" in repr(tr)
        assert "ts" in repr(tr)


def test_format_instant_naive() -> None:
    """测试 naive datetime 视为 UTC 格式化."""
    assert format_instant(datetime(2024, 1, 1, 12, 0, 0)) == "2024-01-01T12:00:00Z"
