"""Tests for the token-based date field formatter.

Covers: field extraction for every token class, the padding law,
omitted tokens, leftmost-run substitution, literal pass-through, accepted
input types, invalid input, and agreement between field maps and direct
formatting.
"""

import pytest
from datetime import date, datetime, timedelta, timezone

from countdown.errors import InvalidInputError
from countdown.formatting import (
    DateFields,
    get_fields,
    to_string,
    DATETIME_PATTERN,
)

UTC = timezone.utc
HOUR = 3_600_000
DAY = 24 * HOUR


# ═══════════════════════════════════════════════════════════════════════
#  get_fields
# ═══════════════════════════════════════════════════════════════════════


class TestGetFields:

    def test_minutes_and_seconds(self):
        assert get_fields(90_000, "mm:ss", UTC) == {"minute": "01", "second": "30"}

    def test_default_format_is_mm_ss(self):
        assert set(get_fields(0, tz=UTC)) == {"minute", "second"}

    def test_every_token(self):
        value = datetime(1971, 3, 4, 5, 6, 7, 8_000, tzinfo=UTC)
        assert get_fields(value, "Y-M-D h:m:s.S", UTC) == {
            "year": "1",
            "month": "2",
            "date": "3",
            "hour": "5",
            "minute": "6",
            "second": "7",
            "millisecond": "8",
        }

    def test_duration_is_measured_from_epoch_zero(self):
        fields = get_fields(2 * DAY + 3 * HOUR, "DD hh", UTC)
        assert fields == {"date": "02", "hour": "03"}

    def test_absent_tokens_are_omitted(self):
        fields = get_fields(90_000, "ss", UTC)
        assert fields == {"second": "30"}
        assert "minute" not in fields

    def test_no_tokens_gives_empty_map(self):
        assert get_fields(90_000, "--:--", UTC) == {}

    @pytest.mark.parametrize("fmt, expected", [
        ("S", "123"),
        ("SS", "123"),
        ("SSS", "123"),
        ("SSSS", "0123"),
        ("SSSSSS", "000123"),
    ])
    def test_padding_law(self, fmt, expected):
        fields = get_fields(123, fmt, UTC)
        assert fields["millisecond"] == expected
        assert len(expected) == max(len(fmt), len("123"))

    def test_single_letter_does_not_pad(self):
        assert get_fields(5_000, "s", UTC) == {"second": "5"}

    def test_overflowing_value_is_not_truncated(self):
        assert get_fields(45 * 60_000, "m", UTC) == {"minute": "45"}

    def test_leftmost_run_sets_width(self):
        assert get_fields(5_000, "sss s", UTC) == {"second": "005"}

    def test_case_distinguishes_minute_from_month(self):
        fields = get_fields(datetime(1970, 6, 1, 0, 7, tzinfo=UTC), "MM mm", UTC)
        assert fields == {"month": "05", "minute": "07"}


# ═══════════════════════════════════════════════════════════════════════
#  INPUT TYPES
# ═══════════════════════════════════════════════════════════════════════


class TestInputTypes:

    def test_float_milliseconds(self):
        assert get_fields(1_500.9, "s.SSS", UTC) == {"second": "1", "millisecond": "500"}

    def test_timedelta(self):
        assert get_fields(timedelta(minutes=2, seconds=3), "mm:ss", UTC) == {
            "minute": "02",
            "second": "03",
        }

    def test_iso_string_with_offset(self):
        fields = get_fields("1970-01-02T03:04:05.006+00:00", "D h m s SSS", UTC)
        assert fields == {
            "date": "1",
            "hour": "3",
            "minute": "4",
            "second": "5",
            "millisecond": "006",
        }

    def test_naive_iso_string_is_wall_time(self):
        fields = get_fields("1970-01-01T10:20:30", "hh:mm:ss", UTC)
        assert fields == {"hour": "10", "minute": "20", "second": "30"}

    def test_aware_datetime_is_converted(self):
        plus_two = timezone(timedelta(hours=2))
        value = datetime(1970, 1, 1, 12, 0, tzinfo=plus_two)
        assert get_fields(value, "hh", UTC) == {"hour": "10"}

    def test_naive_datetime_in_local_zone(self, host_zone):
        """With no zone given, naive values keep their wall-clock fields."""
        host_zone("UTC")
        fields = get_fields(datetime(1971, 2, 3, 4, 5, 6), "Y M D h m s")
        assert fields == {
            "year": "1",
            "month": "1",
            "date": "2",
            "hour": "4",
            "minute": "5",
            "second": "6",
        }

    def test_date(self):
        assert get_fields(date(1970, 1, 11), "DD hh", UTC) == {"date": "10", "hour": "00"}

    def test_fixed_offset_zone(self):
        plus_eight = timezone(timedelta(hours=8))
        assert get_fields(0, "hh", plus_eight) == {"hour": "08"}

    @pytest.mark.parametrize("value", [
        None, True, False, [], {}, object(), "not a date", "", float("inf"),
    ])
    def test_invalid_input(self, value):
        with pytest.raises(InvalidInputError):
            get_fields(value, "mm:ss", UTC)

    def test_invalid_input_is_a_type_error(self):
        with pytest.raises(TypeError):
            get_fields(None)

    def test_out_of_range_value(self):
        with pytest.raises(InvalidInputError):
            get_fields(10 ** 20, "Y", UTC)


# ═══════════════════════════════════════════════════════════════════════
#  to_string
# ═══════════════════════════════════════════════════════════════════════


class TestToString:

    def test_value(self):
        assert to_string(90_000, "mm:ss", UTC) == "01:30"

    def test_ten_seconds(self):
        assert to_string(10_000, "mm:ss", UTC) == "00:10"

    def test_literals_pass_through(self):
        assert to_string(3_723_000, "hh时mm分ss秒", UTC) == "01时02分03秒"

    def test_only_leftmost_run_is_replaced(self):
        assert to_string(61_000, "m:s s", UTC) == "1:1 s"

    def test_field_map_skips_recomputation(self):
        assert to_string({"minute": "42", "second": "00"}, "mm:ss") == "42:00"

    def test_missing_field_keeps_placeholder(self):
        assert to_string({"minute": "05"}, "mm:ss") == "05:ss"

    def test_empty_map_returns_template(self):
        assert to_string({}, "hh:mm") == "hh:mm"

    def test_replacement_text_is_literal(self):
        assert to_string({"second": r"\1"}, "ss") == r"\1"

    def test_no_tokens_left_for_present_classes(self):
        fmt = "YYYY-MM-DD hh:mm:ss.SSS"
        text = to_string(DAY + 1, fmt, UTC)
        for token in DATETIME_PATTERN:
            assert token not in text
        assert text == "0000-00-01 00:00:00.001"

    @pytest.mark.parametrize("value", [
        0, 1, 999, 59_999, 3_723_456, 40 * DAY, timedelta(hours=30),
        "1972-05-06T07:08:09+00:00",
    ])
    @pytest.mark.parametrize("fmt", [
        "mm:ss", "hh:mm:ss", "s", "Y/M/D", "SSSS", "D days hh h", "literal",
    ])
    def test_field_map_agrees_with_direct_format(self, value, fmt):
        assert to_string(get_fields(value, fmt, UTC), fmt) == to_string(value, fmt, UTC)


# ═══════════════════════════════════════════════════════════════════════
#  DateFields
# ═══════════════════════════════════════════════════════════════════════


class TestDateFields:

    def test_str(self):
        assert str(DateFields(90_000, "mm:ss", UTC)) == "01:30"

    def test_fields_are_a_copy(self):
        df = DateFields(90_000, "mm:ss", UTC)
        df.fields["minute"] = "99"
        assert str(df) == "01:30"

    def test_accessors(self):
        df = DateFields(5_000, "ss", UTC)
        assert df.value == 5_000
        assert df.format == "ss"
        assert "05" in repr(df)

    def test_rejects_invalid_input_eagerly(self):
        with pytest.raises(InvalidInputError):
            DateFields(None)


# ═══════════════════════════════════════════════════════════════════════
#  HOST ZONE
# ═══════════════════════════════════════════════════════════════════════


class TestHostZone:

    @pytest.mark.parametrize("zone", ["America/New_York", "Asia/Tokyo", "UTC"])
    def test_epoch_zero_has_no_calendar_fields(self, host_zone, zone):
        host_zone(zone)
        assert get_fields(0, "YYYY-MM-DD") == {"year": "0000", "month": "00", "date": "00"}

    def test_short_duration_west_of_utc(self, host_zone):
        host_zone("America/New_York")
        assert to_string(90_000, "YYYY MM DD") == "0000 00 00"

    def test_wall_clock_fields_follow_the_zone(self, host_zone):
        host_zone("Asia/Tokyo")
        assert get_fields(0, "hh:mm") == {"hour": "09", "minute": "00"}

    def test_explicit_zone_uses_its_own_epoch(self):
        minus_five = timezone(timedelta(hours=-5))
        assert to_string(0, "YYYY-MM-DD hh", minus_five) == "0000-00-00 19"
