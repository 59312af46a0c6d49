"""Tests for interval tokenizing and parsing."""

import pytest

from core.intervals import FormatError, Interval, parse_interval, parse_intervals, tokenize


class TestTokenize:
    @pytest.mark.parametrize("raw", ["", None, "   ", "\n;\r\n"])
    def test_empty_input(self, raw):
        assert tokenize(raw) == []

    def test_newline_separated(self):
        tokens = tokenize("8-12\n13-17")
        assert tokens == ["8-12", "13-17"]
        assert [parse_interval(t) for t in tokens] == [
            Interval("08:00", "12:00", 4.0),
            Interval("13:00", "17:00", 4.0),
        ]

    def test_crlf_and_semicolons_trimmed(self):
        assert tokenize("  8-12 ;; \r\n 13-17 ") == ["8-12", "13-17"]

    def test_space_separated_intervals_on_one_line(self):
        assert tokenize("8-12 13-17") == ["8-12", "13-17"]

    def test_mixed_separators_on_one_line(self):
        assert tokenize("8:30 bis 12 13.00 - 17:30") == ["8:30 bis 12", "13.00 - 17:30"]

    def test_single_interval_with_spaces_is_not_split(self):
        assert tokenize("8 bis 12") == ["8 bis 12"]
        assert tokenize("8:30 - 12:00") == ["8:30 - 12:00"]

    def test_leading_garbage_becomes_its_own_token(self):
        assert tokenize("foo 8-12") == ["foo", "8-12"]

    def test_order_preserved(self):
        assert tokenize("14-15\n8-9;10-11 12-13") == ["14-15", "8-9", "10-11", "12-13"]


class TestParseInterval:
    def test_bare_hours_with_dash(self):
        assert parse_interval("8-12") == Interval(start="08:00", end="12:00", duration=4)

    def test_dot_minutes_and_separator_word(self):
        assert parse_interval("8.30 bis 12") == Interval("08:30", "12:00", 3.5)

    def test_en_dash(self):
        assert parse_interval("7:15 – 9:45") == Interval("07:15", "09:45", 2.5)

    def test_separator_word_case_insensitive(self):
        assert parse_interval("8 BIS 9:30") == Interval("08:00", "09:30", 1.5)

    def test_duration_is_not_rounded(self):
        interval = parse_interval("8-8:20")
        assert interval.duration == (500 - 480) / 60

    def test_end_before_start(self):
        with pytest.raises(FormatError) as exc_info:
            parse_interval("12 bis 8")
        assert exc_info.value.reason == "end before start"
        assert exc_info.value.token == "12 bis 8"
        assert str(exc_info.value) == "end before start: 12 bis 8"

    @pytest.mark.parametrize("token", ["8-8", "22-2", "9:30-9:30"])
    def test_zero_length_and_overnight_rejected(self, token):
        with pytest.raises(FormatError, match="end before start"):
            parse_interval(token)

    @pytest.mark.parametrize("token", ["not a time", "8-12-14", "8 -", "bis 12", "8"])
    def test_invalid_format(self, token):
        with pytest.raises(FormatError) as exc_info:
            parse_interval(token)
        assert exc_info.value.reason == "invalid format"

    @pytest.mark.parametrize("token", ["8:5-9", "8:75-9", "a-b", "123-130", "8:00:00-9"])
    def test_invalid_time(self, token):
        with pytest.raises(FormatError) as exc_info:
            parse_interval(token)
        assert exc_info.value.reason == "invalid time"

    def test_german_message(self):
        with pytest.raises(FormatError) as exc_info:
            parse_interval("not a time")
        assert exc_info.value.message_de == "Ungültiges Format: not a time"

    def test_idempotent(self):
        assert parse_interval("13:00-17:30") == parse_interval("13:00-17:30")


class TestParseIntervals:
    def test_all_tokens_parsed(self):
        intervals = parse_intervals("8-12;13:00-17:30")
        assert [i.duration for i in intervals] == [4.0, 4.5]

    def test_first_bad_token_aborts(self):
        with pytest.raises(FormatError, match="invalid format: oops"):
            parse_intervals("8-12\noops\n13-14")

    def test_empty(self):
        assert parse_intervals(None) == []
