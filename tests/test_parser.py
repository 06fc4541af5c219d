"""Tests for completion response parsing."""

import json

from samay_sahayak.agents.parser import (
    NO_JSON_MESSAGE,
    PARSE_ERROR_MESSAGE,
    extract_json_text,
    parse_timetable_response,
)


class TestExtractJsonText:
    """Tests for locating the JSON object in free text."""

    def test_fenced_block_preferred(self):
        text = 'Note {not json}\n```json\n{"a": 1}\n```\ntrailing }'
        assert extract_json_text(text) == '{"a": 1}'

    def test_unlabelled_fence(self):
        assert extract_json_text('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_greedy_fallback_spans_first_to_last_brace(self):
        text = 'prefix {"a": {"b": 2}} suffix'
        assert extract_json_text(text) == '{"a": {"b": 2}}'

    def test_no_braces(self):
        assert extract_json_text("no json here") is None


class TestParseTimetableResponse:
    """Tests for the never-raising parser."""

    def test_object_returned_unchanged(self, sample_timetable):
        text = "Sure! " + json.dumps(sample_timetable) + " Enjoy your day."
        assert parse_timetable_response(text) == sample_timetable

    def test_fenced_object_with_braces_in_prose(self, sample_timetable):
        text = "Use {focus} wisely.\n```json\n" + json.dumps(sample_timetable) + "\n```\n{end}"
        assert parse_timetable_response(text) == sample_timetable

    def test_no_object_gives_default(self):
        result = parse_timetable_response("I could not build a schedule today.")
        assert result["dailySchedule"] == []
        assert result["technique"] == "Custom"
        assert result["totalWorkTime"] == 0
        assert result["totalBreakTime"] == 0
        assert result["recommendations"] == [NO_JSON_MESSAGE]
        assert result["rawResponse"] == "I could not build a schedule today."

    def test_malformed_object_gives_default(self):
        result = parse_timetable_response('{"dailySchedule": [,]}')
        assert result["dailySchedule"] == []
        assert result["recommendations"] == [PARSE_ERROR_MESSAGE]

    def test_unbalanced_braces(self):
        result = parse_timetable_response("} backwards {")
        assert result["recommendations"] == [NO_JSON_MESSAGE]

    def test_non_string_input(self):
        result = parse_timetable_response(None)
        assert result["dailySchedule"] == []
        assert result["rawResponse"] == ""
