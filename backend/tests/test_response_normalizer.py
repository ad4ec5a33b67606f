import json

import pytest

from services.errors import ParseError
from services.response_normalizer import DEFAULT_SUMMARY, extract_json_candidate, normalize


def test_normalizes_well_formed_reply(analysis_payload):
    result = normalize(json.dumps(analysis_payload))
    assert result.overall_match == 78
    assert result.strengths == analysis_payload["strengths"]
    assert result.key_alignments == ["FastAPI services in production"]
    assert result.missing_skills == ["Terraform"]
    assert result.summary == analysis_payload["summary"]


def test_clamps_and_coerces_with_surrounding_prose():
    result = normalize('Here you go: {"overallMatch": 150, "strengths": "not-a-list"}')
    assert result.overall_match == 100
    assert result.strengths == []
    assert result.weaknesses == []
    assert result.summary == DEFAULT_SUMMARY


def test_strips_markdown_code_fences(analysis_payload):
    reply = "```json\n" + json.dumps(analysis_payload, indent=2) + "\n```"
    assert normalize(reply).overall_match == 78


@pytest.mark.parametrize("value,expected", [
    (-20, 0),
    (0, 0),
    (64.6, 65),
    ("85", 85),
    ("high", 0),
    (None, 0),
    (True, 0),
    ([50], 0),
    (1e9, 100),
])
def test_overall_match_coercion(value, expected):
    result = normalize(json.dumps({"overallMatch": value}))
    assert result.overall_match == expected


@pytest.mark.parametrize("literal,expected", [
    ("1" + "0" * 400, 100),
    ("-" + "1" * 400, 0),
    ("1e400", 100),
    ("-1e400", 0),
    ("NaN", 0),
    ('"1e400"', 100),
])
def test_overall_match_out_of_range_literals(literal, expected):
    result = normalize('{"overallMatch": ' + literal + "}")
    assert result.overall_match == expected


def test_missing_fields_default_to_empty():
    result = normalize("{}")
    assert result.overall_match == 0
    assert result.strengths == []
    assert result.weaknesses == []
    assert result.recommendations == []
    assert result.key_alignments == []
    assert result.missing_skills == []
    assert result.summary == DEFAULT_SUMMARY


def test_blank_summary_uses_placeholder():
    assert normalize('{"summary": "  "}').summary == DEFAULT_SUMMARY


def test_non_string_list_items_are_stringified():
    result = normalize('{"strengths": ["Python", 3, null, {"area": "APIs"}]}')
    assert result.strengths == ["Python", "3", '{"area": "APIs"}']


def test_reply_without_braces_and_not_json_fails():
    with pytest.raises(ParseError) as excinfo:
        normalize("I am unable to analyze these documents.")
    assert excinfo.value.message.startswith("Failed to parse AI response:")
    assert excinfo.value.is_bad_request is False


def test_reply_without_braces_parsed_whole_but_not_an_object():
    with pytest.raises(ParseError, match="expected a JSON object"):
        normalize("[1, 2, 3]")


def test_truncated_json_fails():
    with pytest.raises(ParseError):
        normalize('{"overallMatch": 70, "strengths": ["Python"')


def test_multiple_top_level_objects_fail():
    # First "{" to last "}" spans both objects, which is not valid JSON
    with pytest.raises(ParseError):
        normalize('{"overallMatch": 10} and a revised answer {"overallMatch": 20}')


def test_stray_brace_in_trailing_prose_fails():
    with pytest.raises(ParseError):
        normalize('{"overallMatch": 10} (note: use {curly} placeholders)')


def test_closing_brace_before_opening_parses_whole_text():
    assert extract_json_candidate("} text {") == "} text {"
    with pytest.raises(ParseError):
        normalize("} text {")


def test_extract_json_candidate_slices_outer_braces():
    assert extract_json_candidate('prefix {"a": {"b": 1}} suffix') == '{"a": {"b": 1}}'
