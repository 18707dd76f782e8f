"""Tests for cleaning up and reading model responses."""
from papergrade.core.llm.guardrails import parse_json_response, strip_code_fence, validate_response
from papergrade.core.schemas.llm_contracts import GradePage, ScanPage


def test_fenced_json_parses_like_unfenced():
    plain = '{"questions": [{"answer": "C", "type": "MCQ"}]}'
    fenced = "```json\n" + plain + "\n```"
    assert parse_json_response(fenced) == parse_json_response(plain)
    assert parse_json_response(fenced) == {"questions": [{"answer": "C", "type": "MCQ"}]}


def test_untagged_fence_and_surrounding_whitespace():
    text = '\n  ```\n{"grades": []}\n```  \n'
    assert parse_json_response(text) == {"grades": []}


def test_interior_backticks_are_left_alone():
    text = '```json\n{"student_answer": "use ```code``` here"}\n```'
    assert strip_code_fence(text) == '{"student_answer": "use ```code``` here"}'


def test_unparsable_text_gives_none():
    assert parse_json_response("Sorry, I can't read this page.") is None
    assert parse_json_response("```json\n{not json}\n```") is None


def test_non_object_json_gives_none():
    assert parse_json_response("[1, 2, 3]") is None
    assert parse_json_response('"just a string"') is None


def test_non_string_input_gives_none():
    assert parse_json_response(None) is None
    assert parse_json_response({"already": "parsed"}) is None


def test_scan_page_validation():
    page = validate_response({"questions": [{"answer": 4}, "stray", {"answer": "B", "type": "  "}]}, ScanPage)
    assert [(q.answer, q.type) for q in page.questions] == [("4", "SHORT"), ("B", "SHORT")]

    assert validate_response({"questions": "A, B"}, ScanPage) is None
    assert validate_response({"answers": ["A"]}, ScanPage) is None


def test_grade_page_defaults():
    page = validate_response({"student_name": "  ", "grades": [{"score": True}, "stray", {"score": 2.5}]}, GradePage)
    assert page.student_name == "Unknown Student"
    assert [(g.student_answer, g.score) for g in page.grades] == [("N/A", 0), ("N/A", 0), ("N/A", 2.5)]

    page = validate_response({"student_name": "Ada Lovelace", "grades": "oops"}, GradePage)
    assert page.student_name == "Ada Lovelace"
    assert page.grades == []

    assert validate_response({"grades": [{"student_answer": 12, "score": "3"}]}, GradePage).grades[0].model_dump() == {
        "student_answer": "12", "score": 0,
    }
