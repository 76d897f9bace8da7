import pytest

from juicescout.extractors.helpjuice_extractor import (
    parse_csv,
    process_answers,
    process_categories,
    process_questions,
)
from juicescout.models.helpjuice import lenient_int
from juicescout.utils.errors import RecordFormatError


def test_parse_csv_keeps_header_and_quoted_fields(write_csv):
    path = write_csv(
        "answers.csv",
        'question,body\n1,"Hello, world"\n2,"Line one\nLine two"\n3,"Say ""hi"""\n',
    )
    rows = parse_csv(path)
    assert rows == [
        ["question", "body"],
        ["1", "Hello, world"],
        ["2", "Line one\nLine two"],
        ["3", 'Say "hi"'],
    ]


def test_parse_csv_skips_blank_lines_and_bom(tmp_path):
    path = tmp_path / "categories.csv"
    path.write_bytes("\ufeffid,parent,name\n\n1,0,General\n".encode("utf-8"))
    assert parse_csv(str(path)) == [["id", "parent", "name"], ["1", "0", "General"]]


def test_parse_csv_empty_file_returns_no_rows(write_csv):
    assert parse_csv(write_csv("empty.csv", "")) == []


def test_parse_csv_missing_file_raises_oserror(tmp_path):
    with pytest.raises(FileNotFoundError):
        parse_csv(str(tmp_path / "nope.csv"))


def test_parse_csv_bad_quoting_raises_format_error(write_csv):
    path = write_csv("bad.csv", 'id,parent,name\n1,0,"General"x\n')
    with pytest.raises(RecordFormatError):
        parse_csv(path)


def test_parse_csv_ragged_rows_raise_format_error(write_csv):
    path = write_csv("ragged.csv", "id,parent,name\n1,0\n")
    with pytest.raises(RecordFormatError, match="expected 3 fields"):
        parse_csv(path)


def test_parse_csv_invalid_utf8_raises_format_error(tmp_path):
    path = tmp_path / "latin.csv"
    path.write_bytes(b"id,parent,name\n1,0,Caf\xe9\n")
    with pytest.raises(RecordFormatError):
        parse_csv(str(path))


@pytest.mark.parametrize(
    "raw, expected",
    [("42", 42), ("-3", -3), ("+4", 4), ("", 0), (" 5", 0), ("5.0", 0), ("abc", 0), ("1_000", 0),
     ("9223372036854775807", 2**63 - 1), ("9223372036854775808", 0), ("-9223372036854775809", 0)],
)
def test_lenient_int(raw, expected):
    assert lenient_int(raw) == expected


def test_process_categories_skips_header_and_keeps_order():
    rows = [["id", "parent", "name"], ["3", "0", "General"], ["7", "3", "Billing"], ["x", "", "Other"]]
    categories = process_categories(rows)
    assert [(c.id, c.parent, c.name) for c in categories] == [
        (3, 0, "General"),
        (7, 3, "Billing"),
        (0, 0, "Other"),
    ]


def test_process_categories_header_only():
    assert process_categories([["id", "parent", "name"]]) == []


def test_process_questions_converts_integer_columns():
    rows = [["name", "category", "id", "views"], ["How?", "1", "12", "oops"]]
    (question,) = process_questions(rows)
    assert question.name == "How?"
    assert question.category == 1
    assert question.id == 12
    assert question.views == 0


def test_process_answers_keeps_body_verbatim():
    rows = [["question", "body"], ["5", "  <p>hello</p>\n"]]
    (answer,) = process_answers(rows)
    assert answer.question == 5
    assert answer.body == "  <p>hello</p>\n"


def test_short_row_raises_format_error():
    with pytest.raises(RecordFormatError, match="Question row 2"):
        process_questions([["name", "category"], ["How?", "1"]])
