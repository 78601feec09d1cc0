from __future__ import annotations

import json
from pathlib import Path

import pytest

from trivia.enums import CatalogFormat
from trivia.exceptions import FormatError, UnsupportedFormatError
from trivia.loaders import detect_format, load_catalog, load_csv, load_json, load_xml

CSV_TEXT = """Category,Value,Question,OptionA,OptionB,OptionC,OptionD,CorrectAnswer
Science,100,What is H2O?,Water,Salt,Sugar,Air,a
Science,200,"Which is a noble gas, chemically?",Oxygen,Neon,Iron,Carbon,B
Math,100,"What is ""2 + 2""?",3,4,5,22,b
"""

JSON_RECORDS = [
    {
        "Category": "Science",
        "Value": 100,
        "Question": "What is H2O?",
        "Options": {"A": "Water", "B": "Salt", "C": "Sugar", "D": "Air"},
        "CorrectAnswer": "a",
    },
    {
        "Category": " Science ",
        "Value": "200",
        "Question": "Which is a noble gas, chemically?",
        "Options": {"a": "Oxygen", "b": "Neon", "c": "Iron", "d": "Carbon"},
        "CorrectAnswer": "B",
    },
    {
        "Category": "Math",
        "Value": 100,
        "Question": 'What is "2 + 2"?',
        "Options": {"A": "3", "B": "4", "C": "5", "D": "22"},
        "CorrectAnswer": "b",
    },
]

XML_TEXT = """<?xml version="1.0" encoding="UTF-8"?>
<JeopardyQuestions>
  <QuestionItem>
    <Category>Science</Category>
    <Value>100</Value>
    <QuestionText>What is H2O?</QuestionText>
    <Options>
      <OptionA>Water</OptionA>
      <OptionB>Salt</OptionB>
      <OptionC>Sugar</OptionC>
      <OptionD>Air</OptionD>
    </Options>
    <CorrectAnswer>a</CorrectAnswer>
  </QuestionItem>
  <QuestionItem>
    <Category>Science</Category>
    <Value> 200 </Value>
    <QuestionText>Which is a noble gas, chemically?</QuestionText>
    <Options>
      <OptionA>Oxygen</OptionA>
      <OptionB>Neon</OptionB>
      <OptionC>Iron</OptionC>
      <OptionD>Carbon</OptionD>
    </Options>
    <CorrectAnswer>B</CorrectAnswer>
  </QuestionItem>
  <QuestionItem>
    <Category>Math</Category>
    <Value>100</Value>
    <QuestionText>What is "2 + 2"?</QuestionText>
    <Options>
      <OptionA>3</OptionA>
      <OptionB>4</OptionB>
      <OptionC>5</OptionC>
      <OptionD>22</OptionD>
    </Options>
    <CorrectAnswer>b</CorrectAnswer>
  </QuestionItem>
</JeopardyQuestions>
"""

HEADER = "Category,Value,Question,OptionA,OptionB,OptionC,OptionD,CorrectAnswer\n"


def _write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_all_formats_produce_the_same_catalog(tmp_path: Path) -> None:
    csv_catalog = load_catalog(_write(tmp_path, "bank.csv", CSV_TEXT))
    json_catalog = load_catalog(_write(tmp_path, "bank.json", json.dumps(JSON_RECORDS)))
    xml_catalog = load_catalog(_write(tmp_path, "bank.xml", XML_TEXT))

    assert csv_catalog == json_catalog == xml_catalog
    assert csv_catalog.category_names == ("Science", "Math")
    assert csv_catalog.total_questions == 3


def test_csv_handles_quoted_commas_and_escaped_quotes(tmp_path: Path) -> None:
    catalog = load_csv(_write(tmp_path, "bank.csv", CSV_TEXT))

    noble = catalog.question("Science", 200)
    math = catalog.question("Math", 100)
    assert noble is not None and noble.text == "Which is a noble gas, chemically?"
    assert math is not None and math.text == 'What is "2 + 2"?'


def test_loaders_trim_text_and_uppercase_correct_key(tmp_path: Path) -> None:
    text = HEADER + "  Science , 100 ,  What is H2O?  , Water ,Salt,Sugar,Air, c \n"
    catalog = load_csv(_write(tmp_path, "bank.csv", text))

    question = catalog.question("Science", 100)
    assert question is not None
    assert question.category == "Science"
    assert question.text == "What is H2O?"
    assert question.options["A"] == "Water"
    assert question.correct_key == "C"


def test_csv_row_with_seven_columns_fails_with_line_reference(tmp_path: Path) -> None:
    text = HEADER + "Science,100,What is H2O?,Water,Salt,Sugar,Air,A\n"
    text += "Science,200,Short row,Oxygen,Neon,Iron,B\n"

    with pytest.raises(FormatError) as excinfo:
        load_csv(_write(tmp_path, "bank.csv", text))

    assert excinfo.value.record_index == 3
    assert "line 3" in str(excinfo.value)


def test_csv_error_line_counts_blank_lines(tmp_path: Path) -> None:
    text = HEADER + "\nScience,100,What is H2O?,Water,Salt,Sugar,Air,A\n\n"
    text += "Science,200,Short row,Oxygen,Neon,Iron,B\n"

    with pytest.raises(FormatError) as excinfo:
        load_csv(_write(tmp_path, "bank.csv", text))

    assert excinfo.value.record_index == 5
    assert "line 5" in str(excinfo.value)


def test_csv_non_numeric_value_fails(tmp_path: Path) -> None:
    text = HEADER + "Science,one hundred,What is H2O?,Water,Salt,Sugar,Air,A\n"

    with pytest.raises(FormatError) as excinfo:
        load_csv(_write(tmp_path, "bank.csv", text))

    assert excinfo.value.field_name == "Value"
    assert excinfo.value.record_index == 2


def test_csv_wrong_header_fails(tmp_path: Path) -> None:
    text = "Cat,Val,Q,A,B,C,D,Answer\nScience,100,Q?,a,b,c,d,A\n"

    with pytest.raises(FormatError):
        load_csv(_write(tmp_path, "bank.csv", text))


def test_csv_skips_blank_lines(tmp_path: Path) -> None:
    text = HEADER + "\nScience,100,What is H2O?,Water,Salt,Sugar,Air,A\n\n"

    assert load_csv(_write(tmp_path, "bank.csv", text)).total_questions == 1


def test_json_missing_field_fails(tmp_path: Path) -> None:
    records = [dict(JSON_RECORDS[0])]
    del records[0]["CorrectAnswer"]

    with pytest.raises(FormatError) as excinfo:
        load_json(_write(tmp_path, "bank.json", json.dumps(records)))

    assert excinfo.value.field_name == "CorrectAnswer"
    assert excinfo.value.record_index == 1


def test_json_wrong_option_count_fails(tmp_path: Path) -> None:
    records = [dict(JSON_RECORDS[0], Options={"A": "Water", "B": "Salt", "C": "Sugar"})]

    with pytest.raises(FormatError) as excinfo:
        load_json(_write(tmp_path, "bank.json", json.dumps(records)))

    assert excinfo.value.field_name == "Options"


def test_json_rejects_non_numeric_value_and_bad_shape(tmp_path: Path) -> None:
    records = [dict(JSON_RECORDS[0], Value="lots")]
    with pytest.raises(FormatError):
        load_json(_write(tmp_path, "value.json", json.dumps(records)))

    with pytest.raises(FormatError):
        load_json(_write(tmp_path, "object.json", json.dumps({"Category": "Science"})))

    with pytest.raises(FormatError):
        load_json(_write(tmp_path, "broken.json", "[{"))


def test_xml_missing_element_fails(tmp_path: Path) -> None:
    text = XML_TEXT.replace("<CorrectAnswer>b</CorrectAnswer>", "")

    with pytest.raises(FormatError) as excinfo:
        load_xml(_write(tmp_path, "bank.xml", text))

    assert excinfo.value.record_index == 3
    assert excinfo.value.field_name == "CorrectAnswer"


def test_xml_accepts_question_tag_fallback(tmp_path: Path) -> None:
    text = XML_TEXT.replace("QuestionText>", "Question>")

    assert load_xml(_write(tmp_path, "bank.xml", text)) == load_xml(
        _write(tmp_path, "reference.xml", XML_TEXT)
    )


def test_xml_extra_option_fails(tmp_path: Path) -> None:
    text = XML_TEXT.replace(
        "<OptionD>Air</OptionD>", "<OptionD>Air</OptionD><OptionE>Fire</OptionE>"
    )

    with pytest.raises(FormatError):
        load_xml(_write(tmp_path, "bank.xml", text))


def test_xml_malformed_document_fails(tmp_path: Path) -> None:
    with pytest.raises(FormatError):
        load_xml(_write(tmp_path, "bank.xml", "<JeopardyQuestions><QuestionItem>"))


def test_unsupported_extension_is_rejected_before_reading(tmp_path: Path) -> None:
    missing = tmp_path / "bank.yaml"

    with pytest.raises(UnsupportedFormatError):
        load_catalog(missing)


def test_detect_format_is_case_insensitive() -> None:
    assert detect_format("Bank.CSV") is CatalogFormat.CSV
    assert detect_format("bank.json") is CatalogFormat.JSON
    assert detect_format("bank.Xml") is CatalogFormat.XML


def test_unreadable_file_is_a_format_error(tmp_path: Path) -> None:
    with pytest.raises(FormatError):
        load_catalog(tmp_path / "missing.csv")
