"""Question bank loaders for CSV, JSON and XML files."""

from __future__ import annotations

import csv
import io
import json
import logging
import xml.etree.ElementTree as ElementTree
from pathlib import Path
from typing import Any, Callable, Dict, Mapping

from .enums import OPTION_KEYS, CatalogFormat
from .exceptions import FormatError, UnsupportedFormatError
from .models import Catalog, Question, option_mapping

logger = logging.getLogger(__name__)

CSV_HEADER: tuple[str, ...] = (
    "Category",
    "Value",
    "Question",
    "OptionA",
    "OptionB",
    "OptionC",
    "OptionD",
    "CorrectAnswer",
)

JSON_FIELDS: tuple[str, ...] = ("Category", "Value", "Question", "Options", "CorrectAnswer")

XML_OPTION_TAGS: tuple[str, ...] = tuple(f"Option{key}" for key in OPTION_KEYS)


def detect_format(path: str | Path) -> CatalogFormat:
    """Return the catalog format implied by the file extension."""

    suffix = Path(path).suffix.lower()
    try:
        return CatalogFormat(suffix)
    except ValueError:
        supported = ", ".join(fmt.value for fmt in CatalogFormat)
        raise UnsupportedFormatError(
            f"Unsupported question file extension '{suffix or '(none)'}'. "
            f"Expected one of: {supported}"
        ) from None


def load_catalog(path: str | Path) -> Catalog:
    """Load a question bank, choosing the parser from the file extension.

    Args:
        path: Location of a ``.csv``, ``.json`` or ``.xml`` question bank.

    Returns:
        The parsed (not yet validated) catalog.

    Raises:
        UnsupportedFormatError: If the extension is not recognised. No read is attempted.
        FormatError: If the file cannot be read or any record is malformed.
    """
    source = Path(path)
    catalog_format = detect_format(source)
    catalog = _LOADERS[catalog_format](source)
    logger.info(
        "Loaded %d question(s) in %d categories from %s",
        catalog.total_questions,
        catalog.total_categories,
        source,
    )
    return catalog


def load_csv(path: str | Path) -> Catalog:
    """Parse a CSV question bank with the standard eight-column header.

    Errors report the file line of the offending row in ``record_index``.
    """

    source = Path(path)
    text = _read_text(source)
    reader = csv.reader(io.StringIO(text, newline=""))
    rows = [(reader.line_num, row) for row in reader if row]
    if not rows:
        return Catalog()

    header_line, header_row = rows[0]
    header = tuple(cell.strip() for cell in header_row)
    if tuple(cell.casefold() for cell in header) != tuple(
        column.casefold() for column in CSV_HEADER
    ):
        raise FormatError(
            f"{source.name}: unexpected CSV header {list(header)}; expected {list(CSV_HEADER)}",
            record_index=header_line,
        )

    questions: list[Question] = []
    for line, row in rows[1:]:
        if len(row) != len(CSV_HEADER):
            raise FormatError(
                f"{source.name}: line {line} has {len(row)} column(s), "
                f"expected {len(CSV_HEADER)}",
                record_index=line,
            )
        cells = [cell.strip() for cell in row]
        category, value_raw, text_raw = cells[0], cells[1], cells[2]
        questions.append(
            Question(
                category=category,
                value=_parse_value(value_raw, source, line, unit="line"),
                text=text_raw,
                options=option_mapping(cells[3:7]),
                correct_key=cells[7].upper(),
            )
        )
    return Catalog.from_questions(questions)


def load_json(path: str | Path) -> Catalog:
    """Parse a JSON question bank: an array of question objects."""

    source = Path(path)
    text = _read_text(source)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FormatError(f"{source.name}: invalid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise FormatError(f"{source.name}: top-level JSON value must be an array")

    questions: list[Question] = []
    for index, item in enumerate(data, start=1):
        if not isinstance(item, Mapping):
            raise FormatError(
                f"{source.name}: record {index} must be an object", record_index=index
            )
        for field_name in JSON_FIELDS:
            if field_name not in item or item[field_name] is None:
                raise FormatError(
                    f"{source.name}: record {index} is missing '{field_name}'",
                    record_index=index,
                    field_name=field_name,
                )
        questions.append(
            Question(
                category=_json_text(item, "Category", source, index),
                value=_parse_value(item["Value"], source, index),
                text=_json_text(item, "Question", source, index),
                options=_json_options(item["Options"], source, index),
                correct_key=_json_text(item, "CorrectAnswer", source, index).upper(),
            )
        )
    return Catalog.from_questions(questions)


def load_xml(path: str | Path) -> Catalog:
    """Parse an XML question bank made of ``<QuestionItem>`` elements."""

    source = Path(path)
    raw = _read_bytes(source)
    try:
        root = ElementTree.fromstring(raw)
    except ElementTree.ParseError as exc:
        raise FormatError(f"{source.name}: invalid XML: {exc}") from exc

    items = [root] if root.tag == "QuestionItem" else list(root.iter("QuestionItem"))
    questions: list[Question] = []
    for index, element in enumerate(items, start=1):
        question_tag = "QuestionText" if element.find("QuestionText") is not None else "Question"
        options_element = element.find("Options")
        if options_element is None:
            raise FormatError(
                f"{source.name}: QuestionItem {index} is missing <Options>",
                record_index=index,
                field_name="Options",
            )
        option_tags = [child.tag for child in options_element]
        if sorted(option_tags) != sorted(XML_OPTION_TAGS):
            raise FormatError(
                f"{source.name}: QuestionItem {index} must have exactly "
                f"{', '.join(XML_OPTION_TAGS)} under <Options>, found {option_tags}",
                record_index=index,
                field_name="Options",
            )
        questions.append(
            Question(
                category=_xml_text(element, "Category", source, index),
                value=_parse_value(_xml_text(element, "Value", source, index), source, index),
                text=_xml_text(element, question_tag, source, index),
                options=option_mapping(
                    _xml_text(options_element, tag, source, index) for tag in XML_OPTION_TAGS
                ),
                correct_key=_xml_text(element, "CorrectAnswer", source, index).upper(),
            )
        )
    return Catalog.from_questions(questions)


_LOADERS: Dict[CatalogFormat, Callable[[Path], Catalog]] = {
    CatalogFormat.CSV: load_csv,
    CatalogFormat.JSON: load_json,
    CatalogFormat.XML: load_xml,
}


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise FormatError(f"Unable to read question file {path}: {exc}") from exc


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise FormatError(f"Unable to read question file {path}: {exc}") from exc


def _parse_value(raw: Any, source: Path, index: int, unit: str = "record") -> int:
    if isinstance(raw, bool):
        raise FormatError(
            f"{source.name}: {unit} {index} has non-numeric Value {raw!r}",
            record_index=index,
            field_name="Value",
        )
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        raise FormatError(
            f"{source.name}: {unit} {index} has non-numeric Value {raw!r}",
            record_index=index,
            field_name="Value",
        ) from None


def _json_text(item: Mapping[str, Any], field_name: str, source: Path, index: int) -> str:
    value = item[field_name]
    if not isinstance(value, str):
        raise FormatError(
            f"{source.name}: record {index} field '{field_name}' must be a string",
            record_index=index,
            field_name=field_name,
        )
    return value.strip()


def _json_options(raw: Any, source: Path, index: int) -> dict[str, str]:
    if not isinstance(raw, Mapping):
        raise FormatError(
            f"{source.name}: record {index} field 'Options' must be an object",
            record_index=index,
            field_name="Options",
        )
    options = {str(key).strip().upper(): text for key, text in raw.items()}
    if sorted(options) != list(OPTION_KEYS) or len(options) != len(raw):
        raise FormatError(
            f"{source.name}: record {index} must have exactly options "
            f"{', '.join(OPTION_KEYS)}, found {sorted(str(key) for key in raw)}",
            record_index=index,
            field_name="Options",
        )
    for key, text in options.items():
        if not isinstance(text, str):
            raise FormatError(
                f"{source.name}: record {index} option {key} must be a string",
                record_index=index,
                field_name=f"Options.{key}",
            )
    return {key: options[key].strip() for key in OPTION_KEYS}


def _xml_text(parent: ElementTree.Element, tag: str, source: Path, index: int) -> str:
    child = parent.find(tag)
    if child is None:
        raise FormatError(
            f"{source.name}: QuestionItem {index} is missing <{tag}>",
            record_index=index,
            field_name=tag,
        )
    return "".join(child.itertext()).strip()

