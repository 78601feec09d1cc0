from __future__ import annotations

from trivia.models import Catalog, Category, Question, option_mapping


def _question(category: str = "Science", value: int = 100, correct: str = "a") -> Question:
    return Question(
        category=category,
        value=value,
        text="What is H2O?",
        options=option_mapping(["Water", "Salt", "Sugar", "Air"]),
        correct_key=correct,
    )


def test_question_normalises_correct_key_and_compares_case_insensitively() -> None:
    question = _question(correct=" b ")

    assert question.correct_key == "B"
    assert question.is_correct("b")
    assert question.is_correct(" B ")
    assert not question.is_correct("A")
    assert not question.is_correct("")
    assert not question.is_correct(None)


def test_option_text_resolves_keys_and_reports_unknown_ones() -> None:
    question = _question()

    assert question.option_text("a") == "Water"
    assert question.option_text("D") == "Air"
    assert question.option_text("E") is None
    assert question.correct_text == "Water"


def test_category_orders_questions_by_value() -> None:
    category = Category(
        "Science", (_question(value=300), _question(value=100), _question(value=200))
    )

    assert category.values == (100, 200, 300)
    assert category.question(200) is category.questions[1]
    assert category.question(400) is None


def test_from_questions_groups_in_first_seen_order() -> None:
    catalog = Catalog.from_questions(
        [
            _question("Math", 100),
            _question("Science", 100),
            _question("Math", 200),
        ]
    )

    assert catalog.category_names == ("Math", "Science")
    assert catalog.total_categories == 2
    assert catalog.total_questions == 3


def test_lookup_ignores_category_case() -> None:
    catalog = Catalog.from_questions([_question("Science", 100)])

    assert catalog.category("science") is catalog.categories[0]
    assert catalog.question("SCIENCE", 100) is not None
    assert catalog.question("Science", 200) is None
    assert catalog.question("History", 100) is None


def test_copy_keeps_answered_flags_independent() -> None:
    original = Catalog.from_questions([_question("Science", 100), _question("Science", 200)])
    duplicate = original.copy()

    assert duplicate == original
    duplicate.question("Science", 100).mark_answered()  # type: ignore[union-attr]

    assert not original.question("Science", 100).answered  # type: ignore[union-attr]
    assert original.categories[0].has_available_questions()
    assert [q.value for q in duplicate.categories[0].available_questions()] == [200]


def test_all_answered_tracks_every_question() -> None:
    catalog = Catalog.from_questions([_question("Science", 100), _question("Math", 100)])
    assert not catalog.all_answered()
    for question in catalog.questions:
        question.mark_answered()
    assert catalog.all_answered()
    assert Catalog().is_empty()
