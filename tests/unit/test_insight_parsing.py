"""
Unit tests for splitting AI output into per-question answers.
"""

from datetime import date

import pytest

from app.features.reports.service import FALLBACK_ANSWER, build_insights_prompt, parse_answers


@pytest.mark.unit
class TestParseAnswers:
    """Numbered answers are keyed by number, otherwise by line position."""

    def test_one_line_per_answer(self):
        assert parse_answers("First.\nSecond.", 2) == ["First.", "Second."]

    def test_numbered_answers_keyed_by_number(self):
        text = "1. Recycling rose.\n\n3) Add glass.\n2: Logistics fell."

        assert parse_answers(text, 3) == ["Recycling rose.", "Logistics fell.", "Add glass."]

    def test_empty_numbered_answer_keeps_later_answers_in_place(self):
        assert parse_answers("1. Answer one\n2.\n3. Answer three", 3) == [
            "Answer one",
            FALLBACK_ANSWER,
            "Answer three",
        ]

    def test_blank_line_keeps_its_position(self):
        assert parse_answers("Answer one\n\nAnswer three", 3) == [
            "Answer one",
            FALLBACK_ANSWER,
            "Answer three",
        ]

    def test_unnumbered_lines_continue_numbered_answer(self):
        text = "1. Recycling rose.\nMostly cardboard.\n2. Logistics fell."

        assert parse_answers(text, 2) == ["Recycling rose. Mostly cardboard.", "Logistics fell."]

    def test_numbers_out_of_range_ignored(self):
        assert parse_answers("1. Kept.\n7. Dropped.", 2) == ["Kept.", FALLBACK_ANSWER]

    def test_decimal_at_line_start_is_not_numbering(self):
        assert parse_answers("3.5 tonnes were diverted.", 1) == ["3.5 tonnes were diverted."]

    def test_bullets_stripped_in_positional_output(self):
        assert parse_answers("- First.\n* Second.", 2) == ["First.", "Second."]

    def test_missing_lines_get_fallback(self):
        assert parse_answers("Only one.", 3) == ["Only one.", FALLBACK_ANSWER, FALLBACK_ANSWER]

    def test_extra_lines_dropped(self):
        assert parse_answers("a\nb\nc", 2) == ["a", "b"]

    def test_empty_output(self):
        assert parse_answers("", 1) == [FALLBACK_ANSWER]


@pytest.mark.unit
class TestInsightsPrompt:

    def test_prompt_lists_questions_in_order(self):
        prompt = build_insights_prompt(
            "Global Tech Corp",
            date(2025, 1, 1),
            date(2025, 3, 31),
            1250.0,
            ["How did we do?", "What next?"],
        )

        assert "Global Tech Corp" in prompt
        assert "2025-01-01 to 2025-03-31" in prompt
        assert "1250.00 kg" in prompt
        assert prompt.index("1. How did we do?") < prompt.index("2. What next?")
