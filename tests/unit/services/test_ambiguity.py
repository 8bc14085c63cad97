"""Unit tests for request ambiguity detection."""

from __future__ import annotations

import pytest

from council_session.services.ambiguity import (
    REASON_NO_QUESTION,
    REASON_TOO_SHORT,
    REASON_VAGUE,
    detect_ambiguity,
)


class TestDetectAmbiguity:
    def test_clear_request(self) -> None:
        result = detect_ambiguity("How should we design the architecture for our payment system?")

        assert result.ambiguous is False
        assert result.reasons == []

    def test_short_vague_request_collects_every_reason(self) -> None:
        result = detect_ambiguity("help with stuff")

        assert result.ambiguous is True
        assert result.reasons == [REASON_TOO_SHORT, REASON_NO_QUESTION, REASON_VAGUE]

    def test_missing_question_word(self) -> None:
        result = detect_ambiguity("Please review our deployment pipeline configuration")

        assert result.reasons == [REASON_NO_QUESTION]

    def test_length_uses_trimmed_text(self) -> None:
        result = detect_ambiguity("   why is it slow?          ")

        assert REASON_TOO_SHORT in result.reasons

    @pytest.mark.parametrize("word", ["How", "WHAT", "why", "Which", "who"])
    def test_question_words_are_case_insensitive(self, word: str) -> None:
        result = detect_ambiguity(f"{word} would you approach the database migration plan")

        assert REASON_NO_QUESTION not in result.reasons

    def test_question_word_needs_word_boundary(self) -> None:
        result = detect_ambiguity("Somewhat detailed showhow of the migration plan")

        assert REASON_NO_QUESTION in result.reasons

    @pytest.mark.parametrize("phrase", ["something", "somehow", "maybe", "Not Sure"])
    def test_vague_language(self, phrase: str) -> None:
        result = detect_ambiguity(f"How do we handle the release, {phrase} about rollback timing")

        assert REASON_VAGUE in result.reasons

    def test_is_deterministic(self) -> None:
        text = "what now"

        assert detect_ambiguity(text) == detect_ambiguity(text)
