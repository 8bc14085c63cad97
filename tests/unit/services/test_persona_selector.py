"""Unit tests for keyword-based persona selection."""

from __future__ import annotations

from council_session.services.persona_selector import (
    DEFAULT_PERSONAS,
    REASON_DEFAULTS,
    REASON_MATCHED,
    REASON_USER_OVERRIDE,
    build_persona_selection,
    select_personas_for_request,
)


class TestSelectPersonasForRequest:
    def test_explicit_personas_returned_verbatim(self) -> None:
        result = select_personas_for_request(
            "How do we secure our kubernetes cluster?",
            ["Security Expert", "Tech Lead"],
        )

        assert result.selected == ["Security Expert", "Tech Lead"]
        assert result.user_override is True
        assert result.reason == REASON_USER_OVERRIDE
        assert result.classification == "user_override"

    def test_empty_explicit_list_falls_back_to_keywords(self) -> None:
        result = select_personas_for_request("How do we improve latency?", [])

        assert result.user_override is False
        assert result.selected == ["Senior Developer"]

    def test_security_keywords(self) -> None:
        result = select_personas_for_request("How do we handle a vulnerability disclosure?")

        assert result.selected == ["Security Expert"]
        assert result.reason == REASON_MATCHED
        assert result.classification == "security"

    def test_multiple_domains_in_rule_order(self) -> None:
        result = select_personas_for_request("What is the security posture of our docker pipeline design?")

        assert result.selected == ["Security Expert", "DevOps Engineer", "Senior Architect"]
        assert result.matched_domains == ["security", "devops", "architecture"]
        assert result.classification == "security+devops+architecture"

    def test_keywords_are_case_insensitive(self) -> None:
        result = select_personas_for_request("Our ROADMAP needs QA coverage")

        assert result.selected == ["Product Owner", "QA Engineer"]

    def test_no_match_uses_defaults(self) -> None:
        result = select_personas_for_request("Should we hire more people?")

        assert result.selected == list(DEFAULT_PERSONAS)
        assert result.reason == REASON_DEFAULTS
        assert result.used_defaults is True
        assert result.classification == "default"


class TestBuildPersonaSelection:
    def test_records_heuristic_choice(self) -> None:
        result = select_personas_for_request("How do we reduce latency?")

        selection = build_persona_selection("s1", "How do we reduce latency?", result)

        assert selection.session_id == "s1"
        assert selection.selected_personas == ["Senior Developer"]
        assert selection.request_classification == "performance"
        assert selection.user_override is False
        assert selection.overridden_personas is None

    def test_override_lists_replaced_personas(self) -> None:
        text = "How do we reduce latency?"
        result = select_personas_for_request(text, ["QA Engineer"])

        selection = build_persona_selection("s1", text, result)

        assert selection.user_override is True
        assert selection.overridden_personas == ["Senior Developer"]
