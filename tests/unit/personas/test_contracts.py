"""Unit tests for the persona catalogue."""

from __future__ import annotations

from council_session.personas.contracts import (
    DEVILS_ADVOCATE,
    PERSONA_CONTRACTS,
    PERSONA_NAMES,
    get_persona,
    is_known_persona,
    select_persona_contracts,
)


class TestCatalogue:
    def test_has_fourteen_personas(self) -> None:
        assert len(PERSONA_CONTRACTS) == 14
        assert len(PERSONA_NAMES) == 14

    def test_includes_selector_personas(self) -> None:
        for name in (
            "Security Expert",
            "DevOps Engineer",
            "Senior Architect",
            "Senior Developer",
            "Product Owner",
            "QA Engineer",
        ):
            assert is_known_persona(name)

    def test_includes_devils_advocate(self) -> None:
        assert DEVILS_ADVOCATE in PERSONA_NAMES

    def test_every_contract_has_soul_and_focus(self) -> None:
        for contract in PERSONA_CONTRACTS:
            assert contract.soul
            assert contract.focus
            assert contract.constraints


class TestLookup:
    def test_get_persona_exact_name(self) -> None:
        contract = get_persona("QA Engineer")

        assert contract is not None
        assert contract.name == "QA Engineer"

    def test_get_persona_unknown(self) -> None:
        assert get_persona("qa engineer") is None
        assert not is_known_persona("Wizard")

    def test_to_dict_uses_lists(self) -> None:
        data = get_persona("Tech Lead").to_dict()

        assert data["name"] == "Tech Lead"
        assert isinstance(data["focus"], list)
        assert data["allowed_tools"] == ["council.consult", "persona.consult"]


class TestSelectPersonaContracts:
    def test_none_returns_full_catalogue(self) -> None:
        assert select_persona_contracts() == list(PERSONA_CONTRACTS)

    def test_preserves_catalogue_order_and_drops_unknown(self) -> None:
        selected = select_persona_contracts(["Tech Lead", "Wizard", "Growth Strategist"])

        assert [c.name for c in selected] == ["Growth Strategist", "Tech Lead"]
