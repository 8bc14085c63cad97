"""Persona catalogue and draft generation."""

from council_session.personas.contracts import (
    DEVILS_ADVOCATE,
    PERSONA_CONTRACTS,
    PERSONA_NAMES,
    PersonaContract,
    get_persona,
    is_known_persona,
    select_persona_contracts,
)
from council_session.personas.generators import (
    ConsultInput,
    ContractDraftGenerator,
    Depth,
    PersonaDraft,
    clip_by_depth,
    generate_devils_advocate_draft,
    generate_persona_draft,
)
from council_session.personas.protocols import DraftGenerator

__all__ = [
    "DEVILS_ADVOCATE",
    "PERSONA_CONTRACTS",
    "PERSONA_NAMES",
    "ConsultInput",
    "ContractDraftGenerator",
    "Depth",
    "DraftGenerator",
    "PersonaContract",
    "PersonaDraft",
    "clip_by_depth",
    "generate_devils_advocate_draft",
    "generate_persona_draft",
    "get_persona",
    "is_known_persona",
    "select_persona_contracts",
]
