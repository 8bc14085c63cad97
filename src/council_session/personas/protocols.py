"""Protocol definition for persona draft generators.

The discussion orchestrator depends only on this duck-typed interface, so a
model-backed generator can replace the static catalogue without touching
orchestration code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from council_session.personas.contracts import PersonaContract
    from council_session.personas.generators import ConsultInput, PersonaDraft


@runtime_checkable
class DraftGenerator(Protocol):
    """Produces persona drafts for debate turns.

    Example:
        >>> class MyGenerator:
        ...     def resolve(self, persona_name): ...
        ...     async def generate(self, persona, consult_input): ...
        >>>
        >>> isinstance(MyGenerator(), DraftGenerator)
        True
    """

    def resolve(self, persona_name: str) -> PersonaContract:
        """Resolve a persona name to the profile used for generation.

        Raises:
            UnknownPersonaError: If the persona is not known to the generator.
        """
        ...

    async def generate(
        self,
        persona: PersonaContract,
        consult_input: ConsultInput,
    ) -> PersonaDraft:
        """Produce a draft for ``persona``. Must not have side effects."""
        ...
