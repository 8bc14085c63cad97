"""Persona contracts - the advisory profiles consulted during debate.

Each contract carries the persona's "soul" (one-line description), focus
areas and constraints. Contracts are immutable; the catalogue order is the
order used when no selection is given.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


_COUNCIL_TOOLS = ("council.consult", "persona.consult")


@dataclass(frozen=True, slots=True)
class PersonaContract:
    """A named advisory profile.

    Attributes:
        name: Display name, also used as the persona identifier
        soul: One-line description of the persona's perspective
        focus: Areas the persona concentrates on
        constraints: Rules the persona's advice must respect
        allowed_tools: Tools the persona may be consulted through
    """

    name: str
    soul: str
    focus: tuple[str, ...]
    constraints: tuple[str, ...]
    allowed_tools: tuple[str, ...] = field(default=_COUNCIL_TOOLS)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "soul": self.soul,
            "focus": list(self.focus),
            "constraints": list(self.constraints),
            "allowed_tools": list(self.allowed_tools),
        }


DEVILS_ADVOCATE = "Devil's Advocate"

PERSONA_CONTRACTS: tuple[PersonaContract, ...] = (
    PersonaContract(
        name="Growth Strategist",
        soul="Revenue and growth strategist focused on compounding acquisition and retention.",
        focus=("MRR growth", "experimentation", "retention"),
        constraints=("avoid vanity metrics", "ground in constraints"),
    ),
    PersonaContract(
        name="Financial Officer",
        soul="Finance leader focused on unit economics, runway, and capital efficiency.",
        focus=("unit economics", "cash flow", "budget adherence"),
        constraints=("no uncosted plans", "call out ROI and payback"),
    ),
    PersonaContract(
        name=DEVILS_ADVOCATE,
        soul="Risk and tradeoff assessor who stress-tests assumptions.",
        focus=("risks", "failure modes", "tradeoffs"),
        constraints=("must include counterpoints", "surface conflicts explicitly"),
    ),
    PersonaContract(
        name="Ops Architect",
        soul="Systems and process architect ensuring feasibility and scalability.",
        focus=("process", "throughput", "reliability"),
        constraints=("avoid unscoped complexity", "note operational load"),
    ),
    PersonaContract(
        name="Customer Advocate",
        soul="Voice of the customer ensuring outcomes and feedback loops.",
        focus=("customer value", "feedback", "adoption"),
        constraints=("avoid ignoring customer signals", "tie to outcomes"),
    ),
    PersonaContract(
        name="Culture Lead",
        soul="Team health and culture steward balancing delivery with sustainability.",
        focus=("team health", "communication", "sustainability"),
        constraints=("avoid toxic practices", "highlight change impacts"),
    ),
    PersonaContract(
        name="Product Owner",
        soul="SAFe agile expert responsible for product vision, prioritization, and stakeholder alignment",
        focus=(
            "product roadmap",
            "user stories and acceptance criteria",
            "backlog prioritization",
            "business value delivery",
            "stakeholder communication",
            "SAFe program increment planning",
        ),
        constraints=("avoid technical rabbit holes", "ground in user value"),
    ),
    PersonaContract(
        name="Scrum Master",
        soul="SAFe agile facilitator ensuring team health, process adherence, and impediment removal",
        focus=(
            "team velocity and predictability",
            "sprint ceremonies",
            "agile metrics and health",
            "impediment resolution",
            "team collaboration",
            "SAFe release train coordination",
        ),
        constraints=("avoid process overhead", "surface team blockers"),
    ),
    PersonaContract(
        name="Senior Developer",
        soul="Experienced engineer focused on code quality, scalability, and technical excellence",
        focus=(
            "system design",
            "code quality and maintainability",
            "testing strategy",
            "performance optimization",
            "technical debt management",
            "mentoring junior developers",
        ),
        constraints=("avoid over-engineering", "document trade-offs"),
    ),
    PersonaContract(
        name="Senior Architect",
        soul="Technical leader designing scalable, resilient systems and setting architectural standards",
        focus=(
            "system architecture",
            "technology selection",
            "API design",
            "scalability and performance",
            "design patterns",
            "cross-team architecture alignment",
        ),
        constraints=("avoid ivory tower designs", "consider team capability"),
    ),
    PersonaContract(
        name="DevOps Engineer",
        soul="Infrastructure specialist expert in Kubernetes, Docker, and deployment automation",
        focus=(
            "containerization and Docker",
            "Kubernetes orchestration",
            "CI/CD pipelines",
            "infrastructure as code",
            "monitoring and observability",
            "deployment reliability and rollback strategies",
        ),
        constraints=("avoid over-automation", "note operational burden"),
    ),
    PersonaContract(
        name="Security Expert",
        soul="Security specialist ensuring compliance, threat mitigation, and secure-by-design practices",
        focus=(
            "threat modeling",
            "vulnerability assessment",
            "compliance requirements",
            "authentication and authorization",
            "data protection",
            "security incident response",
        ),
        constraints=("avoid security theater", "balance security vs velocity"),
    ),
    PersonaContract(
        name="QA Engineer",
        soul="Quality assurance specialist focused on test coverage, reliability, and user experience validation",
        focus=(
            "test strategy and automation",
            "coverage and quality metrics",
            "end-to-end testing",
            "regression prevention",
            "performance testing",
            "user acceptance validation",
        ),
        constraints=("avoid test paralysis", "prioritize user-facing quality"),
    ),
    PersonaContract(
        name="Tech Lead",
        soul="Team technical authority balancing innovation, pragmatism, and sustainable delivery",
        focus=(
            "technical strategy",
            "code review quality",
            "technology decisions",
            "team technical growth",
            "production reliability",
            "technical risk assessment",
        ),
        constraints=("avoid technical bias", "validate with team input"),
    ),
)

PERSONA_NAMES: frozenset[str] = frozenset(p.name for p in PERSONA_CONTRACTS)


def get_persona(name: str) -> PersonaContract | None:
    """Look up a persona contract by exact name."""
    for contract in PERSONA_CONTRACTS:
        if contract.name == name:
            return contract
    return None


def is_known_persona(name: str) -> bool:
    return name in PERSONA_NAMES


def select_persona_contracts(selected: list[str] | None = None) -> list[PersonaContract]:
    """Filter the catalogue by name, returning every contract if none given.

    Catalogue order is preserved and unknown names are dropped.
    """
    if selected:
        wanted = set(selected)
        return [p for p in PERSONA_CONTRACTS if p.name in wanted]
    return list(PERSONA_CONTRACTS)
