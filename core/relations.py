"""
Intertype relation classification.

A pair of type records is classified by walking an ordered rule list;
the first rule whose predicate holds decides the label. Predicates are
not mutually exclusive, so the order below is the tie-break policy:

    Identity > Duality > Activation > Mirror > Semi-duality
        > Extinguishment > Business > Conflict > Super-ego

Every predicate reads the raw record fields (never an earlier label), and
each one states its own exclusions, so the table stays correct when the
rules are inspected or evaluated in isolation.

Usage:
    from core.relations import classify
    classify(lii, ese, duals).label  # RelationLabel.DUALITY
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from core.catalog import DualPairSet
from core.models import Quadra, RelationLabel, TypeRecord

# =============================================================================
# CONFIGURATION
# =============================================================================

# Cyclic quadra order used for distance calculations
QUADRA_ORDER = [Quadra.ALPHA, Quadra.BETA, Quadra.GAMMA, Quadra.DELTA]

RELATION_COLORS = {
    RelationLabel.IDENTITY: "#475569",
    RelationLabel.DUALITY: "#16a34a",
    RelationLabel.ACTIVATION: "#06b6d4",
    RelationLabel.MIRROR: "#6366f1",
    RelationLabel.SEMI_DUALITY: "#14b8a6",
    RelationLabel.EXTINGUISHMENT: "#94a3b8",
    RelationLabel.CONFLICT: "#ef4444",
    RelationLabel.BUSINESS: "#f97316",
    RelationLabel.SUPER_EGO: "#eab308",
    RelationLabel.OTHER: "#64748b",
}


# =============================================================================
# DATA STRUCTURES
# =============================================================================


Predicate = Callable[[TypeRecord, TypeRecord, DualPairSet], bool]


@dataclass(frozen=True)
class RelationRule:
    """A labelled predicate in the classification order."""

    label: RelationLabel
    predicate: Predicate


@dataclass(frozen=True)
class RelationResult:
    """Classifier output: the relation label and its display colour."""

    label: RelationLabel
    color: str

    def to_dict(self) -> dict[str, str]:
        return {"label": self.label.value, "color": self.color}


# =============================================================================
# PREDICATES
# =============================================================================


def quadra_distance(a: TypeRecord, b: TypeRecord) -> int:
    """Absolute index difference in QUADRA_ORDER (0-3)."""
    return abs(QUADRA_ORDER.index(a.quadra) - QUADRA_ORDER.index(b.quadra))


def is_identity(a: TypeRecord, b: TypeRecord, duals: DualPairSet) -> bool:
    return a.code == b.code


def is_duality(a: TypeRecord, b: TypeRecord, duals: DualPairSet) -> bool:
    return (a.code, b.code) in duals


def is_activation(a: TypeRecord, b: TypeRecord, duals: DualPairSet) -> bool:
    return a.leading == b.creative and a.creative == b.leading


def is_mirror(a: TypeRecord, b: TypeRecord, duals: DualPairSet) -> bool:
    return (
        a.leading == b.leading
        and a.creative == b.creative
        and not is_identity(a, b, duals)
    )


def is_semi_duality(a: TypeRecord, b: TypeRecord, duals: DualPairSet) -> bool:
    crossed = a.leading == b.creative or b.leading == a.creative
    return crossed and not is_activation(a, b, duals)


def is_extinguishment(a: TypeRecord, b: TypeRecord, duals: DualPairSet) -> bool:
    same_leading = a.leading == b.leading and not is_identity(a, b, duals)
    same_creative = a.creative == b.creative and not is_mirror(a, b, duals)
    return same_leading or same_creative


def is_business(a: TypeRecord, b: TypeRecord, duals: DualPairSet) -> bool:
    return (
        quadra_distance(a, b) in (1, 3)
        and not is_duality(a, b, duals)
        and not is_semi_duality(a, b, duals)
        and not is_extinguishment(a, b, duals)
    )


def is_conflict(a: TypeRecord, b: TypeRecord, duals: DualPairSet) -> bool:
    return (
        quadra_distance(a, b) == 2
        and a.quadra != b.quadra
        and not is_duality(a, b, duals)
    )


def is_super_ego(a: TypeRecord, b: TypeRecord, duals: DualPairSet) -> bool:
    # Catch-all for every remaining pair of distinct types
    return not is_identity(a, b, duals)


RELATION_RULES: tuple[RelationRule, ...] = (
    RelationRule(RelationLabel.IDENTITY, is_identity),
    RelationRule(RelationLabel.DUALITY, is_duality),
    RelationRule(RelationLabel.ACTIVATION, is_activation),
    RelationRule(RelationLabel.MIRROR, is_mirror),
    RelationRule(RelationLabel.SEMI_DUALITY, is_semi_duality),
    RelationRule(RelationLabel.EXTINGUISHMENT, is_extinguishment),
    RelationRule(RelationLabel.BUSINESS, is_business),
    RelationRule(RelationLabel.CONFLICT, is_conflict),
    RelationRule(RelationLabel.SUPER_EGO, is_super_ego),
)


# =============================================================================
# CLASSIFICATION
# =============================================================================


def result_for(label: RelationLabel) -> RelationResult:
    return RelationResult(label, RELATION_COLORS.get(label, RELATION_COLORS[RelationLabel.OTHER]))


def classify(
    a: TypeRecord,
    b: TypeRecord,
    duals: DualPairSet,
    rules: Sequence[RelationRule] = RELATION_RULES,
) -> RelationResult:
    """
    Classify the relation between two type records.

    Args:
        a: First type record
        b: Second type record
        duals: Canonical dual pairs
        rules: Ordered rules, first match wins

    Returns:
        RelationResult; label is Other when no rule matches
    """
    for rule in rules:
        if rule.predicate(a, b, duals):
            return result_for(rule.label)
    return result_for(RelationLabel.OTHER)


def relation_matrix(
    types: Iterable[TypeRecord],
    duals: DualPairSet,
) -> dict[str, dict[str, RelationLabel]]:
    """Label for every ordered pair, keyed matrix[a.code][b.code]."""
    records = list(types)
    return {
        a.code: {b.code: classify(a, b, duals).label for b in records}
        for a in records
    }


# =============================================================================
# PAIR DETAILS
# =============================================================================


def pair_traits(a: TypeRecord, b: TypeRecord) -> list[str]:
    """Short comparison notes for two types (shared and differing traits)."""
    traits = []
    if a.quadra == b.quadra:
        traits.append(f"Same quadra: {a.quadra.value}")
    if a.temperament == b.temperament:
        traits.append(f"Same temperament: {a.temperament.value}")
    if a.leading == b.leading:
        traits.append(f"Leading: {a.leading.value}")
    if a.creative == b.creative:
        traits.append(f"Creative: {a.creative.value}")
    if a.quadra != b.quadra:
        traits.append(f"Quadra: {a.quadra.value} vs {b.quadra.value}")
    if a.temperament != b.temperament:
        traits.append(f"Temperament: {a.temperament.value} vs {b.temperament.value}")
    return traits


def related_types(
    types: Iterable[TypeRecord],
    duals: DualPairSet,
    code: str,
) -> dict[str, Any]:
    """
    Types related to `code` by duality, quadra, temperament and leading element.

    Raises:
        ValueError: if `code` is not among `types`
    """
    records = list(types)
    by_code = {t.code: t for t in records}
    if code not in by_code:
        raise ValueError(f"Unknown type code: {code}")
    self_type = by_code[code]
    others = [t for t in records if t.code != code]

    partner = duals.partner(code)
    return {
        "dual": by_code.get(partner) if partner else None,
        "same_quadra": [t for t in others if t.quadra == self_type.quadra],
        "same_temperament": [t for t in others if t.temperament == self_type.temperament],
        "same_leading": [t for t in others if t.leading == self_type.leading],
    }
