"""
Canonical socionics tables.

Type metadata, glossary definitions and dual pairs are curated by hand;
scraping only contributes overview text and page links on top of these.
"""

from collections.abc import Iterable
from typing import Any

from core.models import (
    DualRelation,
    GlossaryTerm,
    InformationElement,
    Quadra,
    Temperament,
    TypeRecord,
)

# =============================================================================
# CONFIGURATION
# =============================================================================

GITHUB_CONTENT_BASE = "https://wikisocion.github.io/content"

# =============================================================================
# TYPE TABLES
# =============================================================================

TYPE_CODES = [
    "ILE", "SEI", "LII", "ESE",
    "SLE", "IEI", "LSI", "EIE",
    "SEE", "ILI", "ESI", "LIE",
    "LSE", "EII", "SLI", "IEE",
]  # fmt: skip

# Canonical MediaWiki page titles
TYPE_PAGES = {
    "ILE": "ILE (ENTp)",
    "SEI": "SEI (ISFp)",
    "LII": "LII (INTj)",
    "ESE": "ESE (ESFj)",
    "SLE": "SLE (ESTp)",
    "IEI": "IEI (INFp)",
    "LSI": "LSI (ISTj)",
    "EIE": "EIE (ENFj)",
    "SEE": "SEE (ESFp)",
    "ILI": "ILI (INTp)",
    "ESI": "ESI (ISFj)",
    "LIE": "LIE (ENTj)",
    "LSE": "LSE (ESTj)",
    "EII": "EII (INFj)",
    "SLI": "SLI (ISTp)",
    "IEE": "IEE (ENFp)",
}

TYPE_INFO: dict[str, dict[str, str]] = {
    "ILE": {"fullName": "Intuitive Logical Extravert", "alias": "ENTp", "quadra": "Alpha", "temperament": "EP", "leading": "Ne", "creative": "Ti"},
    "SEI": {"fullName": "Sensing Ethical Introvert", "alias": "ISFp", "quadra": "Alpha", "temperament": "IJ", "leading": "Si", "creative": "Fe"},
    "LII": {"fullName": "Logical Intuitive Introvert", "alias": "INTj", "quadra": "Alpha", "temperament": "IJ", "leading": "Ti", "creative": "Ne"},
    "ESE": {"fullName": "Ethical Sensing Extravert", "alias": "ESFj", "quadra": "Alpha", "temperament": "EJ", "leading": "Fe", "creative": "Si"},
    "SLE": {"fullName": "Sensing Logical Extravert", "alias": "ESTp", "quadra": "Beta", "temperament": "EP", "leading": "Se", "creative": "Ti"},
    "IEI": {"fullName": "Intuitive Ethical Introvert", "alias": "INFp", "quadra": "Beta", "temperament": "IP", "leading": "Ni", "creative": "Fe"},
    "LSI": {"fullName": "Logical Sensing Introvert", "alias": "ISTj", "quadra": "Beta", "temperament": "IJ", "leading": "Ti", "creative": "Se"},
    "EIE": {"fullName": "Ethical Intuitive Extravert", "alias": "ENFj", "quadra": "Beta", "temperament": "EJ", "leading": "Fe", "creative": "Ni"},
    "SEE": {"fullName": "Sensing Ethical Extravert", "alias": "ESFp", "quadra": "Gamma", "temperament": "EP", "leading": "Se", "creative": "Fi"},
    "ILI": {"fullName": "Intuitive Logical Introvert", "alias": "INTp", "quadra": "Gamma", "temperament": "IP", "leading": "Ni", "creative": "Te"},
    "ESI": {"fullName": "Ethical Sensing Introvert", "alias": "ISFj", "quadra": "Gamma", "temperament": "IJ", "leading": "Fi", "creative": "Se"},
    "LIE": {"fullName": "Logical Intuitive Extravert", "alias": "ENTj", "quadra": "Gamma", "temperament": "EJ", "leading": "Te", "creative": "Ni"},
    "LSE": {"fullName": "Logical Sensing Extravert", "alias": "ESTj", "quadra": "Delta", "temperament": "EJ", "leading": "Te", "creative": "Si"},
    "EII": {"fullName": "Ethical Intuitive Introvert", "alias": "INFj", "quadra": "Delta", "temperament": "IJ", "leading": "Fi", "creative": "Ne"},
    "SLI": {"fullName": "Sensing Logical Introvert", "alias": "ISTp", "quadra": "Delta", "temperament": "IP", "leading": "Si", "creative": "Te"},
    "IEE": {"fullName": "Intuitive Ethical Extravert", "alias": "ENFp", "quadra": "Delta", "temperament": "EP", "leading": "Ne", "creative": "Fi"},
}  # fmt: skip

# =============================================================================
# GLOSSARY
# =============================================================================

GLOSSARY_DEFINITIONS = {
    "Ne": "Extroverted intuition - possibilities, patterns, divergence.",
    "Ni": "Introverted intuition - time, trajectories, convergence.",
    "Se": "Extroverted sensing - force, assertion, control of space.",
    "Si": "Introverted sensing - comfort, calibration, bodily states.",
    "Te": "Extroverted logic - efficiency, metrics, execution.",
    "Ti": "Introverted logic - structure, definitions, consistency.",
    "Fe": "Extroverted ethics - shared feeling, expression, morale.",
    "Fi": "Introverted ethics - bonds, values, personal distance.",
}

# =============================================================================
# DUALITY
# =============================================================================

DUAL_PAIRS = [
    ("ILE", "SEI"),
    ("LII", "ESE"),
    ("SLE", "IEI"),
    ("LSI", "EIE"),
    ("SEE", "ILI"),
    ("ESI", "LIE"),
    ("LSE", "EII"),
    ("SLI", "IEE"),
]

DUAL_SUMMARY = (
    "Complementary strengths; easy role division; "
    "watch for over-reliance on partner's valued elements."
)


def dual_key(a: str, b: str) -> str:
    """Order-independent key for a pair of type codes, e.g. "ESE-LII"."""
    return "-".join(sorted([a, b]))


class DualPairSet:
    """
    Immutable set of unordered dual pairs.

    Membership accepts either a key string ("ESE-LII") or a pair of codes
    in any order.
    """

    def __init__(self, pairs: Iterable[tuple[str, str]]):
        self._pairs = tuple((a, b) for a, b in pairs)
        self._keys = frozenset(dual_key(a, b) for a, b in self._pairs)
        self._partners: dict[str, str] = {}
        for a, b in self._pairs:
            self._partners.setdefault(a, b)
            self._partners.setdefault(b, a)

    @classmethod
    def from_relations(cls, relations: Iterable[Any]) -> "DualPairSet":
        """Build from relation records or their dict form, keeping dualities only."""
        pairs = []
        for rel in relations:
            if isinstance(rel, dict):
                name, a, b = rel.get("name"), rel.get("a"), rel.get("b")
            else:
                name, a, b = rel.name, rel.a, rel.b
            if name == "Duality" and a and b:
                pairs.append((a, b))
        return cls(pairs)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return item in self._keys
        if isinstance(item, tuple) and len(item) == 2:
            return dual_key(*item) in self._keys
        return False

    def __iter__(self):
        return iter(sorted(self._keys))

    def __len__(self) -> int:
        return len(self._keys)

    @property
    def pairs(self) -> tuple[tuple[str, str], ...]:
        return self._pairs

    def partner(self, code: str) -> str | None:
        return self._partners.get(code)

    def validate(self, codes: Iterable[str]) -> None:
        """Raise ValueError unless the pairs are a perfect matching over codes."""
        expected = set(codes)
        seen: dict[str, str] = {}
        for a, b in self._pairs:
            if a == b:
                raise ValueError(f"Type cannot be dual with itself: {a}")
            for code in (a, b):
                if code not in expected:
                    raise ValueError(f"Unknown type in dual: {a}-{b}")
                if code in seen:
                    raise ValueError(
                        f"{code} appears in two dual pairs: {seen[code]} and {dual_key(a, b)}"
                    )
                seen[code] = dual_key(a, b)
        missing = expected - set(seen)
        if missing:
            raise ValueError(f"Types without a dual: {', '.join(sorted(missing))}")


# =============================================================================
# BUILDERS
# =============================================================================


def type_record(code: str, href: str = "", **extra: Any) -> TypeRecord:
    """Build a TypeRecord from the canonical tables."""
    if code not in TYPE_INFO:
        raise ValueError(f"Unknown type code: {code}")
    info = TYPE_INFO[code]
    return TypeRecord(
        code=code,
        full_name=info["fullName"],
        alias=info["alias"],
        quadra=Quadra(info["quadra"]),
        temperament=Temperament(info["temperament"]),
        leading=InformationElement(info["leading"]),
        creative=InformationElement(info["creative"]),
        href=href,
        **extra,
    )


def canonical_types(href_base: str = GITHUB_CONTENT_BASE) -> list[TypeRecord]:
    return [type_record(code, href=f"{href_base}/{code}.html") for code in TYPE_CODES]


def build_glossary() -> list[GlossaryTerm]:
    return [GlossaryTerm(term, short_def) for term, short_def in GLOSSARY_DEFINITIONS.items()]


def build_relations() -> list[DualRelation]:
    return [DualRelation(a, b, "Duality", DUAL_SUMMARY) for a, b in DUAL_PAIRS]


CANONICAL_DUALS = DualPairSet(DUAL_PAIRS)


def canonical_dataset_parts(
    href_base: str = GITHUB_CONTENT_BASE,
) -> tuple[list[TypeRecord], list[GlossaryTerm], list[DualRelation]]:
    """Types, glossary and relations from the hardcoded tables."""
    return canonical_types(href_base), build_glossary(), build_relations()
