"""
Domain records for the socionics dataset.

All categorical fields are closed string enums; the enum values are the
strings used in the exported JSON files.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

# =============================================================================
# ENUMERATIONS
# =============================================================================


class Quadra(str, Enum):
    ALPHA = "Alpha"
    BETA = "Beta"
    GAMMA = "Gamma"
    DELTA = "Delta"


class Temperament(str, Enum):
    EP = "EP"
    EJ = "EJ"
    IP = "IP"
    IJ = "IJ"


class InformationElement(str, Enum):
    NE = "Ne"
    NI = "Ni"
    SE = "Se"
    SI = "Si"
    TE = "Te"
    TI = "Ti"
    FE = "Fe"
    FI = "Fi"


class RelationLabel(str, Enum):
    IDENTITY = "Identity"
    DUALITY = "Duality"
    ACTIVATION = "Activation"
    MIRROR = "Mirror"
    SEMI_DUALITY = "Semi-duality"
    EXTINGUISHMENT = "Extinguishment"
    CONFLICT = "Conflict"
    BUSINESS = "Business"
    SUPER_EGO = "Super-ego"
    OTHER = "Other"


TYPE_CODE_PATTERN = re.compile(r"^[A-Z]{3}$")


# =============================================================================
# RECORDS
# =============================================================================


@dataclass(frozen=True)
class TypeRecord:
    """One of the 16 personality type profiles."""

    code: str
    full_name: str
    alias: str
    quadra: Quadra
    temperament: Temperament
    leading: InformationElement
    creative: InformationElement
    href: str = ""
    overview: str | None = None
    rev_id: int | None = None
    title: str | None = None

    def __post_init__(self) -> None:
        if not TYPE_CODE_PATTERN.match(self.code):
            raise ValueError(f"Invalid type code: {self.code!r}")
        if self.leading == self.creative:
            raise ValueError(
                f"{self.code}: leading and creative elements must differ "
                f"(both {self.leading.value})"
            )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "code": self.code,
            "fullName": self.full_name,
            "alias": self.alias,
            "quadra": self.quadra.value,
            "temperament": self.temperament.value,
            "leading": self.leading.value,
            "creative": self.creative.value,
        }
        if self.overview is not None:
            data["overview"] = self.overview
        data["href"] = self.href
        if self.rev_id is not None:
            data["revId"] = self.rev_id
        if self.title is not None:
            data["title"] = self.title
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TypeRecord":
        try:
            return cls(
                code=data["code"],
                full_name=data["fullName"],
                alias=data["alias"],
                quadra=Quadra(data["quadra"]),
                temperament=Temperament(data["temperament"]),
                leading=InformationElement(data["leading"]),
                creative=InformationElement(data["creative"]),
                href=data.get("href", ""),
                overview=data.get("overview"),
                rev_id=data.get("revId"),
                title=data.get("title"),
            )
        except KeyError as e:
            raise ValueError(f"Type record missing field {e}") from e


@dataclass(frozen=True)
class GlossaryTerm:
    """Short definition of an information element."""

    term: str
    short_def: str

    def to_dict(self) -> dict[str, str]:
        return {"term": self.term, "shortDef": self.short_def}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlossaryTerm":
        return cls(term=data["term"], short_def=data["shortDef"])


@dataclass(frozen=True)
class DualRelation:
    """A named relation between two type codes (only duality is published)."""

    a: str
    b: str
    name: str = "Duality"
    summary: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"a": self.a, "b": self.b, "name": self.name, "summary": self.summary}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DualRelation":
        return cls(
            a=data["a"],
            b=data["b"],
            name=data.get("name", "Duality"),
            summary=data.get("summary", ""),
        )
