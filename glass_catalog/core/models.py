from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple, Union


class RejectReason(str, Enum):
    """Why a filename did not produce a record."""

    TOO_FEW_TOKENS = "too_few_tokens"
    NO_START_YEAR = "no_start_year"
    MISSING_WINDOW_DATA = "missing_window_data"

    @property
    def display_name(self) -> str:
        mapping = {
            RejectReason.TOO_FEW_TOKENS: "does not have enough parts",
            RejectReason.NO_START_YEAR: "could not find start year",
            RejectReason.MISSING_WINDOW_DATA: "missing window data after years",
        }
        return mapping[self]


@dataclass(frozen=True)
class WindowSize:
    """Glass dimensions as written in the filename (e.g. ``567X1199``)."""

    width: int
    height: int
    raw: str

    @property
    def area(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class GlassPartRecord:
    """Metadata for a single glass part image."""

    filename: str
    brand: str
    model: str
    submodels: Tuple[str, ...]
    start_year: int
    end_year: int
    window_code: str
    window_number: str
    size: WindowSize
    description: str
    image_path: str
    tokens: Tuple[str, ...] = ()

    def covers_year(self, year: int) -> bool:
        return self.start_year <= year <= self.end_year

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filename": self.filename,
            "brand": self.brand,
            "model": self.model,
            "submodels": list(self.submodels),
            "startYear": self.start_year,
            "endYear": self.end_year,
            "windowCode": self.window_code,
            "windowNumber": self.window_number,
            "size": {
                "width": self.size.width,
                "height": self.size.height,
                "raw": self.size.raw,
            },
            "description": self.description,
            "imagePath": self.image_path,
            "tokens": list(self.tokens),
        }

    @classmethod
    def from_dict(cls, entry: Dict[str, Any]) -> "GlassPartRecord":
        size = entry.get("size", {})
        if not isinstance(size, dict):
            raise ValueError(f"Invalid size for {entry.get('filename')!r}: {size!r}")
        return cls(
            filename=entry["filename"],
            brand=entry["brand"],
            model=entry["model"],
            submodels=tuple(entry.get("submodels", [])),
            start_year=int(entry["startYear"]),
            end_year=int(entry.get("endYear", 0)),
            window_code=entry["windowCode"],
            window_number=entry["windowNumber"],
            size=WindowSize(
                width=int(size.get("width", 0)),
                height=int(size.get("height", 0)),
                raw=size.get("raw", ""),
            ),
            description=entry.get("description", ""),
            image_path=entry["imagePath"],
            tokens=tuple(entry.get("tokens", [])),
        )


@dataclass(frozen=True)
class Unparsed:
    """A filename that has not been looked at yet."""

    filename: str


@dataclass(frozen=True)
class PartiallyTokenized:
    """Extension stripped and split; brand known, the rest still positional."""

    filename: str
    brand: str
    tokens: Tuple[str, ...]


@dataclass(frozen=True)
class Parsed:
    record: GlassPartRecord


@dataclass(frozen=True)
class Rejected:
    filename: str
    reason: RejectReason
    detail: str = ""


ParseOutcome = Union[Parsed, Rejected]
