from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Tuple

from .models import GlassPartRecord


@dataclass(frozen=True)
class GlassCatalog:
    """Immutable, ordered collection of parsed glass part records with lookup helpers."""

    records: Tuple[GlassPartRecord, ...]
    by_brand_index: Dict[str, Tuple[GlassPartRecord, ...]] = field(default_factory=dict, repr=False)
    by_model_index: Dict[str, Tuple[GlassPartRecord, ...]] = field(default_factory=dict, repr=False)

    @classmethod
    def from_records(cls, records: Iterable[GlassPartRecord]) -> "GlassCatalog":
        ordered = tuple(records)
        by_brand: Dict[str, List[GlassPartRecord]] = defaultdict(list)
        by_model: Dict[str, List[GlassPartRecord]] = defaultdict(list)

        for record in ordered:
            by_brand[record.brand].append(record)
            by_model[record.model].append(record)

        return cls(
            records=ordered,
            by_brand_index={key: tuple(value) for key, value in by_brand.items()},
            by_model_index={key: tuple(value) for key, value in by_model.items()},
        )

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[GlassPartRecord]:
        return iter(self.records)

    def unique_brands(self) -> List[str]:
        return sorted(self.by_brand_index)

    def unique_models(self) -> List[str]:
        return sorted(self.by_model_index)

    def by_brand(self, brand: str) -> List[GlassPartRecord]:
        return list(self.by_brand_index.get(brand, ()))

    def by_model(self, model: str) -> List[GlassPartRecord]:
        return list(self.by_model_index.get(model, ()))

    def by_year_range(self, start_year: int, end_year: int) -> List[GlassPartRecord]:
        """Records whose year span overlaps ``[start_year, end_year]`` (inclusive)."""
        return [
            record
            for record in self.records
            if record.start_year <= end_year and record.end_year >= start_year
        ]

    def search_description(self, term: str) -> List[GlassPartRecord]:
        """Case-insensitive substring search over the description only."""
        needle = term.lower()
        return [record for record in self.records if needle in record.description.lower()]

    def by_window_code(self, code: str) -> List[GlassPartRecord]:
        return [record for record in self.records if record.window_code == code]

    def find_vehicle(self, brand: str, model: str, year: int) -> List[GlassPartRecord]:
        return [
            record
            for record in self.by_brand_index.get(brand, ())
            if record.model == model and record.covers_year(year)
        ]

    def models_by_brand(self) -> Dict[str, List[str]]:
        return {
            brand: sorted({record.model for record in self.by_brand_index[brand]})
            for brand in self.unique_brands()
        }
