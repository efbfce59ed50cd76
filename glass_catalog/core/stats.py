from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .catalog import GlassCatalog
from .models import GlassPartRecord


@dataclass(frozen=True)
class BrandSummary:
    """Image counts for one brand and each of its models."""

    brand: str
    image_count: int
    models: Tuple[Tuple[str, int], ...]


@dataclass(frozen=True)
class SizeStats:
    avg_width: int
    avg_height: int
    largest: GlassPartRecord
    smallest: Optional[GlassPartRecord]


def brand_summary(catalog: GlassCatalog) -> List[BrandSummary]:
    summaries: List[BrandSummary] = []
    for brand in catalog.unique_brands():
        records = catalog.by_brand(brand)
        counts = Counter(record.model for record in records)
        summaries.append(
            BrandSummary(
                brand=brand,
                image_count=len(records),
                models=tuple(sorted(counts.items())),
            )
        )
    return summaries


def window_code_counts(catalog: GlassCatalog) -> Dict[str, int]:
    """Window code frequencies, most common first."""
    return dict(Counter(record.window_code for record in catalog).most_common())


def size_stats(catalog: GlassCatalog) -> Optional[SizeStats]:
    records = catalog.records
    if not records:
        return None

    avg_width = sum(record.size.width for record in records) / len(records)
    avg_height = sum(record.size.height for record in records) / len(records)

    largest = max(records, key=lambda record: record.size.area)
    sized = [record for record in records if record.size.area > 0]
    smallest = min(sized, key=lambda record: record.size.area) if sized else None

    return SizeStats(
        avg_width=round(avg_width),
        avg_height=round(avg_height),
        largest=largest,
        smallest=smallest,
    )


def format_summary(catalog: GlassCatalog) -> str:
    lines = [
        "=== VEHICLE WINDOW IMAGES SUMMARY ===",
        "",
        f"Total images: {len(catalog)}",
        f"Total brands: {len(catalog.unique_brands())}",
        f"Total unique models: {len(catalog.unique_models())}",
        "",
        "=== BRANDS AND MODELS ===",
        "",
    ]

    for summary in brand_summary(catalog):
        lines.append(f"{summary.brand} ({summary.image_count} images):")
        for model, count in summary.models:
            lines.append(f"  - {model} ({count} images)")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"
