from __future__ import annotations

from glass_catalog.core.indexer import build_catalog
from glass_catalog.core.stats import brand_summary, format_summary, size_stats, window_code_counts


def test_brand_summary(catalog):
    summaries = {summary.brand: summary for summary in brand_summary(catalog)}

    assert list(summaries) == ["CHEVROLET", "FORD", "MERCEDES", "VW"]
    assert summaries["MERCEDES"].image_count == 2
    assert summaries["MERCEDES"].models == (("SPRINTER", 2),)


def test_window_code_counts_most_common_first(catalog):
    counts = window_code_counts(catalog)

    assert list(counts.items())[0] == ("FD", 3)
    assert counts["FB"] == 1
    assert sum(counts.values()) == len(catalog)


def test_size_stats_skips_zero_area_for_smallest():
    catalog = build_catalog([
        "A-B-2020-2021-FD-1-10x10-X",
        "A-B-2020-2021-FD-2-30x20-Y",
        "A-B-2020-2021-FD-3-bad-Z",
    ])
    stats = size_stats(catalog)

    assert stats.largest.window_number == "2"
    assert stats.smallest.window_number == "1"
    assert stats.avg_width == round(40 / 3)
    assert stats.avg_height == 10


def test_size_stats_empty():
    assert size_stats(build_catalog([])) is None


def test_format_summary(catalog):
    text = format_summary(catalog)

    assert "Total images: 6" in text
    assert "Total brands: 4" in text
    assert "VW (2 images):" in text
    assert "  - EUROVANDIESEL (2 images)" in text
