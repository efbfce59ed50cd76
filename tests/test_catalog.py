from __future__ import annotations

import random

from glass_catalog.core import queries
from glass_catalog.core.catalog import GlassCatalog
from glass_catalog.core.indexer import build_catalog
from glass_catalog.core.parser import parse_filename


def _names(records):
    return [record.filename for record in records]


def test_build_drops_unparseable_and_keeps_order(catalog, sample_filenames):
    assert len(catalog) == len(sample_filenames) - 1
    assert _names(catalog) == sample_filenames[:-1]


def test_build_does_not_deduplicate(catalog):
    sprinter = catalog.by_model("SPRINTER")
    assert len(sprinter) == 2
    assert {record.window_number for record in sprinter} == {"DR"}


def test_unique_brands_sorted_regardless_of_order(sample_filenames):
    expected = ["CHEVROLET", "FORD", "MERCEDES", "VW"]
    shuffled = list(sample_filenames)
    random.Random(7).shuffle(shuffled)

    assert build_catalog(sample_filenames).unique_brands() == expected
    assert build_catalog(shuffled).unique_brands() == expected


def test_unique_models(catalog):
    assert catalog.unique_models() == ["EUROVANDIESEL", "EXPRESS", "SPRINTER", "TRANSIT-CUSTOM"]


def test_by_brand_is_case_sensitive(catalog):
    assert len(catalog.by_brand("VW")) == 2
    assert catalog.by_brand("vw") == []


def test_year_range_overlap():
    record = parse_filename("A-B-2015-2024-FD-1-10x10")
    catalog = GlassCatalog.from_records([record])

    assert catalog.by_year_range(2020, 2022) == [record]
    assert catalog.by_year_range(2024, 2030) == [record]
    assert catalog.by_year_range(2025, 2026) == []


def test_year_range_misses_record_without_end_year():
    record = parse_filename("A-B-2015-XXXX-FD-1-10x10")
    assert record.end_year == 0

    assert GlassCatalog.from_records([record]).by_year_range(2015, 2016) == []


def test_search_description_is_case_insensitive(catalog):
    matches = catalog.search_description("medallon")
    assert _names(matches) == ["VW-EUROVANDIESEL-2010-2018-FB-24880-725X577-MEDALLON-DERECHO.PNG"]


def test_search_description_ignores_other_fields(catalog):
    assert catalog.search_description("sprinter") == []
    assert catalog.search_description("FB") == []


def test_by_window_code(catalog):
    assert len(catalog.by_window_code("FD")) == 3


def test_find_vehicle(catalog):
    assert len(catalog.find_vehicle("MERCEDES", "SPRINTER", 2020)) == 2
    assert catalog.find_vehicle("MERCEDES", "SPRINTER", 2014) == []
    assert catalog.find_vehicle("FORD", "SPRINTER", 2020) == []


def test_models_by_brand(catalog):
    assert catalog.models_by_brand() == {
        "CHEVROLET": ["EXPRESS"],
        "FORD": ["TRANSIT-CUSTOM"],
        "MERCEDES": ["SPRINTER"],
        "VW": ["EUROVANDIESEL"],
    }


def test_empty_catalog_queries():
    catalog = build_catalog([])

    assert len(catalog) == 0
    assert catalog.unique_brands() == []
    assert catalog.by_year_range(2000, 2030) == []
    assert catalog.search_description("x") == []


def test_query_functions_match_methods(catalog):
    assert queries.get_unique_brands(catalog) == catalog.unique_brands()
    assert queries.get_unique_models(catalog) == catalog.unique_models()
    assert queries.get_images_by_brand(catalog, "FORD") == catalog.by_brand("FORD")
    assert queries.get_images_by_model(catalog, "EXPRESS") == catalog.by_model("EXPRESS")
    assert queries.get_images_by_year_range(catalog, 2019, 2019) == catalog.by_year_range(2019, 2019)
    assert queries.search_by_description(catalog, "puerta") == catalog.search_description("puerta")


def test_query_results_do_not_mutate_catalog(catalog):
    result = catalog.by_brand("FORD")
    result.clear()
    assert len(catalog.by_brand("FORD")) == 1
