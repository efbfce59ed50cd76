from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional, Tuple

import streamlit as st

from glass_catalog.core import queries
from glass_catalog.core.catalog import GlassCatalog
from glass_catalog.core.indexer import ensure_thumbnail, load_catalog
from glass_catalog.core.models import GlassPartRecord

PAGE_TITLE = "Catálogo de Cristales"
ALL_OPTION = "Todas"
GRID_COLUMNS = 4
YEAR_BOUNDS = (2000, 2030)

BASE_DIR = Path(__file__).resolve().parent
IMAGE_DIR = Path(os.environ.get("GLASS_CATALOG_IMAGE_DIR", BASE_DIR / "detail-glass"))
CACHE_DIR = BASE_DIR / ".cache"
THUMB_DIR = BASE_DIR / ".thumbnails"

logging.basicConfig(level=logging.INFO)


@st.cache_resource(show_spinner=True)
def get_catalog() -> GlassCatalog:
    progress = st.progress(0.0)

    def _on_progress(current: int, total: int) -> None:
        progress.progress(min(current / max(total, 1), 1.0))

    try:
        return load_catalog(IMAGE_DIR, CACHE_DIR, progress_callback=_on_progress)
    finally:
        progress.empty()


def render_sidebar(catalog: GlassCatalog) -> Tuple[Optional[str], Optional[str], Tuple[int, int], str]:
    st.sidebar.header("Filtros")

    brands = queries.get_unique_brands(catalog)
    brand = st.sidebar.selectbox("Marca", options=[ALL_OPTION] + brands)
    brand = None if brand == ALL_OPTION else brand

    models = catalog.models_by_brand().get(brand, []) if brand else queries.get_unique_models(catalog)
    model = st.sidebar.selectbox("Modelo", options=[ALL_OPTION] + models)
    model = None if model == ALL_OPTION else model

    years = st.sidebar.slider("Años", min_value=YEAR_BOUNDS[0], max_value=YEAR_BOUNDS[1], value=YEAR_BOUNDS)
    term = st.sidebar.text_input("Buscar en descripción", value="")

    return brand, model, years, term.strip()


def apply_filters(
    catalog: GlassCatalog,
    brand: Optional[str],
    model: Optional[str],
    years: Tuple[int, int],
    term: str,
) -> List[GlassPartRecord]:
    selected = catalog
    if brand:
        selected = GlassCatalog.from_records(queries.get_images_by_brand(selected, brand))
    if model:
        selected = GlassCatalog.from_records(queries.get_images_by_model(selected, model))
    if years != YEAR_BOUNDS:
        selected = GlassCatalog.from_records(queries.get_images_by_year_range(selected, *years))
    if term:
        selected = GlassCatalog.from_records(queries.search_by_description(selected, term))
    return list(selected.records)


def format_caption(record: GlassPartRecord) -> str:
    years = f"{record.start_year}-{record.end_year}" if record.end_year else str(record.start_year)
    caption = f"{record.brand} {record.model} {years} · {record.window_code} {record.window_number} · {record.size.raw}"
    if record.description:
        caption += f" · {record.description.replace('-', ' ')}"
    return caption


def render_results(records: List[GlassPartRecord]) -> None:
    if not records:
        st.info("No se encontraron imágenes para esta selección.")
        return

    st.caption(f"{len(records)} imágenes")
    columns = st.columns(GRID_COLUMNS)
    for idx, record in enumerate(records):
        with columns[idx % GRID_COLUMNS]:
            image_path = ensure_thumbnail(record, IMAGE_DIR, THUMB_DIR)
            st.image(str(image_path), caption=format_caption(record), use_container_width=True)


def main() -> None:
    st.set_page_config(page_title=PAGE_TITLE, layout="wide")
    st.title(PAGE_TITLE)

    catalog = get_catalog()
    brand, model, years, term = render_sidebar(catalog)
    render_results(apply_filters(catalog, brand, model, years, term))


if __name__ == "__main__":
    main()
