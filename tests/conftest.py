from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from glass_catalog.core.catalog import GlassCatalog
from glass_catalog.core.indexer import build_catalog

SAMPLE_FILENAMES: List[str] = [
    "FORD-TRANSIT-CUSTOM-2017-2021-FD-28414-567X1199-PUERTA-DELANTERA-DERECHA.PNG",
    "VW-EUROVANDIESEL-2010-2018-FB-24880-725X577-MEDALLON-DERECHO.PNG",
    "VW-EUROVANDIESEL-2010-2018-FQ-24876-1261X571-COSTADO-TRASERO-IZQUIERDO.PNG",
    "MERCEDES-SPRINTER-2015-2024-FD-DR-900x500-PUERTA-DELANTERA-A.png",
    "MERCEDES-SPRINTER-2015-2024-FD-DR-900x500-PUERTA-DELANTERA-B.png",
    "CHEVROLET-EXPRESS-2003-2024-DB-12352L-1500X800.jpg",
    "A-B-2020.png",
]


@pytest.fixture
def sample_filenames() -> List[str]:
    return list(SAMPLE_FILENAMES)


@pytest.fixture
def catalog(sample_filenames) -> GlassCatalog:
    return build_catalog(sample_filenames)


@pytest.fixture
def image_dir(tmp_path: Path, sample_filenames) -> Path:
    directory = tmp_path / "detail-glass"
    directory.mkdir()
    for name in sample_filenames:
        (directory / name).write_bytes(b"")
    (directory / ".DS_Store").write_bytes(b"")
    (directory / "_draft-FORD-KA-2010-2014-FD-1-10x10.png").write_bytes(b"")
    (directory / "notes.txt").write_text("not an image", encoding="utf-8")
    return directory
