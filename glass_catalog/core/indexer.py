from __future__ import annotations

import json
import logging
from hashlib import md5
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from PIL import Image

from .catalog import GlassCatalog
from .models import GlassPartRecord
from .parser import EXTENSION_PATTERN, IMAGE_URL_PREFIX, parse_filename

LOGGER = logging.getLogger(__name__)

CACHE_FILENAME = "catalog.json"
SNAPSHOT_VERSION = 1
THUMBNAIL_EXT = ".jpg"


def is_image_name(name: str) -> bool:
    return bool(EXTENSION_PATTERN.search(name)) and not name.startswith((".", "_"))


def list_image_files(image_dir: Path) -> List[str]:
    """
    Return the image filenames directly inside ``image_dir``, sorted by name.

    Hidden and underscore-prefixed files are skipped. A missing or unreadable
    directory yields an empty list.
    """
    try:
        names = [entry.name for entry in image_dir.iterdir() if entry.is_file()]
    except OSError as exc:
        LOGGER.warning("Could not list %s, treating it as empty: %s", image_dir, exc)
        return []

    return sorted(name for name in names if is_image_name(name))


def compute_digest(filenames: Sequence[str], image_prefix: str = IMAGE_URL_PREFIX) -> str:
    hasher = md5()
    hasher.update(image_prefix.encode("utf-8"))
    for name in filenames:
        hasher.update(b"\0")
        hasher.update(name.encode("utf-8"))
    return hasher.hexdigest()


def build_catalog(
    filenames: Iterable[str],
    image_prefix: str = IMAGE_URL_PREFIX,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> GlassCatalog:
    """
    Parse every filename and collect the records that match the naming convention.

    Input order is preserved; unparseable names are dropped (each one is
    logged by the parser). Nothing is deduplicated.
    """
    names = list(filenames)
    records: List[GlassPartRecord] = []

    for idx, name in enumerate(names, start=1):
        record = parse_filename(name, image_prefix=image_prefix)
        if record is not None:
            records.append(record)
        if progress_callback:
            progress_callback(idx, len(names))

    LOGGER.info("Successfully parsed %s of %s images.", len(records), len(names))
    return GlassCatalog.from_records(records)


def to_json_serializable(catalog: GlassCatalog, digest: str = "") -> Dict:
    return {
        "version": SNAPSHOT_VERSION,
        "digest": digest,
        "records": [record.to_dict() for record in catalog.records],
    }


def write_snapshot(catalog: GlassCatalog, path: Path, digest: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(to_json_serializable(catalog, digest), fh, indent=2, ensure_ascii=False)
    return path


def read_snapshot(path: Path) -> Tuple[GlassCatalog, str]:
    """Load a snapshot written by ``write_snapshot``; returns the catalog and its digest."""
    with path.open("r", encoding="utf-8") as fh:
        payload = json.load(fh)

    if not isinstance(payload, dict):
        raise ValueError(f"Snapshot must be a JSON object, found {type(payload).__name__}")
    if payload.get("version") != SNAPSHOT_VERSION:
        raise ValueError(f"Unsupported snapshot version: {payload.get('version')!r}")

    entries = payload.get("records", [])
    if not isinstance(entries, list) or not all(isinstance(entry, dict) for entry in entries):
        raise ValueError("Snapshot records must be a list of objects")

    records = [GlassPartRecord.from_dict(entry) for entry in entries]
    return GlassCatalog.from_records(records), payload.get("digest", "")


def load_catalog(
    image_dir: Path,
    cache_dir: Optional[Path] = None,
    image_prefix: str = IMAGE_URL_PREFIX,
    force_rebuild: bool = False,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> GlassCatalog:
    """
    Load the catalog for ``image_dir``, reusing the cached snapshot when the listing is unchanged.

    progress_callback(current, total) can be provided for UI updates.
    """
    filenames = list_image_files(image_dir)
    if not filenames:
        LOGGER.info("No images found in %s.", image_dir)
        return GlassCatalog.from_records(())

    digest = compute_digest(filenames, image_prefix)
    cache_file = cache_dir / CACHE_FILENAME if cache_dir is not None else None

    if cache_file is not None and not force_rebuild and cache_file.exists():
        try:
            cached, cached_digest = read_snapshot(cache_file)
            if cached_digest == digest:
                LOGGER.info("Loaded catalog from cache (%s entries).", len(cached))
                return cached
            LOGGER.debug("Cache digest changed, rebuilding catalog.")
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as exc:
            LOGGER.warning("Failed to load cache, rebuilding catalog: %s", exc)

    LOGGER.info("Building catalog from %s images.", len(filenames))
    catalog = build_catalog(filenames, image_prefix=image_prefix, progress_callback=progress_callback)

    if cache_file is not None:
        try:
            write_snapshot(catalog, cache_file, digest)
        except OSError as exc:
            LOGGER.warning("Failed to write catalog cache %s: %s", cache_file, exc)

    return catalog


def ensure_thumbnail(record: GlassPartRecord, image_dir: Path, thumb_dir: Path, size: int = 512) -> Path:
    """Return thumbnail path, generating it if necessary."""
    source = image_dir / record.filename
    # Keep the source extension in the name so X.png and X.jpg stay apart.
    thumb_path = thumb_dir / f"{record.filename}{THUMBNAIL_EXT}"

    if thumb_path.exists():
        return thumb_path

    try:
        with Image.open(source) as img:
            img = img.convert("RGB")
            img.thumbnail((size, size), Image.Resampling.LANCZOS)
            thumb_path.parent.mkdir(parents=True, exist_ok=True)
            img.save(thumb_path, format="JPEG", quality=90)
    except OSError as exc:
        LOGGER.warning("Failed to build thumbnail for %s: %s", source, exc)
        return source

    return thumb_path
