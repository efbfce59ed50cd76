from __future__ import annotations

import logging
import re
from typing import Optional, Tuple, Union

from .models import (
    GlassPartRecord,
    Parsed,
    ParseOutcome,
    PartiallyTokenized,
    Rejected,
    RejectReason,
    Unparsed,
    WindowSize,
)

LOGGER = logging.getLogger(__name__)

IMAGE_URL_PREFIX = "/detail-glass/"

MIN_TOKENS = 7
YEAR_MIN = 2000
YEAR_MAX = 2030
WINDOW_FIELDS = 3  # code, number, size

EXTENSION_PATTERN = re.compile(r"\.(png|jpg|jpeg)\Z", re.IGNORECASE)
FOUR_DIGITS = re.compile(r"[0-9]{4}")
SIZE_PATTERN = re.compile(r"([0-9]+)[xX]([0-9]+)")

# Whitespace and line terminators ignored around the start-year token.
YEAR_TRIM_CHARS = (
    "\t\n\x0b\x0c\r \xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def strip_extension(filename: str) -> str:
    return EXTENSION_PATTERN.sub("", filename, count=1)


def tokenize(item: Unparsed) -> Union[PartiallyTokenized, Rejected]:
    """Split a filename into hyphen tokens and pull out the brand."""
    tokens = tuple(strip_extension(item.filename).split("-"))

    if len(tokens) < MIN_TOKENS:
        return Rejected(
            filename=item.filename,
            reason=RejectReason.TOO_FEW_TOKENS,
            detail=f"expected {MIN_TOKENS} tokens, found {len(tokens)}",
        )

    return PartiallyTokenized(filename=item.filename, brand=tokens[0], tokens=tokens)


def find_start_year(tokens: Tuple[str, ...]) -> Optional[int]:
    """
    Return the index of the first token that reads as a year in range.

    The scan is first-match-wins from position 1; surrounding whitespace is
    ignored for this test only.
    """
    for index in range(1, len(tokens)):
        part = tokens[index].strip(YEAR_TRIM_CHARS)
        if FOUR_DIGITS.fullmatch(part) and YEAR_MIN <= int(part) <= YEAR_MAX:
            return index
    return None


def parse_size(raw: str, filename: str) -> WindowSize:
    match = SIZE_PATTERN.fullmatch(raw)
    if match is None:
        LOGGER.warning("Could not parse size from '%s' in filename '%s'", raw, filename)
        return WindowSize(width=0, height=0, raw=raw)
    return WindowSize(width=int(match.group(1)), height=int(match.group(2)), raw=raw)


def resolve(
    item: PartiallyTokenized, image_prefix: str = IMAGE_URL_PREFIX
) -> ParseOutcome:
    """Turn a tokenized filename into a record, or reject it."""
    tokens = item.tokens

    start_index = find_start_year(tokens)
    if start_index is None:
        return Rejected(filename=item.filename, reason=RejectReason.NO_START_YEAR)

    start_year = int(tokens[start_index].strip(YEAR_TRIM_CHARS))

    end_year = 0
    if start_index + 1 < len(tokens) and FOUR_DIGITS.fullmatch(tokens[start_index + 1]):
        end_year = int(tokens[start_index + 1])

    submodels = tokens[1:start_index]

    # The end-year slot is consumed even when it did not hold a year.
    after_year = start_index + 2
    if len(tokens) < after_year + WINDOW_FIELDS:
        return Rejected(
            filename=item.filename,
            reason=RejectReason.MISSING_WINDOW_DATA,
            detail=f"{max(len(tokens) - after_year, 0)} tokens after years",
        )

    window_code, window_number, size_raw = tokens[after_year : after_year + WINDOW_FIELDS]

    record = GlassPartRecord(
        filename=item.filename,
        brand=item.brand,
        model="-".join(submodels),
        submodels=submodels,
        start_year=start_year,
        end_year=end_year,
        window_code=window_code,
        window_number=window_number,
        size=parse_size(size_raw, item.filename),
        description="-".join(tokens[after_year + WINDOW_FIELDS :]),
        image_path=f"{image_prefix}{item.filename}",
        tokens=tokens,
    )
    return Parsed(record)


def parse(filename: str, image_prefix: str = IMAGE_URL_PREFIX) -> ParseOutcome:
    """
    Parse a glass part filename.

    Never raises; failures come back as ``Rejected`` and are logged as
    warnings.
    """
    stage = tokenize(Unparsed(filename))
    if isinstance(stage, PartiallyTokenized):
        stage = resolve(stage, image_prefix=image_prefix)

    if isinstance(stage, Rejected):
        LOGGER.warning(
            "Skipping '%s': %s%s",
            filename,
            stage.reason.display_name,
            f" ({stage.detail})" if stage.detail else "",
        )
    return stage


def parse_filename(filename: str, image_prefix: str = IMAGE_URL_PREFIX) -> Optional[GlassPartRecord]:
    """Return the parsed record, or None if the filename does not match the convention."""
    outcome = parse(filename, image_prefix=image_prefix)
    if isinstance(outcome, Parsed):
        return outcome.record
    return None
