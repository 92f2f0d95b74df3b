"""Painting catalog loading, lookup, and title sanitization."""

import json
import os
import re

from painting_narrator.constants import UNKNOWN_PAINTER
from painting_narrator.errors import CatalogError
from painting_narrator.models import PaintingRecord


def sanitize_title(title: str) -> str:
    """Map a painting title to a filename stem.

    Every character outside [A-Za-z0-9] becomes an underscore. Runs are not
    collapsed, so distinct titles can still map to the same stem.

    "Mona Lisa" → "Mona_Lisa"
    "The Night-Watch (1642)" → "The_Night_Watch__1642_"
    """
    return re.sub(r"[^a-zA-Z0-9]", "_", title)


def painter_name(entry: dict) -> str:
    """Build "firstname lastname" from the first author of a catalog entry."""
    authors = entry.get("author") or []
    if not authors:
        return UNKNOWN_PAINTER
    first = authors[0]
    parts = [str(first.get("firstname") or "").strip(), str(first.get("lastname") or "").strip()]
    name = " ".join(p for p in parts if p)
    return name or UNKNOWN_PAINTER


def parse_catalog(data: dict) -> list[PaintingRecord]:
    """Convert a decoded catalog document into PaintingRecords, in file order."""
    if not isinstance(data, dict) or not isinstance(data.get("ListPainting"), list):
        raise CatalogError("Catalog must be an object with a 'ListPainting' list")

    paintings = []
    for entry in data["ListPainting"]:
        try:
            painting_id = int(entry["id"])
            title = str(entry["title"])
        except (KeyError, TypeError, ValueError) as e:
            raise CatalogError(f"Malformed catalog entry {entry!r}: {e}") from e
        paintings.append(PaintingRecord(id=painting_id, title=title, painter_name=painter_name(entry)))
    return paintings


def load_catalog(path: str) -> list[PaintingRecord]:
    """Load the painting catalog JSON file."""
    if not os.path.exists(path):
        raise CatalogError(f"Catalog not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog is not valid JSON: {path}: {e}") from e
    return parse_catalog(data)


def find_painting(paintings: list[PaintingRecord], painting_id: int) -> PaintingRecord | None:
    """Return the first painting with the given id, or None."""
    for painting in paintings:
        if painting.id == painting_id:
            return painting
    return None
