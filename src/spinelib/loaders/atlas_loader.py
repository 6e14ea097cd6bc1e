"""Texture atlas (``.atlas``) parsing."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)


class AtlasError(ValueError):
    """Raised when an atlas file cannot be parsed."""

    def __init__(self, message: str, line: Optional[int] = None):
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


@dataclass
class AtlasRegion:
    """Rectangle of a page image holding one attachment image."""

    name: str
    page: str
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    orig_width: int = 0
    orig_height: int = 0
    offset_x: int = 0
    offset_y: int = 0
    rotate: int = 0  # Degrees, 0 when not rotated
    index: int = -1
    extras: Dict[str, Any] = field(default_factory=dict)


@dataclass
class AtlasPage:
    """One page image and the regions packed into it."""

    name: str
    size: Tuple[int, int] = (0, 0)
    format: str = "RGBA8888"
    filter: Tuple[str, str] = ("Nearest", "Nearest")
    repeat: str = "none"
    regions: List[AtlasRegion] = field(default_factory=list)
    extras: Dict[str, Any] = field(default_factory=dict)

    def find(self, name: str) -> Optional[AtlasRegion]:
        for region in self.regions:
            if region.name == name:
                return region
        return None


@dataclass
class Atlas:
    """All pages of an atlas file."""

    pages: List[AtlasPage] = field(default_factory=list)

    def regions(self) -> Iterator[AtlasRegion]:
        for page in self.pages:
            yield from page.regions

    def find(self, name: str) -> Optional[AtlasRegion]:
        for page in self.pages:
            region = page.find(name)
            if region is not None:
                return region
        return None


def _ints(value: str, count: int, line: int) -> Tuple[int, ...]:
    parts = [p.strip() for p in value.split(",")]
    if len(parts) != count:
        raise AtlasError(f"expected {count} values, got '{value}'", line)
    try:
        return tuple(int(p) for p in parts)
    except ValueError as exc:
        raise AtlasError(f"expected integers, got '{value}'", line) from exc


def _rotation(value: str, line: int) -> int:
    value = value.strip().lower()
    if value == "true":
        return 90
    if value == "false":
        return 0
    try:
        return int(value)
    except ValueError as exc:
        raise AtlasError(f"invalid rotate value '{value}'", line) from exc


def _apply_page_field(page: AtlasPage, key: str, value: str, line: int):
    if key == "size":
        page.size = _ints(value, 2, line)
    elif key == "format":
        page.format = value
    elif key == "filter":
        parts = [p.strip() for p in value.split(",")]
        page.filter = (parts[0], parts[-1])
    elif key == "repeat":
        page.repeat = value
    else:
        page.extras[key] = value


def _apply_region_field(region: AtlasRegion, key: str, value: str, line: int):
    if key == "rotate":
        region.rotate = _rotation(value, line)
    elif key == "xy":
        region.x, region.y = _ints(value, 2, line)
    elif key == "size":
        region.width, region.height = _ints(value, 2, line)
    elif key == "bounds":
        region.x, region.y, region.width, region.height = _ints(value, 4, line)
    elif key == "orig":
        region.orig_width, region.orig_height = _ints(value, 2, line)
    elif key == "offset":
        region.offset_x, region.offset_y = _ints(value, 2, line)
    elif key == "offsets":
        (region.offset_x, region.offset_y,
         region.orig_width, region.orig_height) = _ints(value, 4, line)
    elif key == "index":
        (region.index,) = _ints(value, 1, line)
    else:
        region.extras[key] = value


def parse_atlas(lines: Iterable[str]) -> Atlas:
    """
    Parse the libgdx/Spine atlas text format.

    Pages are separated by blank lines. A page starts with its image file
    name followed by ``key: value`` page fields; every other line without a
    colon starts a region whose ``key: value`` fields follow it.

    Args:
        lines: Text lines (a string is split into lines)

    Returns:
        Parsed atlas

    Raises:
        AtlasError: On malformed values or fields before any page
    """
    if isinstance(lines, str):
        lines = lines.splitlines()

    atlas = Atlas()
    page: Optional[AtlasPage] = None
    region: Optional[AtlasRegion] = None

    for number, raw in enumerate(lines, start=1):
        text = raw.strip()
        if not text:
            page, region = None, None
            continue

        if page is None:
            page = AtlasPage(name=text)
            atlas.pages.append(page)
            continue

        if ":" not in text:
            region = AtlasRegion(name=text, page=page.name)
            page.regions.append(region)
            continue

        key, value = (part.strip() for part in text.split(":", 1))
        if region is None:
            _apply_page_field(page, key, value, number)
        else:
            _apply_region_field(region, key, value, number)

    for region in atlas.regions():
        if region.orig_width == 0 and region.orig_height == 0:
            region.orig_width, region.orig_height = region.width, region.height

    return atlas


class AtlasLoader:
    """Load atlas files from disk."""

    def load(self, path: Path | str) -> Atlas:
        atlas_path = Path(path)
        if not atlas_path.exists():
            raise FileNotFoundError(f"Atlas file not found: {atlas_path}")

        with atlas_path.open("r", encoding="utf-8") as handle:
            atlas = parse_atlas(handle)

        logger.info(
            "Loaded atlas %s: %d pages, %d regions",
            atlas_path.name, len(atlas.pages), sum(len(p.regions) for p in atlas.pages),
        )
        return atlas
