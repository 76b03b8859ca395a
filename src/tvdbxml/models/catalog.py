"""Catalog records: actors, banners, languages and mirrors."""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar

from tvdbxml.models.base import ElementHandler, XmlRecord, assign, element_table
from tvdbxml.models.fields import (
    parse_bool,
    parse_enum,
    parse_float,
    parse_int,
    parse_text,
)

# Mirror typemask bits
XML_FILE_BIT = 1
BANNER_FILE_BIT = 2
ZIP_FILE_BIT = 4


def build_image_url(mirror_address: str, path: str | None) -> str | None:
    """Build the full URL of an image path relative to a mirror."""
    if not path:
        return None
    return f"{mirror_address.rstrip('/')}/banners/{path.lstrip('/')}"


class Actor(XmlRecord):
    """An actor of a series, from actors.xml."""

    id: int = -1
    image_path: str | None = None
    name: str | None = None
    role: str | None = None
    sort_order: int = -1

    _elements: ClassVar[dict[str, ElementHandler]] = element_table(
        {
            "id": assign("id", parse_int),
            "Image": assign("image_path", parse_text),
            "Name": assign("name", parse_text),
            "Role": assign("role", parse_text),
            "SortOrder": assign("sort_order", parse_int),
        }
    )

    def __lt__(self, other: Actor) -> bool:
        # Higher sort order comes first
        return self.sort_order > other.sort_order

    def image_url(self, mirror_address: str) -> str | None:
        """Get the full image URL on the given mirror."""
        return build_image_url(mirror_address, self.image_path)


class BannerType(Enum):
    """Types of a banner."""

    FANART = "fanart"
    POSTER = "poster"
    SEASON = "season"
    SERIES = "series"
    UNKNOWN = "unknown"


def _parse_banner_type(text: str | None) -> BannerType:
    return parse_enum(BannerType, text, BannerType.UNKNOWN)


class Banner(XmlRecord):
    """An image descriptor from banners.xml."""

    id: int = -1
    banner_path: str | None = None
    type: BannerType = BannerType.UNKNOWN
    dimension: str | None = None  # e.g. "1920x1080" or "graphical"
    color: str | None = None
    language: str | None = None
    rating: float = -1.0
    rating_count: int = -1
    series_name: bool = False  # True when the series name is part of the image
    thumbnail_path: str | None = None
    vignette_path: str | None = None
    season: int = -1

    _elements: ClassVar[dict[str, ElementHandler]] = element_table(
        {
            "id": assign("id", parse_int),
            "BannerPath": assign("banner_path", parse_text),
            "BannerType": assign("type", _parse_banner_type),
            "BannerType2": assign("dimension", parse_text),
            "Colors": assign("color", parse_text),
            "Language": assign("language", parse_text),
            "Rating": assign("rating", parse_float),
            "RatingCount": assign("rating_count", parse_int),
            "SeriesName": assign("series_name", parse_bool),
            "ThumbnailPath": assign("thumbnail_path", parse_text),
            "VignettePath": assign("vignette_path", parse_text),
            "Season": assign("season", parse_int),
        }
    )

    def url(self, mirror_address: str) -> str | None:
        """Get the full banner URL on the given mirror."""
        return build_image_url(mirror_address, self.banner_path)

    def thumbnail_url(self, mirror_address: str) -> str | None:
        """Get the full thumbnail URL on the given mirror."""
        return build_image_url(mirror_address, self.thumbnail_path)


class Language(XmlRecord):
    """A language supported by the service, from languages.xml."""

    id: int = -1
    name: str | None = None
    abbreviation: str | None = None

    _elements: ClassVar[dict[str, ElementHandler]] = element_table(
        {
            "name": assign("name", parse_text),
            "abbreviation": assign("abbreviation", parse_text),
            "id": assign("id", parse_int),
        }
    )


def decode_type_mask(text: str | None) -> dict[str, Any]:
    """Decode a mirror typemask into the three capability flags."""
    mask = parse_int(text)
    if mask is None:
        return {}
    return {
        "contains_xml_file": bool(mask & XML_FILE_BIT),
        "contains_banner_file": bool(mask & BANNER_FILE_BIT),
        "contains_zip_file": bool(mask & ZIP_FILE_BIT),
    }


class Mirror(XmlRecord):
    """A service endpoint and the content it provides."""

    id: int = -1
    address: str | None = None
    contains_xml_file: bool = False
    contains_banner_file: bool = False
    contains_zip_file: bool = False

    _elements: ClassVar[dict[str, ElementHandler]] = element_table(
        {
            "id": assign("id", parse_int),
            "mirrorpath": assign("address", parse_text),
            "typemask": decode_type_mask,
        }
    )

    def __lt__(self, other: Mirror) -> bool:
        # Higher id comes first
        return self.id > other.id

    @property
    def is_complete(self) -> bool:
        """Check if the mirror provides xml, banner and zip files."""
        return self.contains_xml_file and self.contains_banner_file and self.contains_zip_file
