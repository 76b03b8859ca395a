"""tvdbxml - client for TheTVDB's XML API and series bundles."""

from tvdbxml.models import (
    Actor,
    Banner,
    BannerType,
    Episode,
    Language,
    Mirror,
    Series,
    SeriesDetails,
)
from tvdbxml.web import TVDBError, WebInterface

__version__ = "1.0.0"

__all__ = [
    "Actor",
    "Banner",
    "BannerType",
    "Episode",
    "Language",
    "Mirror",
    "Series",
    "SeriesDetails",
    "TVDBError",
    "WebInterface",
    "__version__",
]
