"""Records deserialized from TVDB XML documents."""

from tvdbxml.models.base import XmlRecord
from tvdbxml.models.catalog import Actor, Banner, BannerType, Language, Mirror
from tvdbxml.models.details import SeriesDetails
from tvdbxml.models.mixins import DateAwareMixin, EpisodeCodeMixin
from tvdbxml.models.series import Episode, Series, SeriesElement

__all__ = [
    "Actor",
    "Banner",
    "BannerType",
    "DateAwareMixin",
    "Episode",
    "EpisodeCodeMixin",
    "Language",
    "Mirror",
    "Series",
    "SeriesDetails",
    "SeriesElement",
    "XmlRecord",
]
