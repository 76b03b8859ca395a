"""Series and episode records from the {language}.xml document."""

from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar

from pydantic import Field

from tvdbxml.models.base import ElementHandler, XmlRecord, assign, element_table
from tvdbxml.models.catalog import Actor
from tvdbxml.models.fields import (
    parse_datetime,
    parse_flag,
    parse_float,
    parse_int,
    parse_text,
    prepare_text,
)
from tvdbxml.models.mixins import DateAwareMixin, EpisodeCodeMixin

_AIRS_FIELDS = ("airs_after_season", "airs_before_season", "airs_before_episode")


def _parse_list(text: str | None) -> str | None:
    return prepare_text(parse_text(text))


class SeriesElement(DateAwareMixin, XmlRecord):
    """Fields shared by series and episodes."""

    id: int = -1
    name: str | None = None
    overview: str | None = None
    language: str | None = None
    imdb_id: str | None = None
    first_aired: datetime = datetime.min

    _elements: ClassVar[dict[str, ElementHandler]] = element_table(
        {
            "id": assign("id", parse_int),
            "Language": assign("language", parse_text),
            "Overview": assign("overview", parse_text),
            "FirstAired": assign("first_aired", parse_datetime),
            "IMDB_ID": assign("imdb_id", parse_text),
        }
    )


class Episode(EpisodeCodeMixin, SeriesElement):
    """A single episode of a series.

    The service numbers episodes in four independent schemes (aired,
    DVD, combined and absolute); each number is -1 when absent.
    """

    number: int = -1
    season_number: int = -1
    dvd_episode_number: float = -1.0
    dvd_season: int = -1
    dvd_chapter: int = -1
    dvd_disc_id: int = -1
    combined_episode_number: float = -1.0
    combined_season: int = -1
    absolute_number: int = -1

    airs_after_season: int = -1
    airs_before_season: int = -1
    airs_before_episode: int = -1

    director: str | None = None
    guest_stars: str | None = None
    writer: str | None = None
    ep_image_flag: int = -1
    picture_filename: str | None = None
    production_code: int = -1
    rating: float = -1.0
    rating_count: int = -1
    season_id: int = -1
    series_id: int = -1
    last_updated: int = -1

    thumb_added: int = -1
    thumb_height: int = -1
    thumb_width: int = -1

    is_tms_export: bool = False
    is_tms_review_blurry: bool = False
    is_tms_review_dark: bool = False
    is_tms_review_unsure: bool = False
    tms_review_by_id: int = -1
    tms_review_date: datetime = datetime.min
    tms_review_logo_id: int = -1
    tms_review_other: int = -1

    _elements: ClassVar[dict[str, ElementHandler]] = {
        **SeriesElement._elements,
        **element_table(
            {
                "EpisodeName": assign("name", parse_text),
                "EpisodeNumber": assign("number", parse_int),
                "SeasonNumber": assign("season_number", parse_int),
                "Combined_episodenumber": assign("combined_episode_number", parse_float),
                "Combined_season": assign("combined_season", parse_int),
                "DVD_chapter": assign("dvd_chapter", parse_int),
                "DVD_discid": assign("dvd_disc_id", parse_int),
                "DVD_episodenumber": assign("dvd_episode_number", parse_float),
                "DVD_season": assign("dvd_season", parse_int),
                "absolute_number": assign("absolute_number", parse_int),
                "airsafter_season": assign("airs_after_season", parse_int),
                "airsbefore_season": assign("airs_before_season", parse_int),
                "airsbefore_episode": assign("airs_before_episode", parse_int),
                "Director": assign("director", parse_text),
                "GuestStars": assign("guest_stars", _parse_list),
                "Writer": assign("writer", _parse_list),
                "EpImgFlag": assign("ep_image_flag", parse_int),
                "filename": assign("picture_filename", parse_text),
                "ProductionCode": assign("production_code", parse_int),
                "Rating": assign("rating", parse_float),
                "RatingCount": assign("rating_count", parse_int),
                "seasonid": assign("season_id", parse_int),
                "seriesid": assign("series_id", parse_int),
                "lastupdated": assign("last_updated", parse_int),
                "thumb_added": assign("thumb_added", parse_int),
                "thumb_height": assign("thumb_height", parse_int),
                "thumb_width": assign("thumb_width", parse_int),
                "tms_export": assign("is_tms_export", parse_flag),
                "tms_review_blurry": assign("is_tms_review_blurry", parse_flag),
                "tms_review_dark": assign("is_tms_review_dark", parse_flag),
                "tms_review_unsure": assign("is_tms_review_unsure", parse_flag),
                "tms_review_by": assign("tms_review_by_id", parse_int),
                "tms_review_date": assign("tms_review_date", parse_datetime),
                "tms_review_logo": assign("tms_review_logo_id", parse_int),
                "tms_review_other": assign("tms_review_other", parse_int),
            }
        ),
    }

    @property
    def is_special(self) -> bool:
        """Check if this is a special (Season 0)."""
        return self.season_number == 0

    def _after_deserialize(self, staged: dict[str, Any]) -> None:
        # API v1 sent nothing for these on specials, v3 sends 0 for all three
        values = [staged.get(field, getattr(self, field)) for field in _AIRS_FIELDS]
        if all(value == 0 for value in values):
            for field in _AIRS_FIELDS:
                staged[field] = -1

        self._normalize_lists(staged, "guest_stars", "writer")


class Series(SeriesElement):
    """A TV series with its episodes.

    ``episodes`` is owned by the series. ``actor_collection`` is attached
    by ``SeriesDetails`` from the separate actors document.
    """

    series_id: int = -1
    actors: str | None = None
    actor_collection: list[Actor] = Field(default_factory=list)
    added_by_user_id: int = -1
    added_date: datetime = datetime.min
    airs_day_of_week: str | None = None
    airs_time: str | None = None
    banner: str | None = None
    content_rating: str | None = None
    episodes: list[Episode] = Field(default_factory=list)
    fan_art: str | None = None
    genre: str | None = None
    has_episodes: bool = False
    last_updated: int = -1
    network: str | None = None
    network_id: int = -1
    poster: str | None = None
    rating: float = -1.0
    rating_count: int = -1
    runtime: float = -1.0
    status: str | None = None
    tms_wanted: bool = False
    zap2it_id: str | None = None

    _elements: ClassVar[dict[str, ElementHandler]] = {
        **SeriesElement._elements,
        **element_table(
            {
                "SeriesID": assign("series_id", parse_int),
                "SeriesName": assign("name", parse_text),
                "banner": assign("banner", parse_text),
                "zap2it_id": assign("zap2it_id", parse_text),
                "Actors": assign("actors", _parse_list),
                "Airs_DayOfWeek": assign("airs_day_of_week", parse_text),
                "Airs_Time": assign("airs_time", parse_text),
                "ContentRating": assign("content_rating", parse_text),
                "Genre": assign("genre", _parse_list),
                "Network": assign("network", parse_text),
                "NetworkID": assign("network_id", parse_int),
                "Rating": assign("rating", parse_float),
                "RatingCount": assign("rating_count", parse_int),
                "Runtime": assign("runtime", parse_float),
                "Status": assign("status", parse_text),
                "added": assign("added_date", parse_datetime),
                "addedBy": assign("added_by_user_id", parse_int),
                "fanart": assign("fan_art", parse_text),
                "lastupdated": assign("last_updated", parse_int),
                "poster": assign("poster", parse_text),
                "tms_wanted": assign("tms_wanted", parse_flag),
            }
        ),
    }

    def add_episode(self, episode: Episode | None) -> None:
        """Append an episode to the series.

        Raises:
            ValueError: If episode is None.
        """
        if episode is None:
            raise ValueError("Episode to add must not be null.")
        self.episodes.append(episode)
        self.has_episodes = True

    @property
    def regular_episodes(self) -> list[Episode]:
        """Get non-special episodes (excluding Season 0)."""
        return [ep for ep in self.episodes if not ep.is_special]

    @property
    def aired_episodes(self) -> list[Episode]:
        """Get only aired episodes."""
        return [ep for ep in self.episodes if ep.is_aired]

    def episodes_by_season(self) -> dict[int, list[Episode]]:
        """Get episodes grouped by season number."""
        result: dict[int, list[Episode]] = {}
        for ep in self.episodes:
            if ep.season_number not in result:
                result[ep.season_number] = []
            result[ep.season_number].append(ep)
        return result

    def _after_deserialize(self, staged: dict[str, Any]) -> None:
        staged["has_episodes"] = len(self.episodes) > 0
        self._normalize_lists(staged, "actors", "genre")
