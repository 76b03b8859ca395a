"""Aggregation of an extracted series bundle into one object graph."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from pathlib import Path
from typing import Self

from tvdbxml.api.helpers import data_node, load_xml_document
from tvdbxml.models.catalog import Actor, Banner
from tvdbxml.models.series import Episode, Series

logger = logging.getLogger(__name__)

ACTORS_FILENAME = "actors.xml"
BANNERS_FILENAME = "banners.xml"


def _children_named(tree: ET.ElementTree, name: str) -> Iterator[ET.Element]:
    """Yield the children of the document container with the given tag."""
    wanted = name.lower()
    for node in data_node(tree):
        if isinstance(node.tag, str) and node.tag.lower() == wanted:
            yield node


class SeriesDetails:
    """Series, episodes, actors and banners from one extracted bundle.

    The three documents (actors.xml, banners.xml and {language}.xml) are
    loaded on construction but only deserialized on first access of the
    matching property. Each document is deserialized at most once.

    Lazy properties are not synchronized; concurrent first access must be
    serialized by the caller.
    """

    def __init__(self, extraction_path: str | Path, language: str) -> None:
        """Open the bundle documents.

        Args:
            extraction_path: Directory the bundle was extracted to.
            language: Language abbreviation, e.g. "en". Selects {language}.xml.

        Raises:
            FileNotFoundError: If the directory or one of the documents is missing.
            ValueError: If language is empty.
            xml.etree.ElementTree.ParseError: If a document is not well-formed.
        """
        directory = Path(extraction_path)
        if not directory.is_dir():
            raise FileNotFoundError(f'The directory "{directory.resolve()}" could not be found.')

        if not language:
            raise ValueError("Provided language must not be null or empty.")

        self._extraction_path: Path | None = directory
        self._language: str | None = language

        self._actors_doc: ET.ElementTree | None = load_xml_document(directory / ACTORS_FILENAME)
        self._banners_doc: ET.ElementTree | None = load_xml_document(directory / BANNERS_FILENAME)
        self._language_doc: ET.ElementTree | None = load_xml_document(
            directory / f"{language}.xml"
        )

        self._actors: list[Actor] | None = None
        self._banners: list[Banner] | None = None
        self._series: Series | None = None

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    @property
    def language(self) -> str | None:
        """Language abbreviation of the series document."""
        return self._language

    @property
    def extraction_path(self) -> Path | None:
        """Directory the documents were loaded from."""
        return self._extraction_path

    @property
    def actors(self) -> list[Actor] | None:
        """Actors of the series, deserialized on first access."""
        if self._actors is None and self._actors_doc is not None:
            self._actors = self._deserialize_actors(self._actors_doc)
        return self._actors

    @property
    def banners(self) -> list[Banner] | None:
        """Banners of the series, deserialized on first access."""
        if self._banners is None and self._banners_doc is not None:
            self._banners = self._deserialize_banners(self._banners_doc)
        return self._banners

    @property
    def series(self) -> Series | None:
        """The series with its episodes, deserialized on first access.

        Actors are deserialized first so the series gets its actor
        collection before the language document is read.
        """
        if self._series is None and self._language_doc is not None:
            self._series = self._deserialize_series(self._language_doc)
        return self._series

    @property
    def episodes(self) -> list[Episode]:
        """Episodes of the series."""
        series = self.series
        return series.episodes if series is not None else []

    def close(self) -> None:
        """Release the loaded documents and all deserialized records."""
        self._language = None
        self._extraction_path = None
        self._actors_doc = None
        self._banners_doc = None
        self._language_doc = None
        self._actors = None
        self._banners = None
        self._series = None

    def _deserialize_actors(self, document: ET.ElementTree) -> list[Actor]:
        actors = []
        for node in _children_named(document, "Actor"):
            actor = Actor()
            actor.deserialize(node)
            actors.append(actor)
        logger.debug("Deserialized %d actors", len(actors))
        return actors

    def _deserialize_banners(self, document: ET.ElementTree) -> list[Banner]:
        banners = []
        for node in _children_named(document, "Banner"):
            banner = Banner()
            banner.deserialize(node)
            banners.append(banner)
        logger.debug("Deserialized %d banners", len(banners))
        return banners

    def _deserialize_series(self, document: ET.ElementTree) -> Series:
        series = Series()

        actors = self.actors
        if actors:
            series.actor_collection = actors

        for node in data_node(document):
            if not isinstance(node.tag, str):
                continue
            tag = node.tag.lower()
            if tag == "episode":
                episode = Episode()
                episode.deserialize(node)
                series.add_episode(episode)
            elif tag == "series":
                series.deserialize(node)

        logger.debug("Deserialized series %s with %d episodes", series.id, len(series.episodes))
        return series
