"""Client for TheTVDB legacy XML API."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
import zipfile
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar
from urllib.parse import urlencode

from tvdbxml.api import (
    APIAuthError,
    APIError,
    APINotFoundError,
    APIRateLimitError,
    APITransportError,
    BaseAPIClient,
    data_node,
    extract_bundle,
    parse_xml_bytes,
)
from tvdbxml.models import Language, Mirror, Series, SeriesDetails, XmlRecord

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=XmlRecord)

Downloader = Callable[[str], bytes]
Extractor = Callable[[bytes, Path], object]


class TVDBError(APIError):
    """Base exception for TVDB API errors."""

    pass


class TVDBAuthError(TVDBError, APIAuthError):
    """Missing or rejected API key."""

    pass


class TVDBNotFoundError(TVDBError, APINotFoundError):
    """Resource not found."""

    pass


class TVDBRateLimitError(TVDBError, APIRateLimitError):
    """Rate limit exceeded."""

    def __init__(self, retry_after: int | None = None) -> None:
        super().__init__(retry_after=retry_after)


class TVDBTransportError(TVDBError, APITransportError):
    """Download failed at the connection level."""

    pass


def _parse_records(data: bytes, record_cls: type[R]) -> list[R]:
    """Deserialize one record per child of the document container."""
    records = []
    for node in data_node(parse_xml_bytes(data)):
        record = record_cls()
        record.deserialize(node)
        records.append(record)
    return records


class WebInterface(BaseAPIClient):
    """Client for the TVDB XML API.

    Mirror discovery fails hard when the service cannot be reached. All
    other lookups return None for missing arguments and for failed
    downloads.
    """

    DEFAULT_LANGUAGE = "en"
    BUNDLE_DIRECTORY = "extraction"

    _error_cls = TVDBError
    _auth_error_cls = TVDBAuthError
    _not_found_cls = TVDBNotFoundError
    _rate_limit_cls = TVDBRateLimitError
    _transport_error_cls = TVDBTransportError
    _api_name = "TVDB"

    def __init__(
        self,
        api_key: str | None = None,
        file_directory: str | Path | None = None,
        timeout: float | None = None,
        root_url: str | None = None,
        downloader: Downloader | None = None,
        extractor: Extractor | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: TVDB API key. If not provided, reads from config.
            file_directory: Where bundles are stored and extracted. If not
                provided, reads from config or uses ~/.tvdbxml/bundles.
            timeout: Request timeout in seconds. Defaults to the config value.
            root_url: Host serving the mirror list. Defaults to the config value.
            downloader: Replacement for the HTTP download, ``url -> bytes``.
            extractor: Replacement for bundle extraction, ``(bytes, dir)``.

        Raises:
            TVDBAuthError: If no API key is provided or configured.
        """
        from tvdbxml.config import get_config, get_default_file_directory

        cfg = get_config()
        super().__init__(timeout=timeout if timeout is not None else cfg.options.timeout)

        self.api_key = api_key if api_key is not None else cfg.tvdb.api_key
        if not self.api_key:
            raise TVDBAuthError("TVDB API key not provided. Configure api_key in tvdbxml.ini.")

        if file_directory is None:
            file_directory = cfg.options.file_directory or get_default_file_directory()
        self.file_directory = Path(file_directory)
        self.root_url = (root_url or cfg.tvdb.root_url).rstrip("/")

        self._downloader = downloader or self.download
        self._extractor = extractor or extract_bundle
        self._default_mirror: Mirror | None = None

    @property
    def default_mirror(self) -> Mirror | None:
        """First discovered mirror providing xml, banner and zip files."""
        return self._default_mirror

    def _fetch(self, url: str) -> bytes | None:
        """Download a payload, turning API failures into None."""
        try:
            return self._downloader(url)
        except APIError as e:
            logger.warning("Download of %s failed: %s", url, e)
            return None

    def _fetch_records(self, url: str, record_cls: type[R]) -> list[R] | None:
        data = self._fetch(url)
        if data is None:
            return None
        try:
            return _parse_records(data, record_cls)
        except ET.ParseError as e:
            logger.warning("Invalid XML received from %s: %s", url, e)
            return None

    def get_mirrors(self) -> list[Mirror]:
        """Get all mirrors of the service.

        The first mirror providing all three file types is remembered as
        the default mirror.

        Returns:
            List of mirrors in document order.

        Raises:
            TVDBError: If the service cannot be reached or answers garbage.
        """
        url = f"{self.root_url}/api/{self.api_key}/mirrors.xml"
        try:
            data = self._downloader(url)
        except APIError as e:
            raise TVDBError("Source seems to be offline.") from e

        try:
            mirrors = _parse_records(data, Mirror)
        except ET.ParseError as e:
            raise TVDBError(f"Failed to parse mirror list: {e}") from e

        for mirror in mirrors:
            if self._default_mirror is None and mirror.is_complete:
                self._default_mirror = mirror

        logger.debug("Received %d mirrors", len(mirrors))
        return mirrors

    def get_default_mirror(self) -> Mirror | None:
        """Get the default mirror, discovering mirrors on first use.

        Raises:
            TVDBError: If mirror discovery fails.
        """
        if self._default_mirror is None:
            self.get_mirrors()
        return self._default_mirror

    def get_languages(self, mirror: Mirror | None) -> list[Language] | None:
        """Get all languages supported by the service.

        Args:
            mirror: Mirror to query.

        Returns:
            Languages ordered by name, or None if no mirror was given or
            the download failed.
        """
        if mirror is None:
            return None

        url = f"{mirror.address}/api/{self.api_key}/languages.xml"
        languages = self._fetch_records(url, Language)
        if languages is None:
            return None
        return sorted(languages, key=lambda lang: lang.name or "")

    def get_default_languages(self) -> list[Language] | None:
        """Get all supported languages using the default mirror.

        Raises:
            TVDBError: If mirror discovery fails.
        """
        return self.get_languages(self.get_default_mirror())

    def get_series_by_name(
        self,
        name: str,
        mirror: Mirror | None,
        language: str = DEFAULT_LANGUAGE,
    ) -> list[Series] | None:
        """Search series by name.

        Args:
            name: (Part of the) series name.
            mirror: Mirror to query.
            language: Language abbreviation of the results.

        Returns:
            Matching series in the requested language, or None if an
            argument is missing or the download failed.
        """
        if not name or mirror is None or not language:
            return None

        query = urlencode({"seriesname": name, "language": language})
        series = self._fetch_records(f"{mirror.address}/api/GetSeries.php?{query}", Series)
        if series is None:
            return None

        wanted = language.lower()
        return [s for s in series if s.language is not None and s.language.lower() == wanted]

    def get_series_by_remote_id(
        self,
        imdb_id: str | None,
        zap2it_id: str | None,
        mirror: Mirror | None,
        language: str = DEFAULT_LANGUAGE,
    ) -> list[Series] | None:
        """Look up series by an IMDB id or a zap2it id.

        Exactly one of the two ids must be given.

        Returns:
            Matching series, or None if the arguments are invalid or the
            download failed.
        """
        if bool(imdb_id) == bool(zap2it_id):
            return None
        if mirror is None or not language:
            return None

        query = urlencode(
            {"imdbid": imdb_id or "", "language": language, "zap2it": zap2it_id or ""}
        )
        return self._fetch_records(f"{mirror.address}/api/GetSeriesByRemoteID.php?{query}", Series)

    def get_full_series_by_id(
        self,
        series_id: int,
        mirror: Mirror | None,
        language: str = DEFAULT_LANGUAGE,
    ) -> SeriesDetails | None:
        """Download the full bundle of a series.

        The zip file is stored in the file directory and extracted to a
        directory of its own, overwriting earlier extractions.

        Args:
            series_id: TVDB series id.
            mirror: Mirror to download from.
            language: Language abbreviation of the series document.

        Returns:
            Details over the extracted bundle, or None if an argument is
            missing, the download failed or the bundle is not usable.
        """
        if not series_id or mirror is None or not language:
            return None

        url = f"{mirror.address}/api/{self.api_key}/series/{series_id}/all/{language}.zip"
        data = self._fetch(url)
        if data is None:
            return None

        self.file_directory.mkdir(parents=True, exist_ok=True)
        bundle_name = f"{series_id}_{language}"
        with open(self.file_directory / f"{bundle_name}.zip", "wb") as f:
            f.write(data)

        extraction_dir = self.file_directory / self.BUNDLE_DIRECTORY / bundle_name
        try:
            self._extractor(data, extraction_dir)
        except zipfile.BadZipFile as e:
            logger.warning("Invalid bundle received for series %s: %s", series_id, e)
            return None

        try:
            return SeriesDetails(extraction_dir, language)
        except (ET.ParseError, FileNotFoundError) as e:
            logger.warning("Incomplete bundle received for series %s: %s", series_id, e)
            return None
