"""Tests for SeriesDetails over an extracted bundle."""

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from tvdbxml.models import BannerType, SeriesDetails


class TestSeriesDetailsConstructor:
    """Tests for opening a bundle."""

    def test_missing_directory(self, tmp_path: Path) -> None:
        """Test a missing directory raises with its path in the message."""
        missing = tmp_path / "nope"
        with pytest.raises(FileNotFoundError, match="could not be found") as exc_info:
            SeriesDetails(missing, "en")
        assert str(missing.resolve()) in str(exc_info.value)

    def test_empty_language(self, bundle_dir: Path) -> None:
        """Test an empty language raises."""
        with pytest.raises(ValueError, match="Provided language must not be null or empty."):
            SeriesDetails(bundle_dir, "")

    def test_directory_checked_before_language(self, tmp_path: Path) -> None:
        """Test the directory error wins when both arguments are bad."""
        with pytest.raises(FileNotFoundError):
            SeriesDetails(tmp_path / "nope", "")

    def test_missing_language_document(self, bundle_dir: Path) -> None:
        """Test a language without a document raises."""
        with pytest.raises(FileNotFoundError):
            SeriesDetails(bundle_dir, "de")

    def test_malformed_document(self, bundle_dir: Path) -> None:
        """Test a malformed document raises a parse error."""
        (bundle_dir / "banners.xml").write_text("<Banners><Banner>", encoding="utf-8")
        with pytest.raises(ET.ParseError):
            SeriesDetails(bundle_dir, "en")

    def test_successful(self, bundle_dir: Path) -> None:
        """Test all parts are available after opening."""
        details = SeriesDetails(str(bundle_dir), "en")

        assert details.language == "en"
        assert details.extraction_path == bundle_dir
        assert details.actors is not None
        assert details.banners is not None
        assert details.series is not None


class TestSeriesDetailsDeserialize:
    """Tests for the lazily deserialized parts."""

    def test_actors(self, bundle_dir: Path) -> None:
        """Test all actors are read."""
        details = SeriesDetails(bundle_dir, "en")

        assert len(details.actors) == 9
        first = details.actors[0]
        assert first.id == 79415
        assert first.name == "Nathan Fillion"
        assert first.sort_order == 0

    def test_banners(self, bundle_dir: Path) -> None:
        """Test all banners are read."""
        details = SeriesDetails(bundle_dir, "en")

        assert len(details.banners) == 125
        types = {banner.type for banner in details.banners}
        assert types == {BannerType.FANART, BannerType.POSTER, BannerType.SEASON, BannerType.SERIES}
        seasons = [b for b in details.banners if b.type is BannerType.SEASON]
        assert all(b.season > 0 for b in seasons)

    def test_series(self, bundle_dir: Path) -> None:
        """Test the series and its episodes are read."""
        details = SeriesDetails(bundle_dir, "en")
        series = details.series

        assert series.id == 83462
        assert series.name == "Castle (2009)"
        assert series.genre == "Comedy, Crime, Drama"
        assert len(series.episodes) == 121
        assert series.has_episodes is True
        assert details.episodes is series.episodes

    def test_episodes_by_season(self, bundle_dir: Path) -> None:
        """Test episodes keep their season numbering."""
        details = SeriesDetails(bundle_dir, "en")
        by_season = details.series.episodes_by_season()

        assert len(by_season[0]) == 5
        assert len(by_season[1]) == 10
        assert len(details.series.regular_episodes) == 116

    def test_episode_lists_normalized(self, bundle_dir: Path) -> None:
        """Test episode pipe lists are normalized."""
        details = SeriesDetails(bundle_dir, "en")
        episode = details.episodes[0]

        assert episode.guest_stars == "Stephen J. Cannell, James Patterson"
        assert episode.series_id == 83462

    def test_series_gets_actor_collection(self, bundle_dir: Path) -> None:
        """Test the series shares the deserialized actor list."""
        details = SeriesDetails(bundle_dir, "en")

        assert details.series.actor_collection is details.actors
        assert len(details.series.actor_collection) == 9

    def test_series_without_actors(self, bundle_dir: Path) -> None:
        """Test an empty actors document leaves the collection empty."""
        (bundle_dir / "actors.xml").write_text("<Actors></Actors>", encoding="utf-8")
        details = SeriesDetails(bundle_dir, "en")

        assert details.actors == []
        assert details.series.actor_collection == []

    def test_records_routed_ignoring_case(self, bundle_dir: Path) -> None:
        """Test record elements match in any casing."""
        (bundle_dir / "en.xml").write_text(
            "<Data><series><id>1</id><SeriesName>Chuck</SeriesName></series>"
            "<EPISODE><id>2</id></EPISODE><Banner><id>3</id></Banner></Data>",
            encoding="utf-8",
        )
        details = SeriesDetails(bundle_dir, "en")

        assert details.series.name == "Chuck"
        assert [ep.id for ep in details.episodes] == [2]

    def test_parts_cached(self, bundle_dir: Path) -> None:
        """Test each part is deserialized once."""
        details = SeriesDetails(bundle_dir, "en")

        assert details.actors is details.actors
        assert details.banners is details.banners
        assert details.series is details.series


class TestSeriesDetailsClose:
    """Tests for releasing a bundle."""

    def test_close(self, bundle_dir: Path) -> None:
        """Test all state is released."""
        details = SeriesDetails(bundle_dir, "en")
        assert details.actors is not None

        details.close()

        assert details.language is None
        assert details.extraction_path is None
        assert details.actors is None
        assert details.banners is None
        assert details.series is None
        assert details.episodes == []

    def test_close_before_access(self, bundle_dir: Path) -> None:
        """Test parts never read before closing stay empty."""
        details = SeriesDetails(bundle_dir, "en")

        details.close()

        assert details.series is None
        assert details.actors is None
        assert details.banners is None

    def test_close_twice(self, bundle_dir: Path) -> None:
        """Test closing is idempotent."""
        details = SeriesDetails(bundle_dir, "en")
        details.close()
        details.close()
        assert details.series is None

    def test_context_manager(self, bundle_dir: Path) -> None:
        """Test the bundle is released on leaving the block."""
        with SeriesDetails(bundle_dir, "en") as details:
            assert details.series.name == "Castle (2009)"
        assert details.series is None
