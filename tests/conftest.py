"""Shared pytest fixtures.

Builds a synthetic extracted bundle for series 83462 "Castle (2009)":
9 actors, 125 banners and 121 episodes (5 specials plus 116 regular).
"""

import io
import zipfile
from collections.abc import Iterator
from pathlib import Path

import pytest

from tvdbxml.config import reset_config

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" ?>'

ACTOR_NAMES = [
    ("Nathan Fillion", "Richard Castle"),
    ("Stana Katic", "Kate Beckett"),
    ("Molly C. Quinn", "Alexis Castle"),
    ("Jon Huertas", "Javier Esposito"),
    ("Seamus Dever", "Kevin Ryan"),
    ("Tamala Jones", "Lanie Parish"),
    ("Susan Sullivan", "Martha Rodgers"),
    ("Ruben Santiago-Hudson", "Roy Montgomery"),
    ("Penny Johnson", "Victoria Gates"),
]

BANNER_TYPES = ["fanart", "poster", "season", "series"]
BANNER_COUNT = 125

# Episodes per season; season 0 holds the specials
SEASON_SIZES = {0: 5, 1: 10, 2: 24, 3: 24, 4: 23, 5: 24, 6: 11}

SERIES_XML = (
    "<Series><id>83462</id>"
    "<Actors>|Nathan Fillion|Stana Katic|Molly C. Quinn|Jon Huertas|Seamus Dever|"
    "Tamala Jones|Susan Sullivan|Ruben Santiago-Hudson|Penny Johnson|</Actors>"
    "<Airs_DayOfWeek>Monday</Airs_DayOfWeek><Airs_Time>10:00 PM</Airs_Time>"
    "<ContentRating>TV-PG</ContentRating><FirstAired>2009-03-09</FirstAired>"
    "<Genre>|Comedy|Crime|Drama|</Genre><IMDB_ID>tt1219024</IMDB_ID>"
    "<Language>en</Language><Network>ABC</Network><NetworkID></NetworkID>"
    "<Overview>Rick Castle is one of the world's most successful crime authors.</Overview>"
    "<Rating>8.8</Rating><RatingCount>346</RatingCount><Runtime>60</Runtime>"
    "<SeriesID>75394</SeriesID><SeriesName>Castle (2009)</SeriesName>"
    "<Status>Continuing</Status><added>2008-10-17 15:05:50</added><addedBy>3071</addedBy>"
    "<banner>graphical/83462-g10.jpg</banner><fanart>fanart/original/83462-33.jpg</fanart>"
    "<lastupdated>1378896827</lastupdated><poster>posters/83462-6.jpg</poster>"
    "<tms_wanted>1</tms_wanted><zap2it_id>EP01085588</zap2it_id></Series>"
)


def _actor_xml(index: int, name: str, role: str) -> str:
    actor_id = 79415 + index
    return (
        f"<Actor><id>{actor_id}</id><Image>actors/{actor_id}.jpg</Image>"
        f"<Name>{name}</Name><Role>{role}</Role><SortOrder>{index % 4}</SortOrder></Actor>"
    )


def _banner_xml(index: int) -> str:
    banner_type = BANNER_TYPES[index % len(BANNER_TYPES)]
    season = f"<Season>{index % 6 + 1}</Season>" if banner_type == "season" else ""
    return (
        f"<Banner><id>{605881 + index}</id>"
        f"<BannerPath>{banner_type}/83462-{index}.jpg</BannerPath>"
        f"<BannerType>{banner_type}</BannerType><BannerType2>1920x1080</BannerType2>"
        f"<Colors>|217,177,118|59,40,68|214,192,205|</Colors><Language>en</Language>"
        f"<Rating>9.6765</Rating><RatingCount>34</RatingCount><SeriesName>false</SeriesName>"
        f"<ThumbnailPath>_cache/{banner_type}/83462-{index}.jpg</ThumbnailPath>"
        f"<VignettePath>fanart/vignette/83462-{index}.jpg</VignettePath>{season}</Banner>"
    )


def _episode_xml(episode_id: int, season: int, number: int) -> str:
    airs = ""
    if season == 0:
        airs = (
            "<airsafter_season></airsafter_season>"
            "<airsbefore_episode>1</airsbefore_episode>"
            f"<airsbefore_season>{number + 1}</airsbefore_season>"
        )
    return (
        f"<Episode><id>{episode_id}</id><EpisodeName>Episode {season}x{number}</EpisodeName>"
        f"<EpisodeNumber>{number}</EpisodeNumber><SeasonNumber>{season}</SeasonNumber>"
        f"<FirstAired>{2009 + season}-03-{number:02d}</FirstAired>"
        "<GuestStars>|Stephen J. Cannell|James Patterson|</GuestStars>"
        "<Writer>Andrew W. Marlowe</Writer><Language>en</Language>"
        f"<seriesid>83462</seriesid>{airs}</Episode>"
    )


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep tests away from real config files and the user's home directory."""
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.delenv("TVDB_API_KEY", raising=False)
    monkeypatch.chdir(work)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def actors_xml() -> str:
    """actors.xml with 9 actors."""
    actors = "".join(_actor_xml(i, name, role) for i, (name, role) in enumerate(ACTOR_NAMES))
    return f"{XML_DECLARATION}<Actors>{actors}</Actors>"


@pytest.fixture
def banners_xml() -> str:
    """banners.xml with 125 banners."""
    banners = "".join(_banner_xml(i) for i in range(BANNER_COUNT))
    return f"{XML_DECLARATION}<Banners>{banners}</Banners>"


@pytest.fixture
def series_xml() -> str:
    """en.xml with the series followed by 121 episodes."""
    episodes = []
    episode_id = 398671
    for season, size in SEASON_SIZES.items():
        for number in range(1, size + 1):
            episodes.append(_episode_xml(episode_id, season, number))
            episode_id += 1
    return f"{XML_DECLARATION}<Data>{SERIES_XML}{''.join(episodes)}</Data>"


@pytest.fixture
def bundle_dir(tmp_path: Path, actors_xml: str, banners_xml: str, series_xml: str) -> Path:
    """Directory holding an extracted bundle."""
    directory = tmp_path / "extracted"
    directory.mkdir()
    (directory / "actors.xml").write_text(actors_xml, encoding="utf-8")
    (directory / "banners.xml").write_text(banners_xml, encoding="utf-8")
    (directory / "en.xml").write_text(series_xml, encoding="utf-8")
    return directory


@pytest.fixture
def bundle_zip(actors_xml: str, banners_xml: str, series_xml: str) -> bytes:
    """Zipped bundle as served by a mirror (one member inside a folder)."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("actors.xml", actors_xml)
        archive.writestr("banners.xml", banners_xml)
        archive.writestr("83462/en.xml", series_xml)
    return buffer.getvalue()
