"""Helper functions for XML documents and series bundles.

Provides document loading, container lookup and zip bundle extraction.
"""

from __future__ import annotations

import io
import logging
import xml.etree.ElementTree as ET
import zipfile
from pathlib import Path, PurePosixPath

logger = logging.getLogger(__name__)


def load_xml_document(path: str | Path) -> ET.ElementTree:
    """Load and parse an XML document from disk.

    The file handle is closed before returning, on success or failure.

    Args:
        path: Path to the XML file.

    Returns:
        The parsed document.

    Raises:
        FileNotFoundError: If the file does not exist.
        xml.etree.ElementTree.ParseError: If the document is not well-formed.
    """
    logger.debug("Loading XML document %s", path)
    with open(path, "rb") as f:
        return ET.parse(f)


def parse_xml_bytes(data: bytes) -> ET.ElementTree:
    """Parse an XML document from a downloaded payload.

    Args:
        data: Raw (UTF-8) XML bytes.

    Returns:
        The parsed document.

    Raises:
        xml.etree.ElementTree.ParseError: If the payload is not well-formed.
    """
    with io.BytesIO(data) as stream:
        return ET.parse(stream)


def data_node(document: ET.ElementTree) -> ET.Element:
    """Get the container element holding one child per record.

    TVDB documents have a single root element (``<Data>``, ``<Actors>``,
    ``<Banners>``, ``<Mirrors>``, ``<Languages>``) wrapping the records.
    """
    return document.getroot()


def extract_bundle(data: bytes, target_dir: str | Path) -> Path:
    """Extract a series zip bundle into a directory.

    Member paths are flattened: only the file name of each entry is kept.
    Existing files are overwritten.

    Args:
        data: Raw zip bytes.
        target_dir: Directory to extract into. Created if missing.

    Returns:
        The extraction directory.

    Raises:
        zipfile.BadZipFile: If the payload is not a zip archive.
    """
    target = Path(target_dir)
    target.mkdir(parents=True, exist_ok=True)

    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        for entry in archive.infolist():
            if entry.is_dir():
                continue
            name = PurePosixPath(entry.filename).name
            if not name:
                continue
            with archive.open(entry) as source, open(target / name, "wb") as dest:
                dest.write(source.read())
            logger.debug("Extracted %s to %s", name, target)

    return target
