"""Base class for records deserialized from TVDB XML nodes.

Each record type declares a static element table mapping lower-cased
element names to handlers. A handler turns the element text into the
field updates it implies (an empty dict when the text does not apply).
Deserialization stages all updates first, lets the record post-process
them, and then assigns them through the change-notification setter.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Callable, Mapping
from typing import Any, ClassVar

from pydantic import BaseModel, PrivateAttr

from tvdbxml.models.fields import prepare_text, same_value

ElementHandler = Callable[[str | None], dict[str, Any]]
ChangeCallback = Callable[["XmlRecord", str], None]
FieldParser = Callable[[str | None], Any]


def assign(field: str, parser: FieldParser) -> ElementHandler:
    """Build a handler that parses element text into a single field.

    Args:
        field: Name of the model field to update.
        parser: Parser returning the typed value, or None to skip.

    Returns:
        Element handler for use in an element table.
    """

    def handler(text: str | None) -> dict[str, Any]:
        value = parser(text)
        if value is None:
            return {}
        return {field: value}

    return handler


def element_table(entries: Mapping[str, ElementHandler]) -> dict[str, ElementHandler]:
    """Normalize element names of a table for case-insensitive lookup."""
    return {name.lower(): handler for name, handler in entries.items()}


def element_text(node: ET.Element) -> str:
    """Get the full text content of an element, including descendants."""
    return "".join(node.itertext())


class XmlRecord(BaseModel):
    """A record populated from the children of one XML node.

    Subclasses set ``_elements`` (built with ``element_table``) and may
    override ``_after_deserialize`` to post-process staged values.

    Observers registered with ``subscribe`` are called with
    ``(record, field_name)`` once per assignment that changes a stored
    value. Assigning a value equal to the current one (case-insensitive
    for strings) is a no-op.
    """

    _elements: ClassVar[dict[str, ElementHandler]] = {}
    _observers: list[ChangeCallback] = PrivateAttr(default_factory=list)

    def __setattr__(self, name: str, value: Any) -> None:
        if name not in type(self).model_fields:
            super().__setattr__(name, value)
            return

        if same_value(getattr(self, name), value):
            return

        super().__setattr__(name, value)
        for callback in list(self._observers):
            callback(self, name)

    def subscribe(self, callback: ChangeCallback) -> None:
        """Register a callback for field changes."""
        self._observers.append(callback)

    def unsubscribe(self, callback: ChangeCallback) -> None:
        """Remove a previously registered callback (no-op if unknown)."""
        if callback in self._observers:
            self._observers.remove(callback)

    def deserialize(self, node: ET.Element | None) -> None:
        """Populate the record from the immediate children of a node.

        Unknown elements are ignored. Elements whose text is empty or does
        not parse leave the field at its current value.

        Args:
            node: Element whose children hold the field values.

        Raises:
            ValueError: If node is None.
        """
        if node is None:
            raise ValueError("Provided node must not be null.")

        staged: dict[str, Any] = {}
        for child in node:
            if not isinstance(child.tag, str):
                continue
            handler = self._elements.get(child.tag.lower())
            if handler is None:
                continue
            for field, value in handler(element_text(child)).items():
                if field in staged and same_value(staged[field], value):
                    continue
                staged[field] = value

        self._after_deserialize(staged)

        for field, value in staged.items():
            setattr(self, field, value)

    def _after_deserialize(self, staged: dict[str, Any]) -> None:
        """Hook to adjust staged values before they are assigned."""

    def _normalize_lists(self, staged: dict[str, Any], *fields: str) -> None:
        """Apply pipe-list normalization to staged (or current) values."""
        for field in fields:
            staged[field] = prepare_text(staged.get(field, getattr(self, field)))
