"""Mixin classes for record models.

Provides reusable properties for common record patterns.
"""

from __future__ import annotations

from datetime import datetime


class EpisodeCodeMixin:
    """Mixin providing episode_code property.

    Requires the model to have season_number and number fields, both -1
    when unknown.

    Example:
        ```python
        ep = Episode(season_number=1, number=5)
        print(ep.episode_code)  # "S01E05"
        ```
    """

    season_number: int
    number: int

    @property
    def episode_code(self) -> str | None:
        """Get the episode code in S01E05 format, or None if unnumbered."""
        if self.season_number < 0 or self.number < 0:
            return None
        return f"S{self.season_number:02d}E{self.number:02d}"


class DateAwareMixin:
    """Mixin for records with a first_aired date.

    ``datetime.min`` is the "not set" sentinel for dates.
    """

    first_aired: datetime

    @property
    def has_air_date(self) -> bool:
        """Check if an air date was provided."""
        return self.first_aired != datetime.min

    @property
    def is_aired(self) -> bool:
        """Check if the air date is in the past.

        Returns:
            True if aired before now, False if in the future or unknown.
        """
        if not self.has_air_date:
            return False
        return self.first_aired.replace(tzinfo=None) <= datetime.now()
