"""Series registry: per-event-type legend visibility that outlives refresh cycles."""

from __future__ import annotations

from collections.abc import Iterable


class SeriesRegistry:
    """Maps event type to its hidden flag.

    Seeded once with a default-hidden set (noise categories such as 'stats').
    Only legend clicks write to it; a refresh never resets it. Entries for
    event types that a later discovery no longer returns are kept, unused.
    """

    def __init__(self, default_hidden: Iterable[str] = ()) -> None:
        self._hidden: dict[str, bool] = {key: True for key in default_hidden}

    def is_hidden(self, key: str) -> bool:
        """Return the hidden flag for key; unseen keys are visible."""
        return self._hidden.get(key, False)

    def set_hidden(self, key: str, hidden: bool) -> None:
        self._hidden[key] = hidden

    def snapshot(self) -> dict[str, bool]:
        """Return a copy of every known key and its hidden flag."""
        return dict(self._hidden)
