"""Time range value object for the overview panel.

A time range is the token the user picks (e.g. '24h', '7d') and the token
sent to the aggregation API. It is captured once per refresh cycle and
never mutated.
"""

import re
from dataclasses import dataclass
from typing import ClassVar

# Relative duration: positive integer followed by a unit (s, m, h, d, w).
_TOKEN_RE = re.compile(r"^(?P<amount>[1-9][0-9]*)(?P<unit>[smhdw])$")


@dataclass(frozen=True)
class TimeRange:
    """Value object for the selected time range (SRP).

    An empty value means "all time" (no lower bound). Any other value must
    be a relative duration such as '15m', '24h' or '7d'.
    """

    value: str = ""

    UNIT_SECONDS: ClassVar[dict[str, int]] = {
        "s": 1,
        "m": 60,
        "h": 3600,
        "d": 86400,
        "w": 7 * 86400,
    }

    def __post_init__(self) -> None:
        """Normalize and validate the token.

        Raises:
            ValueError: If the token is not empty and not a relative duration.
        """
        object.__setattr__(self, "value", self.value.strip().lower())
        if self.value and not _TOKEN_RE.match(self.value):
            raise ValueError(
                f"Time range must be a duration like '1h', '24h' or '7d', got: {self.value!r}"
            )

    @classmethod
    def parse(cls, token: str | None) -> "TimeRange":
        """Build a TimeRange from a user or config token (None means all time)."""
        return cls(token or "")

    @property
    def is_all(self) -> bool:
        """True when the range has no lower bound."""
        return not self.value

    @property
    def seconds(self) -> int | None:
        """Length of the range in seconds, or None for all time."""
        match = _TOKEN_RE.match(self.value)
        if match is None:
            return None
        return int(match.group("amount")) * self.UNIT_SECONDS[match.group("unit")]

    def __str__(self) -> str:
        return self.value
