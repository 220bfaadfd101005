"""User-configurable match settings."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from chessmatch.core.variant import Variant
from chessmatch.game.time_control import MsClock, TimeControl, monotonic_ms


@dataclass
class MatchSettings:
    """All user-configurable settings."""

    # PGN input
    default_variant: str = "Standard"
    max_moves: int | None = None

    # PGN output
    pgn_output: str = "games.pgn"

    # Clock, in the ``moves/seconds+increment`` notation
    time_control: str = "inf"

    def __post_init__(self) -> None:
        if self.max_moves is not None and self.max_moves < 1:
            raise ValueError(f"max_moves must be at least 1: {self.max_moves}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> MatchSettings:
        """Build settings from a plain mapping (e.g. a parsed config file).

        Raises:
            ValueError: on unknown keys or values of the wrong type.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(unknown)}")

        values: dict[str, Any] = {}
        for key, value in data.items():
            if key == "max_moves":
                if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                    raise ValueError(f"max_moves must be an integer, got {value!r}")
            elif not isinstance(value, str):
                raise ValueError(f"{key} must be a string, got {value!r}")
            values[key] = value
        return cls(**values)

    def variant(self) -> Variant:
        return Variant.from_name(self.default_variant)

    def build_time_control(self, clock: MsClock = monotonic_ms) -> TimeControl:
        return TimeControl.from_string(self.time_control, clock=clock)
