"""Default value entities."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DefaultValue:
    """Decoded default of one key.

    `value` holds the raw store value (for choice keys, the choice string).
    Keys with a custom type override keep their literal undecoded.
    """

    value: object
    literal: str
    is_decoded: bool = True


@dataclass(frozen=True)
class ValueRange:
    """Decoded inclusive numeric bounds."""

    minimum: int | float | None
    maximum: int | float | None

    def contains(self, value: int | float) -> bool:
        if self.minimum is not None and value < self.minimum:
            return False
        if self.maximum is not None and value > self.maximum:
            return False
        return True
