"""Timing configuration for the piece controller."""

from dataclasses import dataclass, fields
from typing import Any, Dict

DELAY_FIELDS = ("step_delay", "move_delay", "lock_delay")

# Accepted spellings for boolean fields read from text
BOOL_STRINGS = {"true": True, "1": True, "false": False, "0": False}


def parse_bool(name: str, value: Any) -> bool:
    """Read a boolean field, accepting real bools, 0/1 and "true"/"false"."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in BOOL_STRINGS:
        return BOOL_STRINGS[value.strip().lower()]
    raise ValueError(f"{name} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class ControllerConfig:
    """Controller timing knobs. Delays are in seconds.

    Attributes:
        step_delay: Interval between gravity steps
        move_delay: Soft drop repeat interval
        lock_delay: Time without a successful move or rotation before a
            gravity step locks the piece
        early_step_lock: When True a gravity step compares the lock timer as
            it stood when the step began, so a piece whose lock delay has
            expired locks on that step even if the step's own downward move
            succeeds. When False the comparison happens after the move, and
            a successful move (which resets the timer) always prevents the
            lock.
    """
    step_delay: float = 1.0
    move_delay: float = 0.1
    lock_delay: float = 0.5
    early_step_lock: bool = True

    def __post_init__(self):
        for name in DELAY_FIELDS:
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ControllerConfig":
        """Create a config from a plain mapping.

        Missing keys keep their defaults.

        Args:
            data: Mapping of field name to value

        Returns:
            New config

        Raises:
            ValueError: If a key is unknown, a delay is not positive or a
                flag is not a recognisable boolean
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")

        values: Dict[str, Any] = {}
        for key, value in data.items():
            if key in DELAY_FIELDS:
                values[key] = float(value)
            else:
                values[key] = parse_bool(key, value)
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {f.name: getattr(self, f.name) for f in fields(self)}
