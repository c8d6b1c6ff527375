"""Input edge buffer between an input source and the per-tick update.

Producers (UI callbacks, a network thread, a scripted runner) call
``press`` at any time. The active piece drains the buffer exactly once per
tick. Each one-shot action has a single slot, so repeated presses before a
drain collapse into one.
"""

import threading
from enum import Enum
from typing import Dict, List


class Action(Enum):
    """One-shot control actions, declared in drain priority order."""
    RESTART = "RESTART"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    ROTATE_LEFT = "ROTATE_LEFT"    # Counter-clockwise
    ROTATE_RIGHT = "ROTATE_RIGHT"  # Clockwise
    HARD_DROP = "HARD_DROP"


class InputBuffer:
    """Single-slot mailbox per one-shot action plus the soft drop hold state."""

    def __init__(self):
        self._lock = threading.Lock()
        self._pending: Dict[Action, bool] = {action: False for action in Action}
        self._soft_drop_held = False

    def press(self, action: Action) -> None:
        """Record a one-shot press.

        Args:
            action: Action to queue for the next tick

        Raises:
            ValueError: If action is not an Action
        """
        if not isinstance(action, Action):
            raise ValueError(f"Invalid action: {action!r}")
        with self._lock:
            self._pending[action] = True

    def press_soft_drop(self) -> None:
        """Start holding soft drop."""
        with self._lock:
            self._soft_drop_held = True

    def release_soft_drop(self) -> None:
        """Stop holding soft drop."""
        with self._lock:
            self._soft_drop_held = False

    @property
    def soft_drop_held(self) -> bool:
        """Whether soft drop is currently held down."""
        return self._soft_drop_held

    def pending(self) -> List[Action]:
        """Pending actions in priority order, without consuming them."""
        with self._lock:
            return [action for action in Action if self._pending[action]]

    def drain(self) -> List[Action]:
        """Take all pending one-shot actions and clear their slots.

        Returns:
            Actions in priority order
        """
        with self._lock:
            actions = [action for action in Action if self._pending[action]]
            for action in actions:
                self._pending[action] = False
        return actions

    def clear(self) -> None:
        """Drop all pending actions and release soft drop."""
        with self._lock:
            for action in Action:
                self._pending[action] = False
            self._soft_drop_held = False
