"""Interception modes for a substitute instance.

A substitute is IDLE (calls are recorded and answered) except during the
synchronous extent of one configuration or assertion pass. ModeState.engage()
is the only way to leave IDLE and always restores it on exit, including when
the user's closure raises.

Only one pass may be active on a substitute at a time; nothing here locks.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from teddymocks.errors import InvalidStateError

if TYPE_CHECKING:
    from collections.abc import Iterator


class Mode(Enum):
    """How an intercepted call is interpreted."""

    IDLE = "idle"  # record the call, answer from stub or original
    CONFIGURING_STUB = "configuring_stub"  # the call defines stub behaviour
    ASSERTING = "asserting"  # the call queries recorded history


@dataclass
class ModeState:
    """Current mode plus the validation flag active for that pass."""

    mode: Mode = Mode.IDLE
    validate_arguments: bool = True

    @contextmanager
    def engage(self, mode: Mode, validate_arguments: bool) -> Iterator[ModeState]:
        """Switch to a mode for the duration of a with-block.

        Args:
            mode: CONFIGURING_STUB or ASSERTING.
            validate_arguments: Whether argument values participate in
                matching during this pass.

        Raises:
            InvalidStateError: If another pass is already active on this state.
        """
        if self.mode is not Mode.IDLE:
            raise InvalidStateError(
                f"Cannot enter {mode.value} mode while {self.mode.value} is active"
            )
        self.mode = mode
        self.validate_arguments = validate_arguments
        try:
            yield self
        finally:
            self.mode = Mode.IDLE
            self.validate_arguments = True
