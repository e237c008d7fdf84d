"""Ordered stack of open slideout panels."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .registry import DEFAULT_TITLE, DEFAULT_WIDTH, SlideoutType

_LOG = logging.getLogger(__name__)

Listener = Callable[[tuple["PanelState", ...]], None]


@dataclass(frozen=True)
class PanelState:
    """One entry of the slideout stack.

    ``title``, ``description`` and ``width`` are resolved once when the panel
    is opened and never recomputed.
    """

    type: SlideoutType | str
    props: dict[str, Any] = field(default_factory=dict)
    title: str = DEFAULT_TITLE
    description: str | None = None
    width: str = DEFAULT_WIDTH

    @property
    def return_to(self) -> dict[str, Any] | None:
        value = self.props.get("returnTo")
        return value if isinstance(value, dict) else None

    @property
    def return_callback(self) -> Callable[[], Any] | None:
        return_to = self.return_to
        if return_to is None:
            return None
        callback = return_to.get("onBack")
        return callback if callable(callback) else None

    @property
    def return_label(self) -> str | None:
        return_to = self.return_to
        if return_to is None:
            return None
        return return_to.get("label") or None


class SlideoutStack:
    """LIFO store of :class:`PanelState` entries with change listeners.

    Listeners are called synchronously, after the mutation, with a snapshot
    of the new stack.
    """

    def __init__(self) -> None:
        self._entries: list[PanelState] = []
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def push(self, state: PanelState) -> None:
        self._entries.append(state)
        _LOG.debug("pushed %s (depth=%d)", state.type, len(self._entries))
        self._notify()

    def pop(self) -> None:
        """Remove the top panel, or empty the stack if only one remains."""

        if not self._entries:
            return
        if len(self._entries) <= 1:
            self.clear()
            return
        popped = self._entries.pop()
        _LOG.debug("popped %s (depth=%d)", popped.type, len(self._entries))
        self._notify()

    def clear(self) -> None:
        if not self._entries:
            return
        self._entries = []
        _LOG.debug("cleared stack")
        self._notify()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    def peek(self) -> PanelState | None:
        return self._entries[-1] if self._entries else None

    def peek_below_top(self) -> PanelState | None:
        return self._entries[-2] if len(self._entries) > 1 else None

    def snapshot(self) -> tuple[PanelState, ...]:
        return tuple(self._entries)

    @property
    def is_open(self) -> bool:
        return bool(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a function that removes it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)


__all__ = ["Listener", "PanelState", "SlideoutStack"]
