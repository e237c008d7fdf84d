"""Façade tying the slideout stack, navigation and success handling together."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from .navigation import (
    CacheKey,
    Invalidator,
    SlideoutNavigator,
    SlideoutOpener,
    SuccessCoordinator,
)
from .registry import SlideoutType
from .stack import Listener, PanelState, SlideoutStack


def normalize_key(key: Any) -> CacheKey:
    """Return ``key`` as a tuple; bare values become a one-element key."""

    if isinstance(key, (list, tuple)):
        return tuple(key)
    return (key,)


class SlideoutController:
    """Single entry point screens and the renderer use to drive slideouts.

    The controller owns one :class:`SlideoutStack`. ``invalidator`` is the
    cache collaborator, called once per key after a successful form.
    """

    def __init__(
        self,
        invalidator: Invalidator | None = None,
        stack: SlideoutStack | None = None,
    ) -> None:
        self.stack = stack if stack is not None else SlideoutStack()
        self.invalidator = invalidator
        self.opener = SlideoutOpener(self.stack)
        self.navigator = SlideoutNavigator(self.stack)
        self.coordinator = SuccessCoordinator(
            self.stack, self.navigator, invalidator=self._invalidate_one
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def open(self, panel_type: SlideoutType | str, props: Mapping[str, Any] | None = None) -> PanelState:
        return self.opener.open(panel_type, props)

    def go_back(self) -> None:
        self.navigator.go_back()

    def close(self) -> None:
        self.navigator.close()

    def handle_success(
        self,
        result: Any = None,
        *,
        invalidate: Iterable[Any] | None = None,
        on_success: Callable[[Any], Any] | None = None,
    ) -> None:
        self.coordinator.handle_success(result, invalidate=invalidate, on_success=on_success)

    def invalidate_queries(self, keys: Iterable[Any] = ()) -> None:
        for key in keys:
            self._invalidate_one(key)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self.stack.subscribe(listener)

    def _invalidate_one(self, key: Any) -> None:
        if self.invalidator is not None:
            self.invalidator(normalize_key(key))

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------
    @property
    def state(self) -> PanelState | None:
        return self.stack.peek()

    @property
    def depth(self) -> int:
        return len(self.stack)

    @property
    def is_open(self) -> bool:
        return self.stack.is_open

    @property
    def has_history(self) -> bool:
        return len(self.stack) > 1

    @property
    def has_back_action(self) -> bool:
        return self.navigator.has_back_action()

    @property
    def previous_label(self) -> str | None:
        return self.navigator.previous_label()

    def view(self) -> dict[str, Any]:
        """Everything the renderer needs to draw the current panel."""

        has_back_action = self.has_back_action
        return {
            "is_open": self.is_open,
            "current_panel": self.state,
            "has_back_action": has_back_action,
            "previous_label": self.previous_label,
            "on_close": self.close,
            "on_back": self.go_back if has_back_action else None,
        }


__all__ = ["SlideoutController", "normalize_key"]
