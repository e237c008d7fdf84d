"""Opening, back navigation and success handling for the slideout stack."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from .registry import DEFAULT_TITLE, DEFAULT_WIDTH, SlideoutType, config_for, label_for_type
from .stack import PanelState, SlideoutStack

_LOG = logging.getLogger(__name__)

CacheKey = tuple[Any, ...]
Invalidator = Callable[[CacheKey], Any]


class SlideoutOpener:
    """Turns a panel type and caller properties into a pushed :class:`PanelState`."""

    def __init__(self, stack: SlideoutStack) -> None:
        self.stack = stack

    def build(self, panel_type: SlideoutType | str, props: Mapping[str, Any] | None = None) -> PanelState:
        props = dict(props or {})
        panel_type = SlideoutType.coerce(panel_type)
        config = config_for(panel_type)
        return PanelState(
            type=panel_type,
            props=props,
            title=props.get("title") or (config and config.title) or DEFAULT_TITLE,
            description=props.get("description") or (config and config.description) or None,
            width=props.get("width") or (config and config.width) or DEFAULT_WIDTH,
        )

    def open(self, panel_type: SlideoutType | str, props: Mapping[str, Any] | None = None) -> PanelState:
        state = self.build(panel_type, props)
        if config_for(panel_type) is None:
            _LOG.info("opening unregistered panel type %r", panel_type)
        self.stack.push(state)
        return state


class SlideoutNavigator:
    """Back and close behaviour, including the caller supplied ``returnTo`` exit."""

    def __init__(self, stack: SlideoutStack) -> None:
        self.stack = stack

    def close(self) -> None:
        self.stack.clear()

    def pop(self) -> None:
        self.stack.pop()

    def go_back(self) -> None:
        """Leave the current panel.

        An explicit ``returnTo.onBack`` on the top panel wins over the stack
        history: the whole stack is cleared first and the callback runs once
        afterwards, so it may open a new panel on a clean stack.
        """

        top = self.stack.peek()
        if top is None:
            return
        callback = top.return_callback
        if callback is None:
            self.stack.pop()
            return
        self.stack.clear()
        try:
            callback()
        except Exception:
            _LOG.warning("returnTo callback for %s failed", top.type, exc_info=True)
            raise

    def has_back_action(self) -> bool:
        top = self.stack.peek()
        if top is None:
            return False
        return len(self.stack) > 1 or top.return_callback is not None

    def previous_label(self) -> str | None:
        top = self.stack.peek()
        if top is None:
            return None
        if top.return_label:
            return top.return_label
        below = self.stack.peek_below_top()
        if below is None:
            return None
        return label_for_type(below.type)


class SuccessCoordinator:
    """Couples a finished form to cache invalidation and stack collapse."""

    def __init__(
        self,
        stack: SlideoutStack,
        navigator: SlideoutNavigator,
        invalidator: Invalidator | None = None,
    ) -> None:
        self.stack = stack
        self.navigator = navigator
        self.invalidator = invalidator

    def handle_success(
        self,
        result: Any = None,
        *,
        invalidate: Iterable[CacheKey] | None = None,
        on_success: Callable[[Any], Any] | None = None,
    ) -> None:
        """Run the success protocol for the top panel.

        Every key is invalidated independently; a failing key is logged and
        the rest still run. The stack then collapses (nested panels pop back
        to their parent, the last panel closes; ``returnTo`` is not honoured)
        and only after that is ``on_success`` called, so it may open a new
        panel. The first collaborator error is re-raised at the end.
        """

        errors: list[Exception] = []
        if invalidate and self.invalidator is not None:
            for key in invalidate:
                try:
                    self.invalidator(key)
                except Exception as exc:
                    _LOG.warning("invalidating %s failed", key, exc_info=True)
                    errors.append(exc)

        if len(self.stack) > 1:
            self.navigator.pop()
        else:
            self.navigator.close()

        if on_success is not None:
            try:
                on_success(result)
            except Exception as exc:
                _LOG.warning("on_success callback failed", exc_info=True)
                errors.append(exc)

        if errors:
            raise errors[0]


__all__ = [
    "CacheKey",
    "Invalidator",
    "SlideoutNavigator",
    "SlideoutOpener",
    "SuccessCoordinator",
]
