"""Nested side-panel navigation for the dashboard."""

from .controller import SlideoutController
from .host import SlideoutHost
from .invalidation import invalidation_keys
from .registry import SlideoutType
from .stack import PanelState, SlideoutStack

__all__ = [
    "PanelState",
    "SlideoutController",
    "SlideoutHost",
    "SlideoutStack",
    "SlideoutType",
    "invalidation_keys",
]
