"""Aggregate state of an application."""

from collections.abc import Iterable

from .matching import matches
from .models import AggregateState, Identifier, WindowRecord

__all__ = ["resolve_state"]


def resolve_state(windows: Iterable[WindowRecord], identifier: Identifier) -> AggregateState:
    """Classify the application selected by `identifier`.

    - no matching window: ``ABSENT``
    - a matching window has the focus: ``PRESENT_FOCUSED``
    - otherwise: ``PRESENT_UNFOCUSED``

    The focus of windows that don't match is irrelevant.
    """
    found = False
    for window in windows:
        if not matches(window, identifier):
            continue
        if window.focused:
            return AggregateState.PRESENT_FOCUSED
        found = True
    return AggregateState.PRESENT_UNFOCUSED if found else AggregateState.ABSENT
