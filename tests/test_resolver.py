import itertools

import pytest

from swaypad.matching import matches
from swaypad.models import AggregateState, ByApplicationId, ByClass, ByTitle, WindowRecord
from swaypad.resolver import resolve_state
from swaypad.tree import extract_windows


def window(app_id=None, title=None, focused=False):
    return WindowRecord(title=title, app_id=app_id, window_class=None, focused=focused, node_kind="con")


OBSIDIAN = ByApplicationId("obsidian")


def test_empty():
    assert resolve_state([], OBSIDIAN) is AggregateState.ABSENT


def test_unfocused():
    assert resolve_state([window("obsidian")], OBSIDIAN) is AggregateState.PRESENT_UNFOCUSED


def test_focused():
    assert resolve_state([window("obsidian", focused=True)], OBSIDIAN) is AggregateState.PRESENT_FOCUSED


def test_unrelated_focus_does_not_leak():
    windows = [window("firefox", focused=True), window("obsidian")]
    assert resolve_state(windows, OBSIDIAN) is AggregateState.PRESENT_UNFOCUSED


def test_no_match_with_focused_window():
    assert resolve_state([window("firefox", focused=True)], OBSIDIAN) is AggregateState.ABSENT


def test_any_matching_focused_window_counts():
    windows = [window("obsidian"), window("obsidian"), window("obsidian", focused=True)]
    assert resolve_state(windows, OBSIDIAN) is AggregateState.PRESENT_FOCUSED


def test_accepts_generators():
    assert resolve_state((w for w in [window("obsidian")]), OBSIDIAN) is AggregateState.PRESENT_UNFOCUSED


@pytest.mark.parametrize(
    "identifier,expected",
    [
        (ByTitle("FISH-TERM"), AggregateState.PRESENT_FOCUSED),
        (ByApplicationId("firefox"), AggregateState.PRESENT_UNFOCUSED),
        (ByClass("Obsidian"), AggregateState.PRESENT_UNFOCUSED),
        (ByApplicationId("org.keepassxc.KeePassXC"), AggregateState.PRESENT_UNFOCUSED),
        (ByApplicationId("julia"), AggregateState.ABSENT),
    ],
)
def test_sample_tree(sample_tree, identifier, expected):
    assert resolve_state(extract_windows(sample_tree), identifier) is expected


def test_exhaustive_small_worlds():
    "Every combination of three windows: totality, exclusivity and focus isolation"
    candidates = [
        window("obsidian"),
        window("obsidian", focused=True),
        window("firefox"),
        window("firefox", focused=True),
        window(None),
    ]
    for size in range(4):
        for windows in itertools.product(candidates, repeat=size):
            state = resolve_state(windows, OBSIDIAN)
            matching = [w for w in windows if matches(w, OBSIDIAN)]
            if not matching:
                assert state is AggregateState.ABSENT
            elif any(w.focused for w in matching):
                assert state is AggregateState.PRESENT_FOCUSED
            else:
                assert state is AggregateState.PRESENT_UNFOCUSED
