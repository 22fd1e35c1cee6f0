"""Tests for the terminal loop's input parsing and rendering."""

from window_switcher.main import parse_selection, render
from window_switcher.models import DisplayItem, Partition


def _items():
    return [
        DisplayItem(id="a-w0", app_name="A", bundle_id="a", window_index=0, has_windows=True),
        DisplayItem(id="b-w0", app_name="B", bundle_id="b", window_index=0, has_windows=True, minimized=True),
    ]


def test_number_switches() -> None:
    items = _items()
    assert parse_selection("1", items) == ("switch", items[0])


def test_number_on_minimized_item_restores() -> None:
    items = _items()
    assert parse_selection("2", items) == ("restore", items[1])


def test_action_keys() -> None:
    items = _items()
    assert parse_selection("c 1", items) == ("close", items[0])
    assert parse_selection("m 1", items) == ("minimize", items[0])
    assert parse_selection("m 2", items) == ("restore", items[1])
    assert parse_selection("x 2", items) == ("exclude", items[1])


def test_out_of_range_and_garbage() -> None:
    items = _items()
    assert parse_selection("3", items) == (None, None)
    assert parse_selection("0", items) == (None, None)
    assert parse_selection("z 1", items) == (None, None)
    assert parse_selection("hello", items) == (None, None)


def test_render_numbers_across_sections(capsys) -> None:
    active, minimized = _items()
    windowless = DisplayItem(id="c-no-window", app_name="C", bundle_id="c")
    numbered = render(Partition(active=[active], minimized=[minimized], windowless=[windowless]))
    assert numbered == [active, minimized, windowless]
    out = capsys.readouterr().out
    assert "Active:" in out and "Minimized:" in out and "No Windows:" in out


def test_render_empty(capsys) -> None:
    assert render(Partition(), loading=True) == []
    assert "Loading..." in capsys.readouterr().out
