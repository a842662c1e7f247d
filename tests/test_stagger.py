"""Tests for the stagger helper."""
from core.animation.stagger import grid_offsets, stagger_offsets


def test_stagger_offsets_are_linear():
    assert stagger_offsets(4, 100) == [0, 100, 200, 300]
    assert stagger_offsets(3, 50, base=1000) == [1000, 1050, 1100]


def test_stagger_offsets_empty():
    assert stagger_offsets(0, 100) == []


def test_negative_increment_is_clamped(caplog):
    offsets = stagger_offsets(3, -25)
    assert offsets == [0, 0, 0]
    assert "clamped" in caplog.text


def test_grid_offsets_combine_both_axes():
    grid = grid_offsets(2, 3, 50, 30)
    assert grid == [[0, 30, 60], [50, 80, 110]]
