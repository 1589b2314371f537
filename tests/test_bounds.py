from __future__ import annotations

from rally_pong.entities import HorizontalBounds


def test_contained_ball_straddles_paddle():
    ball = HorizontalBounds(48.0, 52.0)
    paddle = HorizontalBounds(45.0, 55.0)
    assert ball.straddles(paddle)


def test_single_edge_inside_is_enough():
    paddle = HorizontalBounds(45.0, 55.0)
    assert HorizontalBounds(40.0, 46.0).straddles(paddle)
    assert HorizontalBounds(54.0, 60.0).straddles(paddle)


def test_disjoint_intervals_do_not_straddle():
    paddle = HorizontalBounds(45.0, 55.0)
    assert not HorizontalBounds(60.0, 65.0).straddles(paddle)
    assert not HorizontalBounds(30.0, 40.0).straddles(paddle)


def test_edges_are_exclusive():
    paddle = HorizontalBounds(45.0, 55.0)
    # edges touching exactly are not inside
    assert not HorizontalBounds(45.0, 55.0).straddles(paddle)
    assert not HorizontalBounds(40.0, 45.0).straddles(paddle)


def test_centered():
    assert HorizontalBounds.centered(50.0, 5.0) == (47.5, 52.5)
