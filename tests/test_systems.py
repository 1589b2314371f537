from __future__ import annotations

import pytest

from rally_pong.random_signal import RandomSignal
from rally_pong.sim.models import Direction
from rally_pong.sim.systems import jitter_for, x_randomize
from tests.conftest import make_engine, park_paddles, place_ball

POS = Direction.POSITIVE
NEG = Direction.NEGATIVE


class TestJitter:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (0, 0.0),
            (32, 0.0),
            (33, -0.1),
            (65, -0.1),
            (66, 0.1),
            (99, 0.1),
        ],
    )
    def test_mapping(self, value, expected):
        assert jitter_for(value) == expected

    def test_output_is_one_of_three_values(self):
        assert {jitter_for(v) for v in range(100)} == {0.0, -0.1, 0.1}

    def test_draws_one_sample(self):
        signal = iter([70, 10])
        assert x_randomize(signal) == 0.1
        assert next(signal) == 10


class TestHorizontalWall:
    def test_left_wall_flips(self, open_field):
        place_ball(open_field, 9.0, 60.0, dir_x=NEG)
        open_field.advance_tick()
        assert open_field.state.dir_x is POS
        assert open_field.state.ball.position.x == pytest.approx(10.0)

    def test_right_wall_uses_full_width(self, open_field):
        # 155.5 + 5 > 160 even though the centred edge is 158
        place_ball(open_field, 155.5, 60.0, dir_x=POS)
        open_field.advance_tick()
        assert open_field.state.dir_x is NEG

    def test_inside_no_flip(self, open_field):
        place_ball(open_field, 155.0, 60.0, dir_x=POS)
        open_field.advance_tick()
        assert open_field.state.dir_x is POS


class TestSimplePolicy:
    def test_top_bounce_does_not_score(self, open_field):
        place_ball(open_field, 80.0, 9.0, dir_y=NEG)
        open_field.state.score = 3
        open_field.advance_tick()
        assert open_field.state.dir_y is POS
        assert open_field.state.score == 3
        assert open_field.state.rx == 0.0

    def test_bottom_bounce_does_not_score(self, open_field):
        place_ball(open_field, 80.0, 106.0, dir_y=POS)
        open_field.advance_tick()
        assert open_field.state.dir_y is NEG
        assert open_field.state.score == 0
        assert open_field.state.rx == 0.0


class TestScoredPolicy:
    @pytest.fixture
    def field(self, versus):
        park_paddles(versus)
        return versus

    def test_bottom_wall_scores(self, field):
        place_ball(field, 80.0, 106.0, POS, POS)
        field.state.signal = iter([70])
        field.advance_tick()
        state = field.state
        assert state.dir_y is NEG
        assert state.score == 1
        assert state.rx == 0.1
        assert state.ball.position.y == pytest.approx(105.0)

    def test_top_wall_costs_a_point(self, field):
        place_ball(field, 80.0, 9.0, POS, NEG)
        field.state.score = 3
        field.state.signal = iter([40])
        field.advance_tick()
        assert field.state.dir_y is POS
        assert field.state.score == 2
        assert field.state.rx == -0.1

    def test_score_is_floored_at_zero(self, field):
        place_ball(field, 80.0, 9.0, POS, NEG)
        field.state.signal = iter([10])
        field.advance_tick()
        assert field.state.score == 0
        assert field.state.rx == 0.0

    def test_score_never_negative_over_a_session(self):
        engine = make_engine("versus", seed=11)
        engine.serve()
        for _ in range(5000):
            engine.advance_tick()
            assert engine.state.score >= 0


class TestCpuCollision:
    def test_bounces_downward_ball_back(self, versus, audio):
        versus.state.cpu.position.x = 80.0
        place_ball(versus, 80.0, 103.0, POS, POS)
        versus.advance_tick()
        assert versus.state.dir_y is NEG
        assert audio.played == ["bounce"]

    def test_upward_ball_stays_silent(self, versus, audio):
        versus.state.cpu.position.x = 80.0
        place_ball(versus, 80.0, 103.0, POS, NEG)
        versus.advance_tick()
        assert versus.state.dir_y is NEG
        assert audio.played == []

    def test_no_contact_below_line(self, versus):
        versus.state.cpu.position.x = 80.0
        place_ball(versus, 80.0, 90.0, POS, POS)
        versus.advance_tick()
        assert versus.state.dir_y is POS


class TestPlayerCollision:
    def test_return_scores_under_simple_policy(self, classic, audio):
        classic.state.player.position.x = 50.0
        place_ball(classic, 50.0, 12.0, POS, NEG)
        classic.advance_tick()
        state = classic.state
        assert state.dir_y is POS
        assert state.score == 1
        assert state.ball.hot
        assert state.ball.color == "yellow"
        assert audio.played == ["bounce"]

    def test_return_does_not_score_under_scored_policy(self, versus, audio):
        versus.state.player.position.x = 50.0
        place_ball(versus, 50.0, 12.0, POS, NEG)
        versus.advance_tick()
        assert versus.state.dir_y is POS
        assert versus.state.score == 0
        assert audio.played == ["bounce"]

    def test_hot_zone_before_contact(self, classic):
        classic.state.player.position.x = 50.0
        place_ball(classic, 50.0, 20.0, POS, NEG)
        classic.advance_tick()
        assert classic.state.ball.hot
        assert classic.state.dir_y is NEG
        assert classic.state.score == 0

    def test_already_rising_ball_is_not_a_return(self, classic, audio):
        classic.state.player.position.x = 50.0
        place_ball(classic, 50.0, 12.0, POS, POS)
        classic.advance_tick()
        assert classic.state.dir_y is POS
        assert classic.state.score == 0
        assert audio.played == []

    def test_leaving_the_paddle_clears_hot(self, classic):
        classic.state.player.position.x = 50.0
        place_ball(classic, 50.0, 20.0, POS, NEG)
        classic.advance_tick()
        place_ball(classic, 100.0, 20.0)
        classic.advance_tick()
        assert not classic.state.ball.hot
        assert classic.state.ball.color == "red"

    def test_hot_flag_holds_above_zone_while_straddling(self, classic):
        classic.state.player.position.x = 50.0
        place_ball(classic, 50.0, 20.0, POS, NEG)
        classic.advance_tick()
        place_ball(classic, 50.0, 60.0, POS, NEG)
        classic.advance_tick()
        assert classic.state.ball.hot
        assert classic.state.ball.color == "yellow"

    def test_straddling_above_zone_does_not_turn_hot(self, classic):
        classic.state.player.position.x = 50.0
        place_ball(classic, 50.0, 60.0, POS, NEG)
        classic.advance_tick()
        assert not classic.state.ball.hot
        assert classic.state.ball.color == "red"

    def test_no_cue_after_win(self, classic, audio):
        classic.state.win = True
        classic.state.player.position.x = 50.0
        place_ball(classic, 50.0, 12.0, POS, NEG)
        classic.advance_tick()
        assert classic.state.score == 1
        assert audio.played == []


class TestSpeedRamp:
    def test_ramp_after_1024_ticks(self, open_field):
        for _ in range(1024):
            open_field.advance_tick()
        state = open_field.state
        assert state.tick_count == 1024
        assert state.vx == pytest.approx(1.2)
        assert state.vy == pytest.approx(1.1)
        assert state.bump_tick == 0
        assert state.level == 2

    def test_no_ramp_before_interval(self, open_field):
        for _ in range(1023):
            open_field.advance_tick()
        assert open_field.state.vx == 1.0
        assert open_field.state.level == 1

    def test_bump_progress(self, open_field):
        for _ in range(513):
            open_field.advance_tick()
        # computed from the counter before this tick's increment
        assert open_field.state.bump == 50

    def test_arcade_ramps_every_512(self):
        engine = make_engine("arcade")
        park_paddles(engine)
        place_ball(engine, 80.0, 60.0)
        for _ in range(512):
            engine.advance_tick()
        assert engine.state.vx == pytest.approx(1.2)

    def test_speed_never_decreases(self):
        engine = make_engine("versus", seed=3)
        engine.serve()
        history = []
        for _ in range(3000):
            engine.advance_tick()
            history.append((engine.state.vx, engine.state.vy))
        assert history == sorted(history)
        assert history[-1][0] == pytest.approx(1.4)


class TestWin:
    def test_win_latches_once(self, open_field, audio):
        open_field.state.score = 10
        open_field.advance_tick()
        state = open_field.state
        assert state.win
        assert state.win_time == pytest.approx(0.025)
        assert audio.played == ["victory"]

        state.score = 0
        for _ in range(100):
            open_field.advance_tick()
        assert state.win
        assert state.win_time == pytest.approx(0.025)
        assert audio.played == ["victory"]

    def test_below_threshold(self, open_field):
        open_field.state.score = 9
        open_field.advance_tick()
        assert not open_field.state.win


class TestTelemetry:
    def test_sampled_every_sixteenth_tick_after_win(self, open_field):
        state = open_field.state
        state.win = True
        before = state.telemetry.to_list()
        expected = RandomSignal(0, 100, seed=5).take(2)
        state.signal = RandomSignal(0, 100, seed=5)

        for _ in range(14):
            open_field.advance_tick()
        assert state.telemetry.to_list() == before

        open_field.advance_tick()
        assert state.telemetry[0] == expected[0]

        for _ in range(16):
            open_field.advance_tick()
        data = state.telemetry.to_list()
        assert len(data) == 200
        assert data[:2] == [expected[1], expected[0]]
        assert data[2:] == before[:198]

    def test_idle_before_win(self, open_field):
        before = open_field.state.telemetry.to_list()
        for _ in range(64):
            open_field.advance_tick()
        assert open_field.state.telemetry.to_list() == before

    def test_length_stays_fixed(self, open_field):
        open_field.state.win = True
        for _ in range(2000):
            open_field.advance_tick()
            assert len(open_field.state.telemetry) == 200
