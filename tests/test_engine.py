"""Tests for the game state machine and the per-tick update."""

import random

import pytest

from breakout.engine import Brick, BreakoutEngine, Phase, Sound, make_bricks


def test_initial_state(engine, config):
    assert engine.phase is Phase.NEW_GAME
    assert len(engine.bricks) == 112
    assert (engine.ball_x, engine.ball_y) == (392, 392)
    assert (engine.ball_vel_x, engine.ball_vel_y) == (5, 5)
    assert engine.paddle_x == (config.game_width - config.paddle_width) // 2
    assert engine.balls == 3
    assert engine.score == 0


@pytest.mark.parametrize("row,value", [(0, 1), (1, 1), (2, 3), (3, 3), (4, 5), (5, 5), (6, 7), (7, 7)])
def test_point_value_by_row(row, value):
    assert Brick((0, 0, 50, 15), row).point_value == value


def test_color_tiers():
    colors = [Brick((0, 0, 50, 15), row).color for row in range(8)]
    assert colors[0] == colors[1] == (255, 255, 0)
    assert colors[2] == colors[3] == (0, 128, 0)
    assert colors[4] == colors[5] == (255, 165, 0)
    assert colors[6] == colors[7] == (255, 0, 0)


def test_invalid_row_fails_fast():
    with pytest.raises(ValueError):
        Brick((0, 0, 50, 15), 8).color


def test_grid_is_row_major_with_row_zero_at_bottom(config):
    bricks = make_bricks(config)
    positions = {tuple(b.rect) for b in bricks}
    assert len(positions) == len(bricks) == 8 * 14
    assert [b.row for b in bricks[:14]] == [0] * 14
    assert tuple(bricks[0].rect) == (0, 297, 50, 15)
    assert tuple(bricks[-1].rect) == (13 * 56, 150, 50, 15)


def test_paddle_stays_in_bounds(engine, config):
    rng = random.Random(7)
    for _ in range(500):
        engine.pointer_move(rng.randint(-300, 300))
        assert 0 <= engine.paddle_x <= config.game_width - config.paddle_width


def test_speed_tiers(engine):
    assert engine.speed() == 2.0

    engine.start()
    assert engine.speed() == 0.9
    engine.hit_count = 4
    assert engine.speed() == 1.0
    engine.hit_count = 12
    assert engine.speed() == 1.25
    engine.hit_count, engine.hit_orange, engine.hit_red = 15, True, False
    assert engine.speed() == 1.5
    engine.hit_red = True
    assert engine.speed() == 1.75


def test_new_game_speed_ignores_hit_count(engine):
    engine.hit_count, engine.hit_orange, engine.hit_red = 20, True, True
    assert engine.speed() == 2.0


def test_ball_moves_by_truncated_velocity(engine):
    engine.tick()
    assert (engine.ball_x, engine.ball_y) == (402, 402)

    engine.start()
    engine.ball_vel_x = -5
    engine.tick()
    # 0.9 * 5 truncates toward zero in both directions
    assert (engine.ball_x, engine.ball_y) == (398, 406)


def test_start_resets_counters(engine):
    engine.score, engine.hit_count, engine.balls = 50, 5, 1
    engine.activate()
    assert engine.phase is Phase.PLAYING
    assert (engine.score, engine.hit_count, engine.balls) == (0, 0, 3)


def test_resume_keeps_counters(engine):
    engine.activate()
    engine.cancel()
    assert engine.phase is Phase.PAUSED

    engine.score, engine.hit_count, engine.balls = 9, 2, 2
    engine.activate()
    assert engine.phase is Phase.PLAYING
    assert (engine.score, engine.hit_count, engine.balls) == (9, 2, 2)


def test_cancel_toggles_pause(engine):
    engine.cancel()
    assert engine.phase is Phase.NEW_GAME

    engine.activate()
    engine.cancel()
    assert engine.phase is Phase.PAUSED
    engine.cancel()
    assert engine.phase is Phase.PLAYING


def test_activate_ignored_while_playing(engine):
    engine.activate()
    engine.score = 4
    engine.activate()
    assert engine.score == 4


def test_paused_tick_does_nothing(engine):
    engine.activate()
    engine.cancel()
    before = (engine.ball_x, engine.ball_y)
    engine.tick()
    assert (engine.ball_x, engine.ball_y) == before


def test_destroying_bricks_scores_by_row(engine, cues):
    engine.start()

    # Row 0, column 0
    engine.ball_x, engine.ball_y = 20, 312
    engine.ball_vel_x, engine.ball_vel_y = 5, -5
    engine.tick()
    assert engine.score == 1
    assert len(engine.bricks) == 111
    assert engine.ball_vel_y == 5
    assert engine.events == [Sound.BRICK]
    assert cues[-1] == (Sound.BRICK, Phase.PLAYING)

    # Row 6, column 5
    engine.ball_x, engine.ball_y = 290, 179
    engine.ball_vel_x, engine.ball_vel_y = 5, -5
    engine.tick()
    assert engine.score == 8
    assert engine.hit_red is True
    assert engine.hit_orange is False
    assert engine.hit_count == 2
    assert len(engine.bricks) == 110


def test_only_first_overlapping_brick_is_hit(engine):
    engine.start()
    # Straddles row 0 and row 1 in column 0
    engine.ball_x, engine.ball_y = 20, 289
    engine.ball_vel_x, engine.ball_vel_y = 5, -5
    engine.tick()
    assert len(engine.bricks) == 111
    assert engine.score == 1
    assert all(tuple(b.rect) != (0, 297, 50, 15) for b in engine.bricks)
    assert any(tuple(b.rect) == (0, 276, 50, 15) for b in engine.bricks)


def test_bricks_survive_outside_play(engine):
    engine.ball_x, engine.ball_y = 20, 316
    engine.ball_vel_x, engine.ball_vel_y = 5, -5
    engine.tick()
    assert len(engine.bricks) == 112
    assert engine.score == 0
    assert engine.ball_vel_y == 5
    assert engine.events == [Sound.BRICK]


def test_left_wall_inverts_velocity(engine):
    engine.ball_x, engine.ball_y = 0, 400
    engine.ball_vel_x = -5
    engine.tick()
    assert engine.ball_vel_x == 5
    assert engine.events == [Sound.WALL]


def test_corner_hits_both_walls(engine):
    engine.ball_x, engine.ball_y = 5, 5
    engine.ball_vel_x, engine.ball_vel_y = -5, -5
    engine.tick()
    assert (engine.ball_vel_x, engine.ball_vel_y) == (5, 5)
    assert engine.events == [Sound.WALL, Sound.WALL]


def test_idle_ball_bounces_off_paddle_line(engine):
    engine.ball_x, engine.ball_y = 100, 730
    engine.tick()
    assert engine.ball_y == 740
    assert engine.ball_vel_y == -5
    assert engine.collided is True
    assert engine.events == [Sound.PADDLE]


def test_paddle_collision_is_edge_triggered(engine):
    engine.ball_x, engine.ball_y = 100, 738
    engine.ball_vel_y = 1
    engine.collided = True
    engine.tick()
    assert engine.ball_vel_y == 1
    assert Sound.PADDLE not in engine.events
    assert engine.collided is True


def test_paddle_deflects_during_play(engine):
    engine.start()
    engine.ball_x, engine.ball_y = engine.paddle_x, 732
    engine.tick()
    assert engine.ball_vel_y == -5
    assert engine.events == [Sound.PADDLE]
    assert engine.balls == 3


def test_reaching_paddle_line_is_a_miss_even_over_paddle(engine, config):
    engine.start()
    engine.ball_x, engine.ball_y = engine.paddle_x + 10, 746
    engine.tick()
    assert engine.balls == 2
    assert (engine.ball_x, engine.ball_y) == (config.game_width // 2, config.screen_height // 2)
    assert Sound.PADDLE not in engine.events


def test_losing_last_ball_ends_session(engine):
    engine.start()
    del engine.bricks[:10]
    engine.balls = 1
    engine.ball_x, engine.ball_y = 100, 748
    engine.tick()
    assert engine.balls == 0
    assert engine.phase is Phase.NEW_GAME
    assert len(engine.bricks) == 112


def _clear_last_brick(engine, config):
    engine.bricks = make_bricks(config)[:1]
    engine.ball_x, engine.ball_y = 20, 312
    engine.ball_vel_x, engine.ball_vel_y = 5, -5
    engine.tick()


def test_clearing_grid_twice_ends_session(engine, config):
    engine.start()

    _clear_last_brick(engine, config)
    assert engine.game_count == 1
    assert engine.phase is Phase.PLAYING
    assert len(engine.bricks) == 112
    assert (engine.ball_x, engine.ball_y) == (config.game_width // 2, config.screen_height // 2)

    _clear_last_brick(engine, config)
    assert engine.phase is Phase.NEW_GAME
    assert engine.game_count == 0
    assert len(engine.bricks) == 112
    assert engine.score == 2


def test_sound_cues_report_current_phase(engine, cues):
    engine.ball_x, engine.ball_y = 0, 400
    engine.ball_vel_x = -5
    engine.tick()
    assert cues == [(Sound.WALL, Phase.NEW_GAME)]


def test_snapshot(engine):
    snap = engine.snapshot()
    assert snap.phase is Phase.NEW_GAME
    assert snap.ball == (392, 392, 15, 15)
    assert snap.paddle == (0, 750, 784, 15)
    assert len(snap.bricks) == 112
    assert snap.bricks[0] == ((0, 297, 50, 15), (255, 255, 0))

    engine.start()
    assert engine.snapshot().paddle == (engine.paddle_x, 750, 50, 15)


def test_engine_without_callback(config):
    engine = BreakoutEngine(config)
    engine.ball_x, engine.ball_vel_x = 0, -5
    engine.tick()
    assert engine.events == [Sound.WALL]
