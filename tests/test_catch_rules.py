"""
Tests for catch/miss resolution and scoring.
"""

import pytest

from egg_catcher.catcher_core.config_loader import load_config
from egg_catcher.catcher_core.entities import Catcher, FallingObject
from egg_catcher.catcher_core.rules import CatchRules, Outcome, TerminationRules
from egg_catcher.catcher_core.scoring import ScoreTracker


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def catcher(config):
    return Catcher.from_config(config)


@pytest.fixture
def rules(config):
    return CatchRules(config)


@pytest.fixture
def scorer(config):
    return ScoreTracker(config)


def _egg(x, bottom, radius=12.0):
    return FallingObject(x=x, y=bottom - radius, radius=radius, fall_speed=3.0)


class TestCatchRules:
    """Test the edge-crossing catch test."""

    def test_above_catch_line_keeps_falling(self, rules, catcher):
        """An egg above the catcher is undecided."""
        egg = _egg(catcher.center_x, catcher.y - 1)

        assert rules.resolve(egg, catcher) is Outcome.FALLING
        assert not egg.crossed_catch_line

    def test_crossing_inside_span_is_caught(self, rules, catcher):
        """Reaching the catch line over the basket catches the egg."""
        egg = _egg(catcher.center_x, catcher.y)

        assert rules.resolve(egg, catcher) is Outcome.CAUGHT
        assert egg.caught
        assert not egg.missed

    def test_crossing_outside_span_is_not_caught(self, rules, catcher):
        """Reaching the catch line beside the basket only marks the crossing."""
        egg = _egg(catcher.x - 20, catcher.y + 2)

        assert rules.resolve(egg, catcher) is Outcome.FALLING
        assert egg.crossed_catch_line
        assert not egg.caught

    def test_catch_test_runs_once(self, rules, catcher):
        """Moving under an egg after it crossed does not catch it."""
        egg = _egg(catcher.x - 20, catcher.y + 2)
        rules.resolve(egg, catcher)

        catcher.move_to(egg.x)
        egg.y += 5

        assert rules.resolve(egg, catcher) is Outcome.FALLING
        assert not egg.caught

    def test_edge_is_not_caught(self, rules, catcher):
        """An egg exactly on the catcher's edge is not caught."""
        left = _egg(catcher.x, catcher.y)
        right = _egg(catcher.right, catcher.y)

        assert rules.resolve(left, catcher) is not Outcome.CAUGHT
        assert rules.resolve(right, catcher) is not Outcome.CAUGHT

    def test_below_board_is_missed(self, rules, catcher, config):
        """An egg whose top edge left the board is missed."""
        egg = FallingObject(
            x=catcher.x - 20,
            y=config.board.height + 13,
            radius=12.0,
            fall_speed=3.0,
            crossed_catch_line=True
        )

        assert rules.resolve(egg, catcher) is Outcome.MISSED
        assert egg.missed
        assert not egg.caught

    def test_top_on_boundary_not_yet_missed(self, rules, catcher, config):
        """Top edge exactly at the board bottom is not past it."""
        egg = FallingObject(
            x=catcher.x - 20,
            y=config.board.height + 12,
            radius=12.0,
            fall_speed=3.0,
            crossed_catch_line=True
        )

        assert rules.resolve(egg, catcher) is Outcome.FALLING


class TestTerminationRules:
    """Test game over detection."""

    def test_lives_left(self, config):
        result = TerminationRules(config).check_termination(lives=1)
        assert not result.terminated
        assert result.reason == ""

    def test_out_of_lives(self, config):
        result = TerminationRules(config).check_termination(lives=0)
        assert result.terminated
        assert result.reason == "out_of_lives"


class TestScoreTracker:
    """Test score and lives bookkeeping."""

    def test_initial_state(self, scorer):
        assert scorer.score == 0
        assert scorer.lives == 3

    def test_catch_awards_reward(self, scorer):
        """Each catch adds exactly 10 points."""
        event = scorer.apply_catch()

        assert scorer.score == 10
        assert event.is_catch
        assert event.points == 10
        assert scorer.catches == 1

    def test_miss_costs_one_life(self, scorer):
        """Each miss costs exactly one life and no points."""
        scorer.apply_catch()
        event = scorer.apply_miss()

        assert scorer.lives == 2
        assert scorer.score == 10
        assert not event.is_catch
        assert event.lives_after == 2

    def test_lives_floor_at_zero(self, scorer):
        """Lives never go negative."""
        for _ in range(5):
            scorer.apply_miss()
        assert scorer.lives == 0
        assert scorer.out_of_lives

    def test_reset(self, scorer):
        scorer.apply_catch()
        scorer.apply_miss()
        scorer.reset()

        assert scorer.score == 0
        assert scorer.lives == 3
        assert scorer.catches == 0
        assert scorer.misses == 0
