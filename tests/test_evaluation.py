"""
Tests for the baseline agent and the evaluation harness.
"""

import json
from pathlib import Path

import numpy as np
import pytest
import yaml

from agents.baseline_tracker.agent import CatcherAgent
from egg_catcher.catcher_core.config_loader import default_config_path
from egg_catcher.evaluation.run_eval import (
    EvalResult,
    EvalSummary,
    evaluate_agent,
    evaluate_single_seed,
    load_agent,
    load_seed_bank,
    save_results,
)

AGENT_DIR = Path(__file__).resolve().parent.parent / "agents" / "baseline_tracker"


@pytest.fixture
def short_config(tmp_path):
    """Config capped at a handful of frames so episodes end quickly."""
    with open(default_config_path(), "r") as f:
        raw = yaml.safe_load(f)
    raw["env"]["max_frames"] = 30

    path = tmp_path / "game_config.yaml"
    with open(path, "w") as f:
        yaml.safe_dump(raw, f)
    return str(path)


def _observation(egg_x=None):
    mask = np.zeros(32, dtype=bool)
    xs = np.zeros(32, dtype=np.float32)
    if egg_x is not None:
        mask[0] = True
        xs[0] = egg_x
    return {
        "board_width": np.array(480.0, dtype=np.float32),
        "objects_count": np.array(int(mask.sum()), dtype=np.int32),
        "obj_x": xs,
        "obj_mask": mask,
    }


class TestBaselineAgent:
    """Test the tracking heuristic."""

    def test_centers_without_eggs(self):
        assert CatcherAgent().act(_observation()) == 0.0

    def test_tracks_lowest_egg(self):
        agent = CatcherAgent()
        assert agent.act(_observation(480.0)) == 1.0
        assert agent.act(_observation(0.0)) == -1.0
        assert agent.act(_observation(120.0)) == pytest.approx(-0.5)


class TestHarness:
    """Test seed bank loading and episode evaluation."""

    def test_seed_bank(self):
        seeds = load_seed_bank()
        assert len(seeds) == 10
        assert len(set(seeds)) == len(seeds)

    def test_load_agent_from_directory(self):
        act = load_agent(str(AGENT_DIR))
        assert callable(act)
        assert act(_observation()) == 0.0

    def test_load_agent_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_agent(str(tmp_path / "nowhere"))

    def test_load_plain_act_function(self, tmp_path):
        agent_file = tmp_path / "agent.py"
        agent_file.write_text("def act(obs):\n    return 0.25\n")

        act = load_agent(str(agent_file))
        assert act(_observation()) == 0.25

    def test_load_agent_without_entry_point(self, tmp_path):
        (tmp_path / "agent.py").write_text("VALUE = 1\n")
        with pytest.raises(AttributeError):
            load_agent(str(tmp_path))

    def test_single_seed_hits_frame_cap(self, short_config):
        result = evaluate_single_seed(CatcherAgent().act, seed=7, config_path=short_config)

        assert result.seed == 7
        assert result.frames == 30
        assert result.end_reason == "frame_cap"
        assert result.survived
        assert result.score == 0
        assert result.catch_rate == 0.0

    def test_evaluate_agent_summary(self, short_config, tmp_path):
        summary = evaluate_agent(
            CatcherAgent().act,
            seeds=[1, 2, 3],
            config_path=short_config,
            verbose=False
        )

        assert len(summary.results) == 3
        assert summary.min_score <= summary.mean_score <= summary.max_score
        assert summary.mean_frames == 30
        assert summary.frame_cap_rate == 1.0

        output = tmp_path / "results.json"
        save_results(summary, "baseline_tracker", str(output))
        with open(output, "r") as f:
            data = json.load(f)

        assert data["agent"] == "baseline_tracker"
        assert data["frame_cap_rate"] == 1.0
        assert [r["seed"] for r in data["results"]] == [1, 2, 3]
        assert data["results"][0]["survived"] is True


class TestSummary:
    """Test pooling of per-seed results."""

    def _result(self, seed, catches, misses, frames, end_reason):
        return EvalResult(
            seed=seed,
            score=catches * 10,
            catches=catches,
            misses=misses,
            frames=frames,
            end_reason=end_reason,
            seconds=0.0
        )

    def test_catch_rate_is_pooled(self):
        """Catch rate counts every egg, not the mean of per-seed rates."""
        results = [
            self._result(1, catches=9, misses=1, frames=2000, end_reason="frame_cap"),
            self._result(2, catches=0, misses=3, frames=400, end_reason="out_of_lives"),
        ]
        summary = EvalSummary.from_results(results, total_time=1.0)

        assert summary.catch_rate == pytest.approx(9 / 13)
        assert results[0].catch_rate == pytest.approx(0.9)
        assert results[1].catch_rate == 0.0

    def test_survival_statistics(self):
        results = [
            self._result(1, catches=2, misses=3, frames=600, end_reason="out_of_lives"),
            self._result(2, catches=5, misses=0, frames=1000, end_reason="frame_cap"),
            self._result(3, catches=1, misses=3, frames=200, end_reason="out_of_lives"),
            self._result(4, catches=4, misses=1, frames=1000, end_reason="frame_cap"),
        ]
        summary = EvalSummary.from_results(results, total_time=1.0)

        assert summary.mean_frames == 700
        assert summary.frame_cap_rate == 0.5
        assert summary.min_score == 10
        assert summary.max_score == 50

    def test_no_eggs_resolved(self):
        summary = EvalSummary.from_results(
            [self._result(1, catches=0, misses=0, frames=30, end_reason="frame_cap")],
            total_time=0.0
        )
        assert summary.catch_rate == 0.0

    def test_empty_results_rejected(self):
        with pytest.raises(ValueError):
            EvalSummary.from_results([], total_time=0.0)

    def test_report_mentions_metrics(self):
        summary = EvalSummary.from_results(
            [self._result(1, catches=3, misses=1, frames=120, end_reason="frame_cap")],
            total_time=0.5
        )
        report = "\n".join(summary.report_lines())

        assert "Catch rate:      75.0%" in report
        assert "120 frames" in report
        assert "100% of seeds" in report
