"""
Evaluation Harness
==================

Plays a catcher agent through every seed in the seed bank and reports how
well it catches and how long it survives.

An episode ends either on game over (all lives lost) or at the env's frame
cap. Survival is measured in frames; the frame-cap rate is the share of
seeds on which the agent never lost its last life.

Usage:
    python -m egg_catcher.evaluation.run_eval --agent agents/baseline_tracker
"""

from __future__ import annotations

import argparse
import importlib.util
import json
import os
import sys
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
import numpy as np

from egg_catcher.catcher_core.env_gym import CatcherEnv

FRAME_CAP = "frame_cap"

AgentFn = Callable[[Dict[str, np.ndarray]], Any]


@dataclass
class EvalResult:
    """Outcome of one seeded episode."""
    seed: int
    score: int
    catches: int
    misses: int
    frames: int
    end_reason: str
    seconds: float

    @property
    def catch_rate(self) -> float:
        """Share of resolved eggs that were caught (0 if none resolved)."""
        resolved = self.catches + self.misses
        return self.catches / resolved if resolved else 0.0

    @property
    def survived(self) -> bool:
        """True if the episode ran into the frame cap instead of game over."""
        return self.end_reason == FRAME_CAP


@dataclass
class EvalSummary:
    """Aggregate over all evaluated seeds."""
    mean_score: float
    std_score: float
    min_score: int
    max_score: int
    catch_rate: float
    mean_frames: float
    frame_cap_rate: float
    total_time: float
    results: List[EvalResult] = field(default_factory=list)

    @classmethod
    def from_results(cls, results: List[EvalResult], total_time: float) -> "EvalSummary":
        """
        Pool per-seed results.

        The catch rate is pooled over all eggs rather than averaged per seed.
        """
        if not results:
            raise ValueError("Cannot summarize an empty evaluation")

        scores = np.array([r.score for r in results], dtype=np.float64)
        catches = sum(r.catches for r in results)
        resolved = catches + sum(r.misses for r in results)

        return cls(
            mean_score=float(scores.mean()),
            std_score=float(scores.std()),
            min_score=int(scores.min()),
            max_score=int(scores.max()),
            catch_rate=catches / resolved if resolved else 0.0,
            mean_frames=float(np.mean([r.frames for r in results])),
            frame_cap_rate=sum(r.survived for r in results) / len(results),
            total_time=total_time,
            results=list(results),
        )

    def report_lines(self) -> List[str]:
        return [
            "=" * 50,
            "EVALUATION SUMMARY",
            "=" * 50,
            f"Seeds evaluated: {len(self.results)}",
            f"Score:           {self.mean_score:.1f} +/- {self.std_score:.1f} "
            f"(min {self.min_score}, max {self.max_score})",
            f"Catch rate:      {self.catch_rate:.1%}",
            f"Mean survival:   {self.mean_frames:.0f} frames",
            f"Hit frame cap:   {self.frame_cap_rate:.0%} of seeds",
            f"Total time:      {self.total_time:.2f}s",
            "=" * 50,
        ]

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["results"] = [
            dict(asdict(r), catch_rate=r.catch_rate, survived=r.survived)
            for r in self.results
        ]
        return data


def load_seed_bank(path: Optional[str] = None) -> List[int]:
    """Read the list of evaluation seeds (bundled seed_bank.json by default)."""
    if path is None:
        path = os.path.join(os.path.dirname(__file__), "seed_bank.json")

    with open(path, "r") as f:
        return [int(seed) for seed in json.load(f)["seeds"]]


def load_agent(agent_path: str) -> AgentFn:
    """
    Import an agent from a directory holding agent.py, or from the file itself.

    The module may expose a `create_agent()` factory, a `CatcherAgent`
    class, or a plain `act(obs)` function, checked in that order.

    Raises:
        FileNotFoundError: If there is no agent file.
        ImportError: If the file cannot be imported.
        AttributeError: If the module exposes none of the entry points.
    """
    path = Path(agent_path)
    agent_file = path / "agent.py" if path.is_dir() else path
    if not agent_file.exists():
        raise FileNotFoundError(f"Agent file not found: {agent_file}")

    module_name = f"egg_catcher_agent_{agent_file.parent.name}"
    spec = importlib.util.spec_from_file_location(module_name, agent_file)
    if spec is None or spec.loader is None:
        raise ImportError(f"Failed to load agent module from {agent_file}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)

    if hasattr(module, "create_agent"):
        return module.create_agent().act
    if hasattr(module, "CatcherAgent"):
        return module.CatcherAgent().act
    if hasattr(module, "act"):
        return module.act

    raise AttributeError(
        f"{agent_file} must define create_agent(), a CatcherAgent class or act(obs)"
    )


def run_episode(
    env: CatcherEnv,
    agent_fn: AgentFn,
    seed: int,
    verbose: bool = False
) -> EvalResult:
    """Play one episode on an existing env and collect its result."""
    # Agents loaded from a class get a fresh episode
    reset = getattr(getattr(agent_fn, "__self__", None), "reset", None)
    if callable(reset):
        reset(seed)

    obs, info = env.reset(seed=seed)
    started = time.perf_counter()

    terminated = truncated = False
    while not (terminated or truncated):
        obs, _, terminated, truncated, info = env.step(agent_fn(obs))

    result = EvalResult(
        seed=seed,
        score=int(info["score"]),
        catches=int(info["catches"]),
        misses=int(info["misses"]),
        frames=int(info["frames"]),
        end_reason=info["terminated_reason"] or FRAME_CAP,
        seconds=time.perf_counter() - started,
    )

    if verbose:
        print(f"  Seed {seed}: score={result.score}, "
              f"caught {result.catches}/{result.catches + result.misses}, "
              f"frames={result.frames} ({result.end_reason})")

    return result


def evaluate_single_seed(
    agent_fn: AgentFn,
    seed: int,
    config_path: Optional[str] = None,
    verbose: bool = False
) -> EvalResult:
    """Evaluate one seed on a dedicated env."""
    env = CatcherEnv(config_path=config_path)
    try:
        return run_episode(env, agent_fn, seed, verbose=verbose)
    finally:
        env.close()


def evaluate_agent(
    agent_fn: AgentFn,
    seeds: Optional[List[int]] = None,
    config_path: Optional[str] = None,
    verbose: bool = True
) -> EvalSummary:
    """
    Evaluate an agent over a list of seeds, reusing one env.

    Args:
        agent_fn: Agent's act function (obs) -> action.
        seeds: Seeds to play. Uses the bundled seed bank if None.
        config_path: Optional game config override.
        verbose: If True, print per-seed lines and the summary.

    Returns:
        EvalSummary pooled over all seeds.
    """
    if seeds is None:
        seeds = load_seed_bank()

    if verbose:
        print(f"Evaluating on {len(seeds)} seeds...")

    env = CatcherEnv(config_path=config_path)
    started = time.perf_counter()
    try:
        results = [run_episode(env, agent_fn, seed, verbose=verbose) for seed in seeds]
    finally:
        env.close()

    summary = EvalSummary.from_results(results, time.perf_counter() - started)

    if verbose:
        print()
        print("\n".join(summary.report_lines()))

    return summary


def save_results(summary: EvalSummary, agent_name: str, output_path: str) -> None:
    """Write the summary and per-seed results as JSON."""
    data = {
        "agent": agent_name,
        "timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
        **summary.to_dict(),
    }

    with open(output_path, "w") as f:
        json.dump(data, f, indent=2)

    print(f"Results saved to {output_path}")


def main():
    parser = argparse.ArgumentParser(description="Evaluate an egg catcher agent")
    parser.add_argument("--agent", required=True, help="Agent directory or agent.py file")
    parser.add_argument("--seeds", default=None, help="Seed bank JSON (bundled one by default)")
    parser.add_argument("--config", default=None, help="Game config YAML (bundled one by default)")
    parser.add_argument("--output", default=None, help="Write results JSON here")
    parser.add_argument("--quiet", action="store_true", help="Only print the summary")

    args = parser.parse_args()

    try:
        agent_fn = load_agent(args.agent)
        seeds = load_seed_bank(args.seeds) if args.seeds else None
        summary = evaluate_agent(
            agent_fn,
            seeds=seeds,
            config_path=args.config,
            verbose=not args.quiet
        )
    except (FileNotFoundError, ImportError, AttributeError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    if args.quiet:
        print("\n".join(summary.report_lines()))

    if args.output:
        agent = Path(args.agent)
        save_results(summary, agent.stem if agent.is_file() else agent.name, args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
