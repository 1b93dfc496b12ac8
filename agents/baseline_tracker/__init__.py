"""
Baseline Tracker Agent Package

A simple heuristic agent that keeps the catcher under the lowest egg.
Serves as a benchmark and example.
"""

from .agent import CatcherAgent, create_agent

__all__ = ["CatcherAgent", "create_agent"]
