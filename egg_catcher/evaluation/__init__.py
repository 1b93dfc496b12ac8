"""
Evaluation Package
==================

Contains the seed bank and evaluation harness for scoring catcher agents.
"""

from egg_catcher.evaluation.run_eval import evaluate_agent, load_seed_bank

__all__ = ["evaluate_agent", "load_seed_bank"]
