"""Semantic card retrieval for problem-based-learning case simulations."""

__version__ = "0.1.0"
