"""Gomoku (five-in-a-row) in the terminal, with rule-based and search-based computer opponents."""

__version__ = "1.0.0"
__all__ = ["__version__"]