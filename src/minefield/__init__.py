"""
minefield - a Minesweeper rule engine with a gymnasium environment,
baseline agents and an evaluator.
"""
__version__ = "0.1.0"
