"""Revision planner - spaced-repetition scheduling with capacity rebalancing"""

__version__ = "0.1.0"
