"""
Spend Tracker - Source Package

Personal subscription and purchase tracking with a deterministic engine
that breaks spend down by category for a year or a month.

DESIGN PRINCIPLES:
1. Records are immutable snapshots while they are aggregated
2. Every selector is an explicit argument, never hidden state
3. One cadence evaluation feeds both totals and drill-down
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Spend Tracker Team"
