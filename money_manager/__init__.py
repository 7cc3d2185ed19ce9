"""
Money Manager - Source Package

A single-user personal finance tracker: income, expense and transfer
transactions organized under user-defined categories, with running
totals, persisted to local storage.

DESIGN PRINCIPLES:
1. One mutation at a time: compute, commit, persist
2. Derived numbers are always recomputed, never stored
3. Invalid input is rejected, never silently fixed
4. Bad stored data never crashes the app
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Money Manager Team"
