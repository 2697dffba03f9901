"""
Expense Tracker - Source Package

A personal expense tracker for recording everyday spending in INR
and reviewing where the money went.

DESIGN PRINCIPLES:
1. Store is the single owner of expense records
2. Analytics are pure and recomputed on every read
3. Invalid input is reported, never silently corrected
4. Storage failures degrade to in-memory operation
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
