"""
Expense Tracker - Source Package

A single-user expense tracker: set a monthly budget, log categorized
expenses under a spending mode, and review where the money went.

DESIGN PRINCIPLES:
1. One aggregate root (BudgetData), replaced whole on every change
2. Derived numbers are recomputed on every read, never stored
3. Bad input is dropped, not corrected
4. Storage failures never end the session
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
