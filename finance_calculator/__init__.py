"""
Finance Calculator - Source Package

The calculator subsystem of a personal budgeting application: a basic
calculator with memory and history, plus expense-split, savings and
EMI calculators.

DESIGN PRINCIPLES:
1. Every transition is a pure function of (state, command)
2. Keyboard and buttons speak the same command language
3. Bad numbers become an error state, never an exception
4. Financial formulas never interrupt typing
5. Presentation layer does no arithmetic
"""

__version__ = "1.0.0"
__author__ = "Personal Budget Team"
