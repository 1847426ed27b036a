"""
Nonogram (picture-logic puzzle) solver.

Given run-length definitions for every row and column of an R x C grid,
find a Filled/Empty assignment of every cell that satisfies all of them.
"""

__version__ = "0.1.0"
