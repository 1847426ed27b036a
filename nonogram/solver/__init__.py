"""
Solver module for nonogram puzzles.

This module provides the backtracking search that produces answers and an
ILP wrapper used only to cross-check them.
"""
