"""Fin Calc - Personal finance projections and runtime-defined formulas."""

__version__ = "0.1.0"
