"""Utility functions for doing special math"""
# Modules imported here are simply for easier namespace resolution, e.g.,
# from yieldpy.math import floor_to_int
# instead of
# from yieldpy.math.decimal_math import floor_to_int

# pyright: reportUnusedImport=false

from .decimal_math import (
    HIGH_PRECISION_CONTEXT,
    ONE_64X64,
    decimal_18_to_n,
    decimal_n_to_18,
    floor_to_int,
    from_64x64,
    from_fixed,
    high_precision,
    to_64x64,
)
