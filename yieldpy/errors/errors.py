"""Define Python user-defined exceptions"""


class DomainError(ValueError):
    """If the inputs fall outside the region where the YieldSpace invariant is defined.

    This covers a negative time to maturity, a curve exponent outside of (0, 1],
    a division by an empty reserve or LP supply, and curve evaluations that do not
    produce a finite number.
    """


class ConvergenceError(RuntimeError):
    """If the bisection search exceeds its iteration cap without landing in the target band."""
