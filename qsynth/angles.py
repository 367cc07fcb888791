"""
Rotation angles from target weights.

All functions here are pure. An angle θ is the half-angle of the emitted
rotation: Ry(2θ)|0⟩ = cos(θ)|0⟩ + sin(θ)|1⟩. The two-argument arctangent is
used throughout so ratios near 0 and near infinity stay exact.
"""

import numpy as np

from .errors import NumericDomainError


def split_angle(weight0: float, weight1: float) -> float:
    """
    Angle splitting probability between two branches.

    Returns θ with cos²θ : sin²θ = weight0 : weight1, i.e. θ = arctan(√(w1/w0)).

    Args:
        weight0: Unnormalized probability of the |0⟩ branch
        weight1: Unnormalized probability of the |1⟩ branch

    Raises:
        NumericDomainError: If a weight is negative or not finite, or both are zero
    """
    for w in (weight0, weight1):
        if not np.isfinite(w) or w < 0:
            raise NumericDomainError(f"Branch weights must be finite and >= 0, got {w}")
    if weight0 == 0 and weight1 == 0:
        raise NumericDomainError("Cannot split a branch with zero total weight")
    return float(np.arctan2(np.sqrt(weight1), np.sqrt(weight0)))


def w_angle(n: int) -> float:
    """
    Angle putting weight 1/n on |1⟩ and (n-1)/n on |0⟩.

    This is the first-qubit rotation of an n-qubit W state; the remaining
    n - 1 qubits then carry the rest of the uniform weight-1 states.
    """
    if n < 1:
        raise NumericDomainError(f"W state needs at least one qubit, got {n}")
    return split_angle(n - 1, 1)
