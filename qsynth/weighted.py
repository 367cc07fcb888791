"""
Superpositions with unequal amplitudes.

The first qubit is rotated to carry the total weight of its |1⟩ branch;
the second qubit is then rotated separately in each branch of the first,
addressing the |0⟩ branch by flipping the first qubit around a controlled
rotation. Every branch angle comes from angles.split_angle, so the product
of branch probabilities is the exact target distribution.
"""

from typing import List

from .angles import split_angle
from .dispatch import apply, flip, rotate, within
from .errors import PreconditionViolation
from .gates import H_gate


def unequal_superposition(qubit: str, alpha: float, inverse: bool = False):
    """
    cos(α)|0⟩ + sin(α)|1⟩ for any real α.

    Args:
        qubit: Qubit in |0⟩
        alpha: Angle in radians
        inverse: If True, rotate back by -α
    """
    rotate(-alpha if inverse else alpha, qubit)


def _require_pair(qubits: List[str]):
    if len(qubits) != 2:
        raise PreconditionViolation(f"Need 2 qubits, got {len(qubits)}")


def three_states_two_qubits(qubits: List[str], inverse: bool = False):
    """
    (|00⟩ + |01⟩ + |10⟩)/√3.

    Qubit 0 gets weight 1/3 on |1⟩ (the |10⟩ term). Its |0⟩ branch holds the
    other two terms with equal weight, so qubit 1 gets a Hadamard there.
    """
    _require_pair(qubits)
    q0, q1 = qubits
    theta = split_angle(2, 1)

    if inverse:
        with within(lambda: flip([q0]), lambda: flip([q0])):
            apply(H_gate, q1, [q0])
        rotate(-theta, q0)
        return

    rotate(theta, q0)
    with within(lambda: flip([q0]), lambda: flip([q0])):
        apply(H_gate, q1, [q0])


def hardy_state(qubits: List[str], inverse: bool = False):
    """
    (3|00⟩ + |01⟩ + |10⟩ + |11⟩)/√12.

    Squared amplitudes are 9:1:1:1. Qubit 0 splits 10:2, then qubit 1 splits
    9:1 when qubit 0 is 0 and 1:1 when qubit 0 is 1.
    """
    _require_pair(qubits)
    q0, q1 = qubits
    theta0 = split_angle(10, 2)
    theta_zero = split_angle(9, 1)
    theta_one = split_angle(1, 1)

    if inverse:
        rotate(-theta_one, q1, [q0])
        with within(lambda: flip([q0]), lambda: flip([q0])):
            rotate(-theta_zero, q1, [q0])
        rotate(-theta0, q0)
        return

    rotate(theta0, q0)
    with within(lambda: flip([q0]), lambda: flip([q0])):
        rotate(theta_zero, q1, [q0])
    rotate(theta_one, q1, [q0])
