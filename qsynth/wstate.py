"""
W states: the uniform superposition of all N-qubit basis states with
exactly one 1.

    |W_N⟩ = (|10...0⟩ + |01...0⟩ + ... + |00...1⟩)/√N

Construction is recursive. Qubit 0 takes amplitude √(1/N) on |1⟩; in its
|0⟩ branch the remaining N-1 qubits must form |W_{N-1}⟩, which is the same
routine run under the extra control "qubit 0 is 0". Because the recursion
goes through the controlled form, the routine is written against
dispatch.controlled_by and composes with any outer controls.
"""

from typing import List

from .angles import w_angle
from .dispatch import apply, controlled_by, flip, rotate, within
from .errors import PreconditionViolation
from .gates import X_gate


def w_state(qubits: List[str], inverse: bool = False, verbose: bool = False):
    """
    Prepare |W_N⟩ on N >= 1 qubits in |0...0⟩.

    Args:
        qubits: Register [MSB, ..., LSB]
        inverse: If True, map |W_N⟩ back to |0...0⟩ (reverse order, negated angles)
        verbose: If True, print the angle used at each level

    Raises:
        PreconditionViolation: If qubits is empty
    """
    n = len(qubits)
    if n < 1:
        raise PreconditionViolation("W state needs at least one qubit")

    head, rest = qubits[0], qubits[1:]

    if n == 1:
        apply(X_gate, head)
        return

    theta = w_angle(n)
    if verbose:
        print(f"W_{n}: rotate {head} by θ = {theta:.6f}")

    if not inverse:
        rotate(theta, head)

    with within(lambda: flip([head]), lambda: flip([head])):
        with controlled_by([head]):
            w_state(rest, inverse=inverse, verbose=verbose)

    if inverse:
        rotate(-theta, head)
