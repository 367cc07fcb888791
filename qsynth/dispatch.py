"""
Controlled gate emission.

Every gate the synthesis routines emit goes through apply(). Besides the
controls named at the call site, apply() adds the extra controls opened by
controlled_by(), which is how any routine gets its controlled variant:

    with controlled_by(["c"]):
        w_state(qubits)        # W state on qubits iff c is |1⟩

Conditions on a value other than all-ones are built by conjugating the
controls with bit flips (apply_on_bits, apply_on_int). The conjugation runs
inside within(), which emits its encode/decode gates without the extra
controls: if the middle part is controlled, the whole block is.
"""

from contextlib import contextmanager
from typing import Callable, Iterator, List, Sequence

import numpy as np

from .core import applyControlled
from .errors import PreconditionViolation
from .gates import Ry_gate, X_gate
from .utils import BitsLike, int_to_bits, parse_bits

# Extra controls of the enclosing controlled_by() blocks, outermost first
_extra_controls: List[str] = []


def active_controls() -> List[str]:
    """Return a copy of the extra controls currently in effect."""
    return _extra_controls.copy()


@contextmanager
def controlled_by(controls: Sequence[str]) -> Iterator[None]:
    """Add `controls` to every gate emitted inside the with-block."""
    n = len(controls)
    _extra_controls.extend(controls)
    try:
        yield
    finally:
        if n:
            del _extra_controls[-n:]


def _bare(action: Callable[[], None]):
    """Run `action` with the extra controls suspended."""
    saved = _extra_controls.copy()
    _extra_controls.clear()
    try:
        action()
    finally:
        _extra_controls[:] = saved


@contextmanager
def within(encode: Callable[[], None], decode: Callable[[], None]) -> Iterator[None]:
    """
    Run encode, the with-block, then decode, even if the block raises.

    encode and decode are emitted uncontrolled; see the module docstring.
    """
    _bare(encode)
    try:
        yield
    finally:
        _bare(decode)


# =============================================================================
# Emission
# =============================================================================

def apply(gate: np.ndarray, target: str, controls: Sequence[str] = ()):
    """
    Apply a single-qubit gate to target iff every control is |1⟩.

    Args:
        gate: 2x2 unitary
        target: Target qubit name
        controls: Control qubit names, in addition to the active extra controls
    """
    applyControlled(gate, _extra_controls + list(controls), target)


def rotate(theta: float, target: str, controls: Sequence[str] = ()):
    """Rotate target to cos(θ)|0⟩ + sin(θ)|1⟩ (from |0⟩); emits Ry(2θ)."""
    apply(Ry_gate(2 * theta), target, controls)


def flip(qubits: Sequence[str]):
    """Bit-flip each qubit."""
    for q in qubits:
        apply(X_gate, q)


def apply_on_bits(pattern: BitsLike, gate: np.ndarray, controls: Sequence[str], target: str):
    """
    Apply a gate to target iff the controls equal `pattern` bit for bit.

    Controls whose pattern bit is 0 are flipped, the all-ones controlled gate
    is applied, and the flips are undone, leaving the controls untouched.

    Raises:
        PreconditionViolation: If the pattern and controls differ in length
    """
    bits = parse_bits(pattern)
    if len(bits) != len(controls):
        raise PreconditionViolation(
            f"Pattern of length {len(bits)} does not match {len(controls)} control(s)"
        )
    zeros = [c for c, b in zip(controls, bits) if not b]
    with within(lambda: flip(zeros), lambda: flip(zeros)):
        apply(gate, target, controls)


def apply_on_int(k: int, gate: np.ndarray, controls: Sequence[str], target: str):
    """
    Apply a gate to target iff the controls, read as a big-endian integer, equal k.

    Raises:
        PreconditionViolation: If k is outside [0, 2^len(controls))
    """
    m = len(controls)
    if not (0 <= k < 2 ** m):
        raise PreconditionViolation(f"Control value must be in [0, {2 ** m - 1}], got {k}")
    apply_on_bits(int_to_bits(k, m), gate, controls, target)
