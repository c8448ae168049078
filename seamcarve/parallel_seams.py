"""Energy map and block-wise multi-seam search for batched seam carving.

The image is split into vertical blocks. Inside each block, seams are grown
from the top row downwards in random order. Each seam follows the gradient
direction of the pixel it has just claimed. A pixel belongs to at most one
seam and a seam never leaves its block, so blocks do not interact.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

import numpy as np

BORDER_ENERGY = 10000
"""Energy given to border pixels."""

CLAIMED = 2
"""Direction value marking border pixels and pixels already taken by a seam."""

NO_SEAM_ENERGY = 2**31 - 1
"""Energy recorded for a start column whose seam could not be completed."""

PI = 3.14159265

_STRAIGHT = (0, 1, -1)
_LEFT = (-1, 0, 1)
_RIGHT = (1, 0, -1)


@dataclass
class SeamCandidate:
    """A seam's start column and its energy (``NO_SEAM_ENERGY`` if none was found)."""

    index: int
    energy: int = NO_SEAM_ENERGY

    @property
    def found(self) -> bool:
        return self.energy != NO_SEAM_ENERGY


def calculate_energy(image: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Return the ``(energy, directions)`` maps of an RGB image.

    Interior pixels take the horizontal gray-level difference between their
    right and left neighbours. The energy is its absolute value truncated to
    an integer. The direction is -1 for a steep fall, 1 for a steep rise and
    0 otherwise. Border pixels get energy 10000 and direction 2.
    """
    pixels = np.asarray(image)
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"expected an (height, width, 3) image, got shape {pixels.shape}")
    rows, cols = pixels.shape[:2]
    energy = np.full((rows, cols), BORDER_ENERGY, dtype=np.int64)
    directions = np.full((rows, cols), CLAIMED, dtype=np.int8)
    if rows >= 3 and cols >= 3:
        data = pixels.astype(np.float64)
        gray = 0.21 * data[..., 0] + 0.71 * data[..., 1] + 0.08 * data[..., 2]
        dx = gray[1:-1, 2:] - gray[1:-1, :-2]
        angle = np.arctan(dx) * 180 / PI + 270
        directions[1:-1, 1:-1] = np.where(angle < 240, -1, np.where(angle > 300, 1, 0))
        energy[1:-1, 1:-1] = np.trunc(np.abs(dx)).astype(np.int64)
    return energy, directions


def _priorities(direction: int) -> tuple[int, int, int]:
    if direction == 0:
        return _STRAIGHT
    if direction == -1:
        return _LEFT
    return _RIGHT


def _trace_seam(
    energy: np.ndarray,
    directions: np.ndarray,
    seams: np.ndarray,
    seam_col: int,
    start: int,
    end: int,
) -> int | None:
    """Grow one seam from ``seam_col``; return its energy, or None if it gets stuck."""
    rows, cols = energy.shape
    col = seam_col
    direction = int(directions[0, col])
    seams[seam_col, 0] = col
    total = 0
    for row in range(rows - 2):
        total += int(energy[row, col])
        for delta in _priorities(direction):
            nxt = col + delta
            if not (1 <= nxt < cols - 1 and start <= nxt < end):
                continue
            if directions[row + 1, nxt] != CLAIMED:
                direction = int(directions[row + 1, nxt])
                directions[row + 1, nxt] = CLAIMED
                col = nxt
                seams[seam_col, row + 1] = col
                break
        else:
            return None
    return total


def find_seams(
    energy: np.ndarray,
    directions: np.ndarray,
    num_blocks: int = 1,
    rng: random.Random | None = None,
) -> tuple[np.ndarray, list[SeamCandidate], int]:
    """Find non-overlapping seams block by block.

    Returns ``(seams, candidates, seams_found)``. ``seams[c, r]`` is the column
    of the seam starting at column ``c`` in row ``r``; the bottom row is never
    traced and stays 0. ``candidates[c]`` holds that seam's energy. The
    directions map given is left unchanged.
    """
    acc = np.asarray(energy)
    if acc.ndim != 2:
        raise ValueError(f"expected a 2-D energy map, got shape {acc.shape}")
    dirs = np.array(directions, dtype=np.int8, copy=True)
    if dirs.shape != acc.shape:
        raise ValueError(f"directions shape {dirs.shape} does not match energy {acc.shape}")
    if num_blocks < 1:
        raise ValueError(f"number of blocks must be positive, got {num_blocks}")
    rows, cols = acc.shape
    if rows < 1:
        raise ValueError("cannot find seams in an energy map without rows")
    if rng is None:
        rng = random.Random()

    seams = np.zeros((cols, rows), dtype=np.intp)
    candidates = [SeamCandidate(i) for i in range(cols)]
    found = 0
    offset = cols // num_blocks
    for block in range(num_blocks):
        start = offset * block
        end = cols if block == num_blocks - 1 else offset * (block + 1)
        order = list(range(start, end))
        # Every start column but the block's last is visited in random order.
        head = order[:-1]
        rng.shuffle(head)
        order[:-1] = head
        for seam_col in order:
            total = _trace_seam(acc, dirs, seams, seam_col, start, end)
            if total is None:
                candidates[seam_col] = SeamCandidate(seam_col, NO_SEAM_ENERGY)
            else:
                candidates[seam_col] = SeamCandidate(seam_col, total)
                found += 1
    return seams, candidates, found