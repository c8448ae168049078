"""Sequential seam carving: remove vertical seams one at a time.

Each iteration computes a gradient energy map, accumulates it row by row,
traces the cheapest seam from the bottom row upwards and removes it.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass
from time import perf_counter

import numpy as np

from seamcarve.options import option_int, option_string, usage
from seamcarve.textimage import read_text_image, write_text_image

BORDER_ENERGY = 10000
"""Energy given to border pixels by the integer energy map."""

NORMALISED_BORDER_ENERGY = 1.0
"""Energy given to border pixels by the normalised energy map."""

MAX_DELTA = 1530
"""Largest possible gradient sum (six channel differences of 255)."""

SEAM_BARRIER = 100000
"""Cost assumed for a step that would leave the interior while tracing a seam."""

DEFAULT_OUTPUT = "outputImg.txt"


@dataclass
class StageTimes:
    """Seconds spent in each stage of seam removal, summed over all seams."""

    energy: float = 0.0
    accumulation: float = 0.0
    seam_finding: float = 0.0
    seam_removal: float = 0.0

    def __str__(self) -> str:
        return "\n".join(
            [
                f"Total energy calculation Time: {self.energy:.6f}.",
                f"Total ACM generation Time: {self.accumulation:.6f}.",
                f"Total seam finding Time: {self.seam_finding:.6f}.",
                f"Total seam removal Time: {self.seam_removal:.6f}.",
            ]
        )


def _check_image(pixels: np.ndarray) -> None:
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"expected an (height, width, 3) image, got shape {pixels.shape}")


def calculate_energy(image: np.ndarray, normalised: bool = False) -> np.ndarray:
    """Return the gradient energy of every pixel.

    Interior pixels get the sum over channels of the absolute horizontal and
    vertical neighbour differences; border pixels get a fixed high energy.
    With ``normalised`` the interior is divided by 1530 and borders get 1.0.
    """
    pixels = np.asarray(image)
    _check_image(pixels)
    rows, cols = pixels.shape[:2]
    if normalised:
        energy = np.full((rows, cols), NORMALISED_BORDER_ENERGY, dtype=np.float64)
    else:
        energy = np.full((rows, cols), BORDER_ENERGY, dtype=np.int64)
    if rows >= 3 and cols >= 3:
        data = pixels.astype(np.int64)
        dx = np.abs(data[1:-1, 2:] - data[1:-1, :-2]).sum(axis=2)
        dy = np.abs(data[:-2, 1:-1] - data[2:, 1:-1]).sum(axis=2)
        delta = dx + dy
        energy[1:-1, 1:-1] = delta / MAX_DELTA if normalised else delta
    return energy


def accumulate_energy(energy: np.ndarray) -> np.ndarray:
    """Return the accumulated cost map of an energy map.

    From the third row on, every pixel but the first in its row adds the
    cheapest of its upper neighbours.  Column 1 looks only up and up-right,
    column ``cols - 2`` only up and up-left.  The input is left unchanged.
    """
    acc = np.array(energy, copy=True)
    if acc.ndim != 2:
        raise ValueError(f"expected a 2-D energy map, got shape {acc.shape}")
    rows, cols = acc.shape
    if cols < 2:
        return acc
    columns = np.arange(1, cols)
    first = columns == 1
    last = (columns == cols - 2) & ~first
    for row in range(2, rows):
        prev = acc[row - 1]
        up = prev[1:]
        left = prev[:-1]
        # The last column's up-right neighbour falls on the first pixel of this row.
        right = np.append(prev[2:], acc[row, 0])
        sideways = np.where(first, right, np.where(last, left, np.minimum(left, right)))
        acc[row, 1:] += np.minimum(up, sideways)
    return acc


def find_seam(energy: np.ndarray) -> np.ndarray:
    """Trace the cheapest vertical seam through an accumulated cost map.

    Starts at the first cheapest interior column of the bottom row and climbs,
    preferring up-right, then up-left, then straight up on ties.  Returns the
    seam column for every row.
    """
    acc = np.asarray(energy)
    if acc.ndim != 2:
        raise ValueError(f"expected a 2-D energy map, got shape {acc.shape}")
    rows, cols = acc.shape
    if rows < 1 or cols < 3:
        raise ValueError(f"cannot find a seam in a {cols}x{rows} energy map")
    cur = 1 + int(np.argmin(acc[rows - 1, 1 : cols - 1]))
    seam = np.empty(rows, dtype=np.intp)
    for row in range(rows - 1, 0, -1):
        seam[row] = cur
        above = acc[row - 1]
        upleft = above[cur - 1] if cur > 1 else SEAM_BARRIER
        upright = above[cur + 1] if cur < cols - 2 else SEAM_BARRIER
        best = min(upleft, above[cur], upright)
        if best == upright:
            cur = min(cur + 1, cols - 1)
        elif best == upleft:
            cur = max(cur - 1, 0)
    seam[0] = cur
    return seam


def remove_seam(image: np.ndarray, seam: Sequence[int] | np.ndarray) -> np.ndarray:
    """Return a copy of ``image`` one column narrower, without the seam pixels."""
    pixels = np.asarray(image)
    if pixels.ndim < 2:
        raise ValueError(f"expected an image, got shape {pixels.shape}")
    rows, cols = pixels.shape[:2]
    columns = np.asarray(seam, dtype=np.intp)
    if columns.shape != (rows,):
        raise ValueError(f"seam has {columns.size} entries for {rows} rows")
    if ((columns < 0) | (columns >= cols)).any():
        raise ValueError(f"seam leaves the image width {cols}")
    keep = np.ones((rows, cols), dtype=bool)
    keep[np.arange(rows), columns] = False
    return pixels[keep].reshape(rows, cols - 1, *pixels.shape[2:])


def reduce_image(
    image: np.ndarray, seam_count: int, normalised: bool = False
) -> tuple[np.ndarray, StageTimes]:
    """Remove ``seam_count`` vertical seams; return the image and stage timings."""
    if seam_count < 0:
        raise ValueError(f"seam count must not be negative, got {seam_count}")
    current = np.array(image, copy=True)
    _check_image(current)
    times = StageTimes()
    for _ in range(seam_count):
        start = perf_counter()
        energy = calculate_energy(current, normalised)
        mark = perf_counter()
        times.energy += mark - start

        start = mark
        acc = accumulate_energy(energy)
        mark = perf_counter()
        times.accumulation += mark - start

        start = mark
        seam = find_seam(acc)
        mark = perf_counter()
        times.seam_finding += mark - start

        start = mark
        current = remove_seam(current, seam)
        times.seam_removal += perf_counter() - start
    return current, times


def main(argv: Sequence[str] | None = None) -> int:
    """Carve seams from a text image: ``-f file -s seams [-n threads] [-d 1] [-o out]``."""
    args = list(sys.argv[1:] if argv is None else argv)
    init_start = perf_counter()

    input_filename = option_string(args, "-f", None)
    seam_count = option_int(args, "-s", -1)
    num_threads = option_int(args, "-n", 1)
    normalised = option_int(args, "-d", 0) != 0
    output_filename = option_string(args, "-o", DEFAULT_OUTPUT)

    error = False
    if input_filename is None:
        print("Error: You need to specify -f.")
        error = True
    if seam_count == -1:
        print("Error: You need to specify -s.")
        error = True
    if error:
        print(usage("seamcarve"), end="")
        return 1

    print(f"Number of threads: {num_threads}")
    try:
        image = read_text_image(input_filename)
    except OSError:
        print(f"Unable to open file: {input_filename}.")
        return 1
    except ValueError as exc:
        print(f"Error: {exc}")
        return 1

    init_time = perf_counter() - init_start
    print(f"Initialization Time: {init_time:.6f}.")

    compute_start = perf_counter()
    try:
        reduced, times = reduce_image(image, seam_count, normalised)
    except ValueError as exc:
        print(f"Error: {exc}")
        return 1
    print(times)
    compute_time = perf_counter() - compute_start
    print(f"Computation Time: {compute_time:.6f}.")
    print(f"Total time: {compute_time + init_time:.6f}.")

    try:
        write_text_image(output_filename, reduced)
    except OSError:
        print("Error: couldn't output image file")
        return 1
    return 0