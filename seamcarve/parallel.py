"""Batched seam carving: remove many non-overlapping seams per energy pass.

Each pass computes the energy and direction maps, grows seams block by
block, and removes the cheapest batch of them at once.
"""

from __future__ import annotations

import random
import sys
from collections.abc import Sequence
from time import perf_counter

import numpy as np

from seamcarve.options import option_int, option_string, usage
from seamcarve.parallel_seams import SeamCandidate, calculate_energy, find_seams
from seamcarve.sequential import StageTimes
from seamcarve.textimage import read_text_image, write_text_image

DEFAULT_BATCH_SIZE = 50
"""Number of seams removed per energy pass."""

DEFAULT_OUTPUT = "outputImg.txt"

SEAM_COLOUR = (255, 0, 0)


def _check_image(pixels: np.ndarray) -> None:
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"expected an (height, width, 3) image, got shape {pixels.shape}")


def _check_seams(paths: np.ndarray, rows: int, cols: int) -> None:
    if paths.shape != (cols, rows):
        raise ValueError(f"seams shape {paths.shape} does not match a {cols}x{rows} image")


def _ranked(candidates: Sequence[SeamCandidate]) -> list[SeamCandidate]:
    return sorted(candidates, key=lambda candidate: candidate.energy)


def _seam_rows(paths: np.ndarray, index: int, cols: int) -> np.ndarray:
    columns = paths[index]
    if ((columns < 0) | (columns >= cols)).any():
        raise ValueError(f"seam starting at column {index} leaves the image width {cols}")
    return columns


def remove_seams(
    image: np.ndarray,
    seams: np.ndarray,
    candidates: Sequence[SeamCandidate],
    batch_size: int,
    seams_found: int,
) -> np.ndarray:
    """Return ``image`` with the ``batch_size`` cheapest seams taken out.

    Only the cheapest ``min(seams_found, batch_size)`` candidates are removed.
    Every row is then cut to ``width - batch_size`` pixels, keeping the
    leftmost of those that remain.
    """
    pixels = np.asarray(image)
    _check_image(pixels)
    rows, cols = pixels.shape[:2]
    paths = np.asarray(seams, dtype=np.intp)
    _check_seams(paths, rows, cols)
    if not 0 <= batch_size <= cols:
        raise ValueError(f"batch size {batch_size} does not fit an image {cols} wide")

    removed = np.zeros((rows, cols), dtype=bool)
    every_row = np.arange(rows)
    for candidate in _ranked(candidates)[: max(0, min(seams_found, batch_size))]:
        removed[every_row, _seam_rows(paths, candidate.index, cols)] = True

    new_width = cols - batch_size
    reduced = np.empty((rows, new_width, 3), dtype=pixels.dtype)
    for row, (line, gone) in enumerate(zip(pixels, removed)):
        reduced[row] = line[~gone][:new_width]
    return reduced


def draw_seams(
    image: np.ndarray, seams: np.ndarray, candidates: Sequence[SeamCandidate]
) -> np.ndarray:
    """Return a copy of ``image`` with every found seam painted red."""
    painted = np.array(image, copy=True)
    _check_image(painted)
    rows, cols = painted.shape[:2]
    paths = np.asarray(seams, dtype=np.intp)
    _check_seams(paths, rows, cols)
    every_row = np.arange(rows)
    for candidate in _ranked(candidates):
        if not candidate.found:
            continue
        painted[every_row, _seam_rows(paths, candidate.index, cols)] = SEAM_COLOUR
    return painted


def reduce_image(
    image: np.ndarray,
    seam_count: int,
    num_blocks: int = 1,
    batch_size: int = DEFAULT_BATCH_SIZE,
    rng: random.Random | None = None,
) -> tuple[np.ndarray, StageTimes]:
    """Remove ``seam_count`` vertical seams in batches; return the image and timings.

    When a pass finds fewer seams than its batch needs, carving stops and the
    image as reduced so far is returned, so it is wider than requested.
    """
    if seam_count < 0:
        raise ValueError(f"seam count must not be negative, got {seam_count}")
    if batch_size < 1:
        raise ValueError(f"batch size must be positive, got {batch_size}")
    current = np.array(image, copy=True)
    _check_image(current)
    if rng is None:
        rng = random.Random()
    times = StageTimes()

    for done in range(0, seam_count, batch_size):
        cur_size = min(batch_size, seam_count - done)

        start = perf_counter()
        energy, directions = calculate_energy(current)
        mark = perf_counter()
        times.energy += mark - start

        start = mark
        seams, candidates, found = find_seams(energy, directions, num_blocks, rng)
        mark = perf_counter()
        times.seam_finding += mark - start

        if found < cur_size:
            break

        start = mark
        current = remove_seams(current, seams, candidates, cur_size, found)
        times.seam_removal += perf_counter() - start
    return current, times


def main(argv: Sequence[str] | None = None) -> int:
    """Carve seams in batches: ``-f file -s seams [-n blocks] [-o out]``."""
    args = list(sys.argv[1:] if argv is None else argv)
    init_start = perf_counter()

    input_filename = option_string(args, "-f", None)
    seam_count = option_int(args, "-s", -1)
    num_threads = option_int(args, "-n", 1)
    output_filename = option_string(args, "-o", DEFAULT_OUTPUT)

    error = False
    if input_filename is None:
        print("Error: You need to specify -f.")
        error = True
    if seam_count == -1:
        print("Error: You need to specify -s.")
        error = True
    if error:
        print(usage("seamcarve-parallel"), end="")
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
        reduced, times = reduce_image(image, seam_count, num_threads)
    except ValueError as exc:
        print(f"Error: {exc}")
        return 1
    if reduced.shape[1] > image.shape[1] - seam_count:
        print("Error! Not enough seams found")
    print(f"Total energy calculation Time: {times.energy:.6f}.")
    print(f"Total seam finding Time: {times.seam_finding:.6f}.")
    print(f"Total seam removal Time: {times.seam_removal:.6f}.")
    compute_time = perf_counter() - compute_start
    print(f"Computation Time: {compute_time:.6f}.")
    print(f"Total time: {compute_time + init_time:.6f}.")

    try:
        write_text_image(output_filename, reduced)
    except OSError:
        print("Error: couldn't output image file")
        return 1
    return 0