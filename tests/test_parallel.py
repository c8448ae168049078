import random

import numpy as np
import pytest

from seamcarve.parallel import draw_seams, main, reduce_image, remove_seams
from seamcarve.parallel_seams import NO_SEAM_ENERGY, SeamCandidate
from seamcarve.textimage import read_text_image, write_text_image

ROWS, COLS = 3, 5


def _image():
    return np.arange(ROWS * COLS * 3).reshape(ROWS, COLS, 3).astype(np.uint8)


def _candidates(**energies):
    result = [SeamCandidate(i) for i in range(COLS)]
    for key, value in energies.items():
        index = int(key[1:])
        result[index] = SeamCandidate(index, value)
    return result


def _is_subsequence(part, whole):
    items = iter(map(tuple, whole))
    return all(tuple(p) in items for p in part)


def _random_image(rows, cols, seed=0):
    return np.random.default_rng(seed).integers(0, 256, size=(rows, cols, 3), dtype=np.uint8)


def test_remove_single_seam_cuts_bottom_row_prefix():
    image = _image()
    seams = np.zeros((COLS, ROWS), dtype=np.intp)
    seams[2] = [2, 3, 0]
    out = remove_seams(image, seams, _candidates(c2=5), 1, 1)
    assert out.shape == (ROWS, COLS - 1, 3)
    np.testing.assert_array_equal(out[0], image[0, [0, 1, 3, 4]])
    np.testing.assert_array_equal(out[1], image[1, [0, 1, 2, 4]])
    np.testing.assert_array_equal(out[2], image[2, [1, 2, 3, 4]])


def test_remove_two_seams():
    image = _image()
    seams = np.zeros((COLS, ROWS), dtype=np.intp)
    seams[1] = [1, 1, 0]
    seams[3] = [3, 3, 0]
    out = remove_seams(image, seams, _candidates(c1=7, c3=3), 2, 2)
    np.testing.assert_array_equal(out[0], image[0, [0, 2, 4]])
    np.testing.assert_array_equal(out[1], image[1, [0, 2, 4]])
    np.testing.assert_array_equal(out[2], image[2, [1, 2, 3]])


def test_remove_prefers_cheapest_seam():
    image = _image()
    seams = np.zeros((COLS, ROWS), dtype=np.intp)
    seams[1] = [1, 1, 0]
    seams[3] = [3, 3, 0]
    out = remove_seams(image, seams, _candidates(c1=7, c3=3), 1, 2)
    np.testing.assert_array_equal(out[0], image[0, [0, 1, 2, 4]])
    np.testing.assert_array_equal(out[1], image[1, [0, 1, 2, 4]])


def test_remove_rejects_bad_batch_and_shape():
    image = _image()
    seams = np.zeros((COLS, ROWS), dtype=np.intp)
    with pytest.raises(ValueError):
        remove_seams(image, seams, _candidates(), COLS + 1, 0)
    with pytest.raises(ValueError):
        remove_seams(image, np.zeros((ROWS, COLS), dtype=np.intp), _candidates(), 1, 0)


def test_draw_seams_paints_only_found_seams():
    image = _image()
    original = image.copy()
    seams = np.zeros((COLS, ROWS), dtype=np.intp)
    seams[2] = [2, 3, 4]
    seams[4] = [4, 4, 4]
    candidates = _candidates(c2=1)
    assert candidates[4].energy == NO_SEAM_ENERGY
    out = draw_seams(image, seams, candidates)
    np.testing.assert_array_equal(image, original)
    for row, col in enumerate([2, 3, 4]):
        assert tuple(out[row, col]) == (255, 0, 0)
    mask = np.ones((ROWS, COLS), dtype=bool)
    mask[[0, 1, 2], [2, 3, 4]] = False
    np.testing.assert_array_equal(out[mask], original[mask])


def test_reduce_image_width_and_row_order():
    image = _random_image(12, 30)
    out, _ = reduce_image(image, 6, num_blocks=2, batch_size=3, rng=random.Random(1))
    assert out.shape == (12, 24, 3)
    for row in range(12):
        assert _is_subsequence(out[row], image[row])


def test_reduce_image_zero_seams_is_identity():
    image = _random_image(5, 7)
    out, times = reduce_image(image, 0)
    np.testing.assert_array_equal(out, image)
    assert times.energy == 0.0


def test_reduce_image_stops_when_seams_run_out():
    image = _random_image(3, 3)
    out, _ = reduce_image(image, 2, rng=random.Random(0))
    np.testing.assert_array_equal(out, image)


def test_reduce_image_rejects_bad_arguments():
    image = _random_image(4, 4)
    with pytest.raises(ValueError):
        reduce_image(image, -2)
    with pytest.raises(ValueError):
        reduce_image(image, 1, batch_size=0)


def test_main_writes_reduced_image(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    source = tmp_path / "in.txt"
    target = tmp_path / "out.txt"
    write_text_image(source, _random_image(10, 20))
    assert main(["-f", str(source), "-s", "4", "-o", str(target)]) == 0
    assert read_text_image(target).shape == (10, 16, 3)


def test_main_requires_options(capsys):
    assert main([]) == 1
    out = capsys.readouterr().out
    assert "Error: You need to specify -f." in out
    assert "Error: You need to specify -s." in out


def test_main_missing_file(tmp_path, capsys):
    missing = tmp_path / "absent.txt"
    assert main(["-f", str(missing), "-s", "1"]) == 1
    assert f"Unable to open file: {missing}." in capsys.readouterr().out