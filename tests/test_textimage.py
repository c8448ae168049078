import numpy as np
import pytest
from PIL import Image

from seamcarve.textimage import (
    png_to_text,
    png_to_text_main,
    read_text_image,
    text_to_png,
    text_to_png_main,
    write_text_image,
)


@pytest.fixture
def sample():
    rng = np.random.default_rng(7)
    return rng.integers(0, 256, size=(4, 5, 3), dtype=np.uint8)


def test_text_round_trip(tmp_path, sample):
    path = tmp_path / "img.txt"
    write_text_image(path, sample)
    assert np.array_equal(read_text_image(path), sample)


def test_header_is_width_then_height(tmp_path, sample):
    path = tmp_path / "img.txt"
    write_text_image(path, sample)
    lines = path.read_text().splitlines()
    assert lines[0] == "5 4"
    assert len(lines) == 1 + 4 * 5


def test_short_file_is_padded_black(tmp_path):
    path = tmp_path / "short.txt"
    path.write_text("2 1\n10 20 30\n")
    image = read_text_image(path)
    assert image.shape == (1, 2, 3)
    assert image[0, 0].tolist() == [10, 20, 30]
    assert image[0, 1].tolist() == [0, 0, 0]


def test_values_wrap_to_eight_bits(tmp_path):
    path = tmp_path / "wrap.txt"
    path.write_text("1 1\n256 257 -1\n")
    assert read_text_image(path)[0, 0].tolist() == [0, 1, 255]


def test_missing_header_raises(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("")
    with pytest.raises(ValueError):
        read_text_image(path)


def test_too_many_pixels_raises(tmp_path):
    path = tmp_path / "long.txt"
    path.write_text("1 1\n1 2 3\n4 5 6\n")
    with pytest.raises(ValueError):
        read_text_image(path)


def test_incomplete_pixel_raises(tmp_path):
    path = tmp_path / "partial.txt"
    path.write_text("2 1\n1 2 3\n4 5\n")
    with pytest.raises(ValueError):
        read_text_image(path)


def test_write_rejects_wrong_shape(tmp_path):
    with pytest.raises(ValueError):
        write_text_image(tmp_path / "bad.txt", np.zeros((2, 2), dtype=np.uint8))


def test_png_round_trip(tmp_path, sample):
    text_path = tmp_path / "in.txt"
    png_path = tmp_path / "output.png"
    back_path = tmp_path / "back.txt"
    write_text_image(text_path, sample)
    assert text_to_png(text_path, png_path) == (5, 4)
    assert png_to_text(png_path, back_path) == (5, 4)
    assert np.array_equal(read_text_image(back_path), sample)


def test_png_has_title(tmp_path, sample):
    text_path = tmp_path / "in.txt"
    png_path = tmp_path / "output.png"
    write_text_image(text_path, sample)
    text_to_png(text_path, png_path)
    with Image.open(png_path) as picture:
        assert picture.mode == "RGB"
        assert picture.text["Title"] == "output.png"


def test_png_to_text_main(tmp_path, sample, capsys):
    png_path = tmp_path / "image.png"
    text_path = tmp_path / "image_rgb.txt"
    Image.fromarray(sample, mode="RGB").save(png_path)
    assert png_to_text_main([str(png_path), str(text_path)]) == 0
    out = capsys.readouterr().out
    assert "width:5" in out and "height:4" in out
    assert np.array_equal(read_text_image(text_path), sample)


def test_text_to_png_main(tmp_path, sample, capsys):
    text_path = tmp_path / "outputImg.txt"
    png_path = tmp_path / "output.png"
    write_text_image(text_path, sample)
    assert text_to_png_main([str(text_path), str(png_path)]) == 0
    assert "Width: 5 Height: 4" in capsys.readouterr().out
    with Image.open(png_path) as picture:
        assert np.array_equal(np.asarray(picture), sample)


def test_text_to_png_main_missing_file(tmp_path, capsys):
    missing = tmp_path / "nope.txt"
    assert text_to_png_main([str(missing), str(tmp_path / "o.png")]) == 1
    assert "Unable to open file" in capsys.readouterr().out


def test_png_to_text_main_missing_file(tmp_path):
    assert png_to_text_main([str(tmp_path / "nope.png"), str(tmp_path / "o.txt")]) == 1