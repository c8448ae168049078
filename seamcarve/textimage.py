"""The plain-text RGB image format and conversions to and from PNG.

A text image starts with a ``width height`` line followed by one
``r g b`` line per pixel in row-major order.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from os import PathLike
from pathlib import Path

import numpy as np
from PIL import Image
from PIL.PngImagePlugin import PngInfo

StrPath = str | PathLike[str]


def read_text_image(path: StrPath) -> np.ndarray:
    """Read a text image into a ``(height, width, 3)`` uint8 array.

    Missing trailing pixels are left black; channel values wrap to 8 bits.
    """
    tokens = Path(path).read_text().split()
    if len(tokens) < 2:
        raise ValueError(f"{path}: missing 'width height' header")
    try:
        width, height = int(tokens[0]), int(tokens[1])
        values = [int(token) for token in tokens[2:]]
    except ValueError as exc:
        raise ValueError(f"{path}: malformed text image: {exc}") from None
    if width < 0 or height < 0:
        raise ValueError(f"{path}: negative image size {width}x{height}")
    if len(values) % 3:
        raise ValueError(f"{path}: incomplete pixel at end of file")
    capacity = width * height * 3
    if len(values) > capacity:
        raise ValueError(
            f"{path}: {len(values) // 3} pixels given for a {width}x{height} image"
        )
    flat = np.zeros(capacity, dtype=np.uint8)
    flat[: len(values)] = (np.asarray(values, dtype=np.int64) % 256).astype(np.uint8)
    return flat.reshape(height, width, 3)


def write_text_image(path: StrPath, image: np.ndarray) -> None:
    """Write a ``(height, width, 3)`` array as a text image."""
    pixels = np.asarray(image)
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"expected an (height, width, 3) image, got shape {pixels.shape}")
    height, width = pixels.shape[:2]
    lines = [f"{width} {height}"]
    lines.extend(f"{r} {g} {b}" for r, g, b in pixels.reshape(-1, 3).astype(int).tolist())
    Path(path).write_text("\n".join(lines) + "\n")


def png_to_text(png_path: StrPath, text_path: StrPath) -> tuple[int, int]:
    """Convert a PNG to a text image; return its ``(width, height)``."""
    with Image.open(png_path) as picture:
        rgb = np.asarray(picture.convert("RGB"), dtype=np.uint8)
    write_text_image(text_path, rgb)
    height, width = rgb.shape[:2]
    return width, height


def text_to_png(text_path: StrPath, png_path: StrPath) -> tuple[int, int]:
    """Convert a text image to an 8-bit RGB PNG; return its ``(width, height)``."""
    pixels = read_text_image(text_path)
    height, width = pixels.shape[:2]
    info = PngInfo()
    info.add_text("Title", Path(png_path).name)
    Image.fromarray(pixels, mode="RGB").save(png_path, format="PNG", pnginfo=info)
    return width, height


def png_to_text_main(argv: Sequence[str] | None = None) -> int:
    """Convert ``[png [text]]`` (default ``image.png`` to ``image_rgb.txt``)."""
    args = list(sys.argv[1:] if argv is None else argv)
    source = args[0] if args else "image.png"
    target = args[1] if len(args) > 1 else "image_rgb.txt"
    try:
        width, height = png_to_text(source, target)
    except OSError as exc:
        print(f"Unable to convert {source}: {exc}")
        return 1
    print(f"width:{width}")
    print(f"height:{height}")
    return 0


def text_to_png_main(argv: Sequence[str] | None = None) -> int:
    """Convert ``[text [png]]`` (default ``outputImg.txt`` to ``output.png``)."""
    args = list(sys.argv[1:] if argv is None else argv)
    source = args[0] if args else "outputImg.txt"
    target = args[1] if len(args) > 1 else "output.png"
    if not Path(source).is_file():
        print(f"Unable to open file: {source}.")
        return 1
    try:
        width, height = text_to_png(source, target)
    except (OSError, ValueError) as exc:
        print(f"Error writing PNG image: {exc}")
        return 1
    print(f"Width: {width} Height: {height}")
    return 0