"""Reading plain-text (P3) PPM images for use as textures."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union


class PPMError(ValueError):
    """The text is not a usable P3 PPM image."""


@dataclass(frozen=True)
class PPMImage:
    """An RGB image: ``pixels`` holds three bytes per pixel, row after row."""

    width: int
    height: int
    max_value: int
    pixels: bytes


def _to_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise PPMError(f"bad {what}: {token!r}") from None


def parse_ppm_p3(text: str) -> PPMImage:
    """Parse a P3 PPM image.

    Comment lines may follow the magic line; the next line gives width and
    height and anything else on it is ignored. Sample values are stored
    modulo 256. Raises PPMError on malformed or short input.
    """
    lines = text.splitlines()
    if not lines or not lines[0].startswith("P3"):
        raise PPMError("not a valid P3 PPM image")

    for index, line in enumerate(lines[1:], start=1):
        if not line.startswith("#"):
            break
    else:
        raise PPMError("missing image dimensions")

    fields = line.split()
    if len(fields) < 2:
        raise PPMError(f"bad dimension line: {line!r}")
    width = _to_int(fields[0], "width")
    height = _to_int(fields[1], "height")
    if width <= 0 or height <= 0:
        raise PPMError("image dimensions must be positive")

    tokens = "\n".join(lines[index + 1:]).split()
    if not tokens:
        raise PPMError("missing maximum sample value")
    max_value = _to_int(tokens[0], "maximum sample value")

    needed = 3 * width * height
    samples = tokens[1:1 + needed]
    if len(samples) < needed:
        raise PPMError(f"expected {needed} samples, found {len(samples)}")
    pixels = bytes(_to_int(token, "sample") & 0xFF for token in samples)
    return PPMImage(width, height, max_value, pixels)


def read_ppm_p3(path: Union[str, Path]) -> PPMImage:
    """Read and parse a P3 PPM file; OSError if it cannot be opened."""
    return parse_ppm_p3(Path(path).read_text(encoding="latin-1"))