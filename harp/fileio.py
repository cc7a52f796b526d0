"""Helpers for reading plain-text data tables."""

from __future__ import annotations

import re
from pathlib import Path


def file_exists(fname: str | Path) -> bool:
    """Return True if the file can be opened for reading."""
    try:
        with open(fname, "rb"):
            return True
    except OSError:
        return False


def is_blank_line(line: str) -> bool:
    """Return True if the line holds only whitespace."""
    return line.strip() == ""


def decomment_file(fname: str | Path) -> str:
    """Return the file's text with every ``#`` comment removed.

    A comment runs from ``#`` up to and including the end of its line.
    """
    if not file_exists(fname):
        raise FileNotFoundError(f"decomment_file: file not found: {fname}")
    text = Path(fname).read_text()
    return re.sub(r"#[^\n]*(?:\n|$)", "", text)


def _first_line(fname: str | Path) -> str:
    with open(fname) as stream:
        line = stream.readline()
    return line[:-1] if line.endswith("\n") else line


def get_num_cols(fname: str | Path, c: str = " ") -> int:
    """Count the columns of the first line, separated by the character ``c``."""
    line = _first_line(fname)
    if not line:
        return 0
    cols = 0 if line[0] == c else 1
    cols += sum(1 for prev, cur in zip(line, line[1:]) if prev == c and cur != c)
    return cols


def get_num_rows(fname: str | Path) -> int:
    """Count the lines of a file."""
    with open(fname) as stream:
        return sum(1 for _ in stream)


def strip_line(line: str) -> str:
    """Drop the line ending, leading whitespace and anything after ``#``."""
    line = line.rstrip("\r\n").lstrip()
    return line.split("#", 1)[0]


def read_data_vector(fname: str | Path) -> dict[str, list[float]]:
    """Read a table whose first line names the columns.

    Returns a mapping from column name to its values. Blank lines are skipped.
    """
    if not file_exists(fname):
        raise FileNotFoundError(f"read_data_vector: file not found: {fname}")

    with open(fname) as stream:
        fields = stream.readline().split()
        table: dict[str, list[float]] = {name: [] for name in fields}
        for number, line in enumerate(stream, start=2):
            if line.rstrip("\r\n") == "":
                continue
            values = line.split()
            if len(values) < len(fields):
                raise ValueError(
                    f"read_data_vector: line {number} of {fname} has "
                    f"{len(values)} values, expected {len(fields)}"
                )
            for name, value in zip(fields, values):
                table[name].append(float(value))
    return table


def vectorize(text: str, delimiter: str = " ") -> list[str]:
    """Split ``text`` at any of the characters in ``delimiter``, dropping empty pieces."""
    if not delimiter:
        return [text] if text else []
    pattern = "[" + re.escape(delimiter) + "]+"
    return [piece for piece in re.split(pattern, text) if piece]


def vectorize_floats(text: str, delimiter: str = " ") -> list[float]:
    """Split ``text`` like :func:`vectorize` and convert every piece to float."""
    return [float(piece) for piece in vectorize(text, delimiter)]


def _leading_numbers(text: str) -> list[float]:
    numbers = []
    for token in text.split():
        try:
            numbers.append(float(token))
        except ValueError:
            break
    return numbers


def _read_text(fname: str | Path) -> str:
    try:
        return Path(fname).read_text()
    except OSError as exc:
        raise FileNotFoundError(f"Unable to open {fname}") from exc


def read_stellar_flux(
    file1: str | Path, file2: str | Path
) -> tuple[list[float], list[float]]:
    """Read fluxes from ``file1`` and wavelengths from ``file2``.

    Numbers are read until the first token that is not one. The first two
    characters of ``file2`` are skipped.
    """
    flux = _leading_numbers(_read_text(file1))
    wavelength = _leading_numbers(_read_text(file2)[2:])
    return flux, wavelength