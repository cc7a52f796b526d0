"""Search path for data files and lookup of resources along it."""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field
from pathlib import Path

_ROOT_DIR = str(Path(__file__).resolve().parent)


@dataclass
class _SearchPath:
    serialized: str = "."
    lock: threading.Lock = field(default_factory=threading.Lock)


_state = _SearchPath()


def strip_nonprint(s: str) -> str:
    """Return ``s`` without its non-printing characters."""
    return "".join(ch for ch in s if " " <= ch <= "~")


def serialize_search_paths(dirs: list[str]) -> str:
    """Store ``dirs`` as the current search path and return its text form."""
    _state.serialized = os.pathsep.join(dirs)
    return _state.serialized


def deserialize_search_paths(text: str) -> list[str]:
    """Split a serialized search path, appending the package data directory if absent."""
    dirs = text.split(os.pathsep)
    if not any(_ROOT_DIR in d for d in dirs):
        dirs.append(_ROOT_DIR + "/data")
    return dirs


def set_default_directories() -> None:
    """Reset the search path to the current directory alone."""
    serialize_search_paths(["."])


def _home() -> str | None:
    return os.environ.get("HOME") or os.environ.get("USERPROFILE")


def _is_home_relative(name: str) -> bool:
    return name.startswith("~/") or name.startswith("~\\")


def add_resource_directory(directory: str) -> None:
    """Put ``directory`` at the front of the search path."""
    with _state.lock:
        dirs = deserialize_search_paths(_state.serialized)
        d = strip_nonprint(directory)
        if _is_home_relative(d):
            home = _home()
            if home:
                d = home + d[1:]
        if d in dirs:
            dirs.remove(d)
        dirs.insert(0, d)
        serialize_search_paths(dirs)


def _readable(path: str) -> bool:
    try:
        with open(path, "rb"):
            return True
    except OSError:
        return False


def _is_absolute(name: str) -> bool:
    islash = name.find("/")
    ibslash = name.find("\\")
    icolon = name.find(":")
    return islash == 0 or ibslash == 0 or (icolon == 1 and 2 in (islash, ibslash))


def find_resource(name: str) -> str:
    """Return the path of the first readable file called ``name`` on the search path.

    Absolute and home-relative names are checked as given. Raises
    FileNotFoundError when nothing is found.
    """
    with _state.lock:
        dirs = deserialize_search_paths(_state.serialized)

        if _is_home_relative(name):
            home = _home()
            if home:
                full_name = home + name[1:]
                if _readable(full_name):
                    return full_name
                raise FileNotFoundError(f"harp.find_resource: {name} not found")

        if _is_absolute(name):
            if _readable(name):
                return name
            raise FileNotFoundError(f"harp.find_resource: {name} not found")

        for d in dirs:
            full_name = d + "/" + name
            if _readable(full_name):
                return full_name

        listing = ", ".join(f"\n'{d}'" for d in dirs)
        noun = "directory" if len(dirs) == 1 else "directories"
        raise FileNotFoundError(
            f"\nResource {name} not found in {noun} {listing}\n\n"
            "To fix this problem, either:\n"
            "    a) move the missing files into the local directory;\n"
            "    b) add their directory with add_resource_directory\n"
        )