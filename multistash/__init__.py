"""multistash: keyed container with reusable integer keys.

This package exposes `MultiStash`, a store that keeps one or more values
under each key and recycles the keys of drained slots through a free list,
so repeated put/take cycles do not grow its storage.
"""
from importlib.metadata import PackageNotFoundError, version as _pkg_version
from pathlib import Path
from typing import Optional

from multistash.core import (
    Key,
    LockedStash,
    MultiStash,
    TakeOrder,
    ValuesView,
    ValuesViewMut,
)
from multistash.exceptions import InvalidKeyError, StashError


def _read_version_file() -> Optional[str]:
    try:
        return Path(__file__).with_name("VERSION").read_text(encoding="utf8").strip()
    except OSError:
        return None


def _get_version() -> str:
    # 1) Try to read installed distribution metadata
    try:
        return _pkg_version("multistash")
    except PackageNotFoundError:
        pass

    # 2) Try a VERSION file shipped next to the package
    v = _read_version_file()
    if v:
        return v

    # 3) Fall back to a safe default
    return "0.0.0"


__version__ = _get_version()


__all__ = [
    "MultiStash",
    "LockedStash",
    "Key",
    "TakeOrder",
    "ValuesView",
    "ValuesViewMut",
    "StashError",
    "InvalidKeyError",
    "__version__",
]
