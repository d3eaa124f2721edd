"""Shared utilities for header classification."""

import os
from collections.abc import Iterable

DEFAULT_HEADER_SUFFIXES = (".h",)


def is_header_candidate(
    filename: str,
    suffixes: Iterable[str] = DEFAULT_HEADER_SUFFIXES,
    allow_extensionless: bool = True,
) -> bool:
    """
    Check whether a file is worth classifying.

    A file qualifies when its base name ends with one of the header suffixes
    or, if allowed, has no extension at all (e.g. ``<vector>``-style headers).

    Args:
        filename: Path or base name of the file
        suffixes: Header suffixes to accept
        allow_extensionless: Whether names without any "." qualify

    Returns:
        True if the file should be classified
    """
    base_name = os.path.basename(filename)
    if not base_name:
        return False
    if any(base_name.endswith(suffix) for suffix in suffixes):
        return True
    return allow_extensionless and "." not in base_name
