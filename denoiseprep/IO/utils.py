# -*- coding: utf-8 -*-
"""
IO Utilities - Output directory creation and manifest path resolution.

Author
------
geoint.org contributors

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

# Standard library
from pathlib import Path, PurePosixPath
from typing import Union

# denoiseprep internal
from denoiseprep.exceptions import DirectoryCreateError, ValidationError


def ensure_directory(path: Union[str, Path]) -> Path:
    """Create *path* and any missing parents.

    Idempotent: an existing directory is not an error.

    Parameters
    ----------
    path : str or Path
        Directory to create.

    Returns
    -------
    Path
        The directory path.

    Raises
    ------
    DirectoryCreateError
        If the directory cannot be created, or *path* exists and is not
        a directory.
    """
    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreateError(
            f"Error creating output directory: {path} ({exc})"
        ) from exc
    return path


def resolve_entry_path(root: Union[str, Path], relative_path: str) -> Path:
    """Join a manifest-relative path onto *root*.

    Both ``/`` and ``\\`` separators are accepted in *relative_path*.

    Parameters
    ----------
    root : str or Path
        Source or output directory.
    relative_path : str
        Path from a manifest record.

    Returns
    -------
    Path
        ``root / relative_path``.

    Raises
    ------
    ValidationError
        If *relative_path* is empty, absolute, or climbs out of *root*
        with ``..``.
    """
    parts = PurePosixPath(relative_path.replace('\\', '/')).parts
    if not parts or parts[0] == '/' or ':' in parts[0] or '..' in parts:
        raise ValidationError(
            f"Manifest path must be relative to the dataset root: "
            f"{relative_path!r}"
        )
    return Path(root).joinpath(*parts)
