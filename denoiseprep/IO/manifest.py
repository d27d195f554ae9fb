# -*- coding: utf-8 -*-
"""
Dataset Manifest - Load COCO-style JSON manifests into ordered entries.

A manifest is a JSON object with an ``images`` list; each record exposes
a ``file_name`` relative to the dataset's source directory and usually an
``id``::

    {"images": [{"id": 0, "file_name": "0001.jpg"}, ...],
     "annotations": [...], "categories": [...]}

Only ``images`` is consulted. Every record becomes one entry, in manifest
order, so the entry count is the number of images listed. Records whose
``file_name`` is missing or not a string carry a ``problem`` and are
skipped by the orchestrator.

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
import json
import logging
from pathlib import Path
from typing import Any, List, NamedTuple, Optional, Union

# denoiseprep internal
from denoiseprep.exceptions import ManifestMalformedError, ManifestUnreadableError

logger = logging.getLogger(__name__)

#: Manifest member holding the image records.
IMAGES_KEY = 'images'

#: Record member holding the image path relative to the source directory.
FILE_NAME_KEY = 'file_name'


class ManifestEntry(NamedTuple):
    """One image listed in a manifest.

    Attributes
    ----------
    identifier : Any
        The record's ``id``, or its position in ``images`` when absent.
    relative_path : str
        Image path relative to the source directory, or ``images[N]``
        for a record without a usable ``file_name``.
    problem : str, optional
        Why the record cannot be processed. ``None`` for usable records.
    """

    identifier: Any
    relative_path: str
    problem: Optional[str] = None


def parse_manifest(document: Any) -> List[ManifestEntry]:
    """Extract entries from an already-decoded manifest document.

    Parameters
    ----------
    document : Any
        Result of ``json.load`` on a manifest file.

    Returns
    -------
    List[ManifestEntry]
        One entry per record in ``images``, in manifest order. May be
        empty.

    Raises
    ------
    ManifestMalformedError
        If *document* is not an object or its ``images`` member is
        missing or not a list.
    """
    if not isinstance(document, dict):
        raise ManifestMalformedError(
            f"Manifest root must be a JSON object, got "
            f"{type(document).__name__}"
        )
    records = document.get(IMAGES_KEY)
    if not isinstance(records, list):
        raise ManifestMalformedError(
            f"Manifest must contain an '{IMAGES_KEY}' list"
        )

    entries = []
    for index, record in enumerate(records):
        if isinstance(record, dict) and \
                isinstance(record.get(FILE_NAME_KEY), str):
            entries.append(
                ManifestEntry(record.get('id', index), record[FILE_NAME_KEY])
            )
            continue
        logger.warning("Manifest record %d has no string '%s'",
                       index, FILE_NAME_KEY)
        identifier = record.get('id', index) \
            if isinstance(record, dict) else index
        entries.append(ManifestEntry(
            identifier,
            f"{IMAGES_KEY}[{index}]",
            f"record has no string '{FILE_NAME_KEY}'",
        ))
    return entries


def load_manifest(path: Union[str, Path]) -> List[ManifestEntry]:
    """Read and parse the manifest at *path*.

    Parameters
    ----------
    path : str or Path
        JSON manifest file.

    Returns
    -------
    List[ManifestEntry]
        One entry per record in ``images``, in manifest order. May be
        empty.

    Raises
    ------
    ManifestUnreadableError
        If the file cannot be opened or read.
    ManifestMalformedError
        If the file is not valid JSON or has no ``images`` list.

    Examples
    --------
    >>> entries = load_manifest('train/_annotations.coco.json')
    >>> entries[0]
    ManifestEntry(identifier=0, relative_path='0001.jpg')
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestUnreadableError(
            f"Could not open manifest file: {path} ({exc})"
        ) from exc

    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestMalformedError(
            f"Error parsing manifest {path}: {exc}"
        ) from exc

    entries = parse_manifest(document)
    logger.debug("Loaded %d manifest entries from %s", len(entries), path)
    return entries
