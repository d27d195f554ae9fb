# -*- coding: utf-8 -*-
"""
IO Module - Manifest, image codec, and filesystem boundaries.

Handles everything the filtering engine treats as external: loading the
dataset manifest, decoding images to grayscale buffers, encoding filtered
buffers, and creating output directories.

Dependencies
------------
Pillow

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

from denoiseprep.IO.base import ImageReader, ImageWriter
from denoiseprep.IO.image import (
    GrayscaleReader,
    GrayscaleWriter,
    decode_image,
    encode_image,
)
from denoiseprep.IO.manifest import ManifestEntry, load_manifest, parse_manifest
from denoiseprep.IO.utils import ensure_directory, resolve_entry_path

__all__ = [
    'ImageReader',
    'ImageWriter',
    'GrayscaleReader',
    'GrayscaleWriter',
    'decode_image',
    'encode_image',
    'ManifestEntry',
    'load_manifest',
    'parse_manifest',
    'ensure_directory',
    'resolve_entry_path',
]
