# -*- coding: utf-8 -*-
"""
Denoiseprep - Two-pass denoising for image training datasets.

Reads a COCO-style manifest, converts every listed image to 8-bit
grayscale, applies a Gaussian blur followed by a local-mean filter, and
writes the results under an output directory that mirrors the dataset
layout. The filter passes run sequentially, on a CPU thread pool, or on
a PyTorch device, with bit-identical results.

Dependencies
------------
numpy
Pillow
PyYAML
tqdm

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

__version__ = "0.1.0"

from denoiseprep.exceptions import (
    DenoisePrepError,
    ValidationError,
    DependencyError,
    ManifestError,
    ManifestUnreadableError,
    ManifestMalformedError,
    DecodeError,
    EncodeError,
    ResourceExhaustedError,
    DirectoryCreateError,
)
from denoiseprep.vocabulary import FilterKind, StrategyKind
from denoiseprep.config import PreprocessConfig
from denoiseprep.dataset import DatasetPreprocessor, RunStatistics

__all__ = [
    '__version__',
    'DenoisePrepError',
    'ValidationError',
    'DependencyError',
    'ManifestError',
    'ManifestUnreadableError',
    'ManifestMalformedError',
    'DecodeError',
    'EncodeError',
    'ResourceExhaustedError',
    'DirectoryCreateError',
    'FilterKind',
    'StrategyKind',
    'PreprocessConfig',
    'DatasetPreprocessor',
    'RunStatistics',
]
