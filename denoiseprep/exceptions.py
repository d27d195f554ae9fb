# -*- coding: utf-8 -*-
"""
Denoiseprep Exception Hierarchy - Domain-specific exceptions for dataset preprocessing.

Lets callers (the dataset orchestrator, the command line entry point, or a
training harness driving the package) tell per-image failures apart from
run-level failures. All exceptions subclass both ``DenoisePrepError`` and
the appropriate built-in exception so existing ``except OSError`` or
``except ValueError`` handlers keep working.

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


class DenoisePrepError(Exception):
    """Base exception for all denoiseprep errors."""


class ValidationError(DenoisePrepError, ValueError):
    """Invalid input data, parameters, or configuration.

    Raised for even or non-positive kernel sizes, non-positive sigma,
    images that are not 2D ``uint8`` arrays, and malformed configuration
    values. Parameter problems surface before any image is processed.
    """


class DependencyError(DenoisePrepError, ImportError):
    """Missing optional dependency required for a specific strategy.

    Raised when the GPU strategy is requested but PyTorch is not
    installed.
    """


class ManifestError(DenoisePrepError):
    """Base class for failures loading the dataset manifest.

    Always fatal: without a manifest there is nothing to process.
    """


class ManifestUnreadableError(ManifestError, OSError):
    """The manifest file does not exist or cannot be read."""


class ManifestMalformedError(ManifestError, ValueError):
    """The manifest is not valid JSON or lacks an ``images`` list.

    Distinct from an empty ``images`` list, which is a valid manifest
    describing zero images.
    """


class DecodeError(DenoisePrepError, OSError):
    """An image file is missing or could not be decoded.

    Recoverable: the orchestrator skips the entry and continues.
    """


class EncodeError(DenoisePrepError, OSError):
    """A filtered image could not be encoded or written.

    Recoverable: the orchestrator skips the entry and continues.
    """


class ResourceExhaustedError(DenoisePrepError, MemoryError):
    """Output buffer allocation or accelerator transfer failed.

    Recoverable: aborts the current image only.
    """


class DirectoryCreateError(DenoisePrepError, OSError):
    """An output directory could not be created.

    Fatal for the output root, recoverable for a single entry's parent
    directory.
    """
