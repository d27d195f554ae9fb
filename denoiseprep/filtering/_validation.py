# -*- coding: utf-8 -*-
"""
Filter Validation Helpers - Shared kernel size, sigma, and image validation.

Provides reusable validation functions for the filtering engine. The
kernel builder, every execution strategy, and the run configuration call
these helpers so that invalid parameters are rejected consistently and
before any image is processed.

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
import math
import numbers

# Third-party
import numpy as np

# denoiseprep internal
from denoiseprep.exceptions import ValidationError


def validate_kernel_size(kernel_size: int, name: str = 'kernel_size') -> None:
    """Validate that kernel size is a positive odd integer.

    Parameters
    ----------
    kernel_size : int
        The kernel size to validate.
    name : str
        Parameter name for error messages. Default ``'kernel_size'``.

    Raises
    ------
    ValidationError
        If ``kernel_size`` is not an integer, is not positive, or is even.
    """
    if isinstance(kernel_size, bool) or not isinstance(kernel_size, int):
        raise ValidationError(
            f"{name} must be an integer, got {type(kernel_size).__name__}"
        )
    if kernel_size <= 0:
        raise ValidationError(
            f"{name} must be positive, got {kernel_size}"
        )
    if kernel_size % 2 == 0:
        raise ValidationError(
            f"{name} must be odd, got {kernel_size}"
        )


def validate_sigma(sigma: float, name: str = 'sigma') -> None:
    """Validate that sigma is a finite positive real number.

    Parameters
    ----------
    sigma : float
        Gaussian standard deviation in pixels.
    name : str
        Parameter name for error messages. Default ``'sigma'``.

    Raises
    ------
    ValidationError
        If ``sigma`` is not a real number, is not finite, or is ``<= 0``.
    """
    if isinstance(sigma, bool) or not isinstance(sigma, numbers.Real):
        raise ValidationError(
            f"{name} must be a real number, got {type(sigma).__name__}"
        )
    if not math.isfinite(sigma) or sigma <= 0:
        raise ValidationError(
            f"{name} must be a finite value > 0, got {sigma}"
        )


def validate_image(image: np.ndarray) -> None:
    """Validate that *image* is a non-empty 2D ``uint8`` array.

    Parameters
    ----------
    image : np.ndarray
        Single-channel image buffer.

    Raises
    ------
    ValidationError
        If *image* is not an ndarray, is not 2D, is not ``uint8``, or has
        a zero-length dimension.
    """
    if not isinstance(image, np.ndarray):
        raise ValidationError(
            f"image must be a numpy ndarray, got {type(image).__name__}"
        )
    if image.ndim != 2:
        raise ValidationError(
            f"image must be 2D (rows, cols), got shape {image.shape}"
        )
    if image.dtype != np.uint8:
        raise ValidationError(
            f"image must be uint8, got {image.dtype}"
        )
    if image.shape[0] == 0 or image.shape[1] == 0:
        raise ValidationError(
            f"image must have positive dimensions, got shape {image.shape}"
        )
