# -*- coding: utf-8 -*-
"""
Kernel Builder - Normalized 2D Gaussian weight kernels.

Dependencies
------------
numpy

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

# Third-party
import numpy as np

# denoiseprep internal
from denoiseprep.filtering._validation import validate_kernel_size, validate_sigma

DEFAULT_KERNEL_SIZE = 5
DEFAULT_SIGMA = 1.5


def gaussian_kernel(
    size: int = DEFAULT_KERNEL_SIZE, sigma: float = DEFAULT_SIGMA
) -> np.ndarray:
    """Build a normalized ``size x size`` Gaussian kernel.

    Each raw weight is ``exp(-((i - c)**2 + (j - c)**2) / (2 * sigma**2))``
    with ``c = size // 2``; the grid is then divided by the sum of the raw
    weights so it sums to 1.0 within floating-point rounding.

    Parameters
    ----------
    size : int
        Kernel side length. Must be a positive odd integer. Default 5.
    sigma : float
        Gaussian standard deviation in pixels. Must be > 0. Default 1.5.

    Returns
    -------
    np.ndarray
        Read-only ``float64`` array of shape ``(size, size)``.

    Raises
    ------
    ValidationError
        If ``size`` is even or non-positive, or ``sigma <= 0``.

    Examples
    --------
    >>> k = gaussian_kernel(5, 1.5)
    >>> k.shape
    (5, 5)
    >>> abs(k.sum() - 1.0) < 1e-12
    True
    """
    validate_kernel_size(size, 'size')
    validate_sigma(sigma)

    c = size // 2
    axis = np.arange(size, dtype=np.float64) - c
    x, y = np.meshgrid(axis, axis, indexing='ij')
    weights = np.exp(-(x * x + y * y) / (2.0 * sigma * sigma))
    weights /= weights.sum()
    weights.flags.writeable = False
    return weights
