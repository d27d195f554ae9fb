# -*- coding: utf-8 -*-
"""
GPU Parallel Strategy - Accelerator filter pass over a 2D tile grid.

Transfers the input image to accelerator memory, covers the interior with
a grid of ``tile_shape`` tiles, and evaluates every interior output pixel
as an independent lane of a batched tensor computation: for each kernel
tap the neighborhood sample of every lane is gathered at once and
accumulated into that lane's sum. Lanes never read each other's output,
so no synchronization is needed until the result is copied back to host
memory.

The per-lane arithmetic matches ``denoiseprep.filtering.engine`` operation
for operation (``float64`` multiply then add in row-major tap order,
clamp, round half-to-even; ``int64`` sum then floor division), so the
output is identical to the sequential strategy.

Transfers to and from the device are part of the pass; a failed transfer
or device allocation surfaces as ``ResourceExhaustedError``.

Dependencies
------------
torch

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
import logging
from typing import Optional, Tuple, Union

# Third-party
import numpy as np

try:
    import torch
    _HAS_TORCH = True
except ImportError:
    _HAS_TORCH = False

# denoiseprep internal
from denoiseprep.exceptions import (
    DependencyError,
    ResourceExhaustedError,
    ValidationError,
)
from denoiseprep.filtering.base import ExecutionStrategy
from denoiseprep.filtering.kernel import DEFAULT_KERNEL_SIZE, DEFAULT_SIGMA
from denoiseprep.partition import (
    DEFAULT_TILE_SHAPE,
    ChipRegion,
    normalize_pair,
    tile_origins,
)
from denoiseprep.vocabulary import FilterKind, StrategyKind

logger = logging.getLogger(__name__)


def default_device() -> str:
    """Return ``'cuda'`` when a CUDA device is available, else ``'cpu'``."""
    if _HAS_TORCH and torch.cuda.is_available():
        return 'cuda'
    return 'cpu'


class GpuParallelStrategy(ExecutionStrategy):
    """Evaluate the interior on an accelerator, one lane per output pixel.

    Parameters
    ----------
    kernel_size : int
        Kernel and window side length (odd, > 0). Default 5.
    sigma : float
        Gaussian standard deviation. Default 1.5.
    tile_shape : int or Tuple[int, int]
        ``(tile_rows, tile_cols)`` lanes per tile. Default ``(16, 16)``.
    device : str or torch.device, optional
        Target device. Defaults to ``'cuda'`` when available, otherwise
        ``'cpu'`` (same arithmetic, no accelerator).

    Raises
    ------
    DependencyError
        If PyTorch is not installed.
    ValidationError
        If ``tile_shape`` or ``device`` is invalid, or the kernel
        parameters are invalid.

    Examples
    --------
    >>> strategy = GpuParallelStrategy(tile_shape=(32, 32))
    >>> denoised = strategy.apply('local_mean', image)
    """

    kind = StrategyKind.GPU_PARALLEL

    def __init__(
        self,
        kernel_size: int = DEFAULT_KERNEL_SIZE,
        sigma: float = DEFAULT_SIGMA,
        tile_shape: Union[int, Tuple[int, int]] = DEFAULT_TILE_SHAPE,
        device: Optional[Union[str, 'torch.device']] = None,
    ) -> None:
        if not _HAS_TORCH:
            raise DependencyError(
                "torch is required for the gpu-parallel strategy. "
                "Install with: pip install denoiseprep[gpu]"
            )
        super().__init__(kernel_size, sigma)
        try:
            self._tile_shape = normalize_pair(tile_shape, 'tile_shape')
        except (TypeError, ValueError) as exc:
            raise ValidationError(str(exc)) from exc
        try:
            self._device = torch.device(
                device if device is not None else default_device()
            )
        except (TypeError, RuntimeError) as exc:
            raise ValidationError(f"Invalid device {device!r}: {exc}") from exc
        self._taps = [float(w) for w in self._kernel.ravel()]
        logger.debug("GPU strategy on %s with %s tiles",
                     self._device, self._tile_shape)

    @property
    def tile_shape(self) -> Tuple[int, int]:
        """Lanes per tile as ``(tile_rows, tile_cols)``."""
        return self._tile_shape

    @property
    def device(self) -> 'torch.device':
        """Device the pass runs on."""
        return self._device

    def _lane_indices(
        self, region: ChipRegion
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Image coordinates of every lane, grouped by tile.

        Returns
        -------
        rows : np.ndarray
            Shape ``(n_row_tiles, 1, tile_rows, 1)``.
        cols : np.ndarray
            Shape ``(1, n_col_tiles, 1, tile_cols)``.

        Lanes of edge tiles that fall outside *region* are clipped onto
        its last row or column; they recompute a pixel another lane
        already owns and write the identical value.
        """
        tr, tc = self._tile_shape
        row_starts, col_starts = tile_origins(region, self._tile_shape)
        rows = np.minimum(row_starts[:, None] + np.arange(tr)[None, :],
                          region.row_end - 1)
        cols = np.minimum(col_starts[:, None] + np.arange(tc)[None, :],
                          region.col_end - 1)
        return rows[:, None, :, None], cols[None, :, None, :]

    def _to_device(self, array: np.ndarray) -> 'torch.Tensor':
        try:
            return torch.from_numpy(np.ascontiguousarray(array)).to(self._device)
        except RuntimeError as exc:
            raise ResourceExhaustedError(
                f"Could not transfer {array.shape} {array.dtype} array "
                f"to {self._device}: {exc}"
            ) from exc

    def _fill_interior(
        self,
        kind: FilterKind,
        source: np.ndarray,
        out: np.ndarray,
        region: ChipRegion,
    ) -> None:
        rows, cols = self._lane_indices(region)
        src = self._to_device(source)
        lane_rows = self._to_device(rows)
        lane_cols = self._to_device(cols)
        logger.debug("%s pass over %d x %d tile grid on %s", kind.value,
                     rows.shape[0], cols.shape[1], self._device)

        try:
            lanes = self._evaluate_lanes(kind, src, lane_rows, lane_cols)
            result = lanes.cpu().numpy()
        except RuntimeError as exc:
            # Out-of-memory on CUDA and on the CPU allocator both surface
            # as RuntimeError, as does a failed copy back to the host.
            raise ResourceExhaustedError(
                f"Could not filter {source.shape} image on "
                f"{self._device}: {exc}"
            ) from exc

        out[rows, cols] = result

    def _evaluate_lanes(
        self,
        kind: FilterKind,
        src: 'torch.Tensor',
        lane_rows: 'torch.Tensor',
        lane_cols: 'torch.Tensor',
    ) -> 'torch.Tensor':
        """Filter every lane; returns a ``uint8`` tensor of lane shape."""
        size = self._kernel_size
        offset = size // 2
        if kind is FilterKind.GAUSSIAN:
            working = src.to(torch.float64)
        else:
            working = src.to(torch.int64)
        lane_shape = torch.broadcast_shapes(lane_rows.shape, lane_cols.shape)
        acc = torch.zeros(lane_shape, dtype=working.dtype, device=src.device)

        for k in range(size):
            for l in range(size):
                sample = working[lane_rows + (k - offset),
                                 lane_cols + (l - offset)]
                if kind is FilterKind.GAUSSIAN:
                    acc += sample * self._taps[k * size + l]
                else:
                    acc += sample

        if kind is FilterKind.GAUSSIAN:
            return torch.round(torch.clamp(acc, 0.0, 255.0)).to(torch.uint8)
        return torch.div(acc, size * size, rounding_mode='floor').to(torch.uint8)

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(kernel_size={self._kernel_size}, "
                f"sigma={self._sigma}, tile_shape={self._tile_shape}, "
                f"device='{self._device}')")
