# -*- coding: utf-8 -*-
"""
Filtering - Gaussian and local-mean filter passes with pluggable execution.

Provides the filtering engine used for dataset preprocessing: Gaussian
kernel construction, the weighted-convolution and local-mean algorithms
with their border-copy policy, and three interchangeable execution
strategies that produce identical output.

Strategies
    ``SequentialStrategy`` - single control flow
    ``CpuParallelStrategy`` - thread pool over disjoint row bands
    ``GpuParallelStrategy`` - PyTorch tile grid, one lane per pixel

Chaining
    ``DenoisePipeline`` - Gaussian pass followed by local-mean pass

Dependencies
------------
numpy
torch (optional, for the gpu-parallel strategy)

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
import importlib
from typing import Any, Dict, Tuple, Union

# denoiseprep internal
from denoiseprep.exceptions import ValidationError
from denoiseprep.filtering.base import ExecutionStrategy, coerce_filter_kind
from denoiseprep.filtering.cpu_parallel import CpuParallelStrategy
from denoiseprep.filtering.kernel import (
    DEFAULT_KERNEL_SIZE,
    DEFAULT_SIGMA,
    gaussian_kernel,
)
from denoiseprep.filtering.pipeline import DENOISE_PASSES, DenoisePipeline
from denoiseprep.filtering.sequential import SequentialStrategy
from denoiseprep.vocabulary import FilterKind, StrategyKind


# Strategy registry: maps strategy kinds to (module_path, class_name).
# The GPU module is imported lazily so torch is only needed when asked for.
_STRATEGY_REGISTRY: Dict[StrategyKind, Tuple[str, str]] = {
    StrategyKind.SEQUENTIAL: (
        'denoiseprep.filtering.sequential', 'SequentialStrategy'),
    StrategyKind.CPU_PARALLEL: (
        'denoiseprep.filtering.cpu_parallel', 'CpuParallelStrategy'),
    StrategyKind.GPU_PARALLEL: (
        'denoiseprep.filtering.gpu_parallel', 'GpuParallelStrategy'),
}


def coerce_strategy_kind(kind: Union[StrategyKind, str]) -> StrategyKind:
    """Convert a ``StrategyKind`` or its string value to ``StrategyKind``.

    Raises
    ------
    ValidationError
        If *kind* names no registered strategy.
    """
    if isinstance(kind, StrategyKind):
        return kind
    try:
        return StrategyKind(str(kind).lower())
    except ValueError:
        raise ValidationError(
            f"Unknown execution strategy: {kind!r}. "
            f"Supported strategies: {[k.value for k in StrategyKind]}"
        ) from None


def create_strategy(
    kind: Union[StrategyKind, str] = StrategyKind.SEQUENTIAL,
    **options: Any,
) -> ExecutionStrategy:
    """Create an execution strategy by name.

    Parameters
    ----------
    kind : StrategyKind or str
        ``'sequential'``, ``'cpu-parallel'`` or ``'gpu-parallel'``.
    **options
        Constructor arguments for the strategy: ``kernel_size`` and
        ``sigma`` for all strategies, ``workers`` for CPU parallel,
        ``tile_shape`` and ``device`` for GPU parallel. Options set to
        ``None`` are dropped so strategy defaults apply.

    Returns
    -------
    ExecutionStrategy
        Concrete strategy instance.

    Raises
    ------
    ValidationError
        If *kind* is unknown, an option does not apply to the strategy,
        or a parameter is invalid.
    DependencyError
        If the GPU strategy is requested without PyTorch installed.

    Examples
    --------
    >>> from denoiseprep.filtering import create_strategy
    >>> strategy = create_strategy('cpu-parallel', workers=4, sigma=1.5)
    """
    kind = coerce_strategy_kind(kind)
    module_path, class_name = _STRATEGY_REGISTRY[kind]
    module = importlib.import_module(module_path)
    strategy_cls = getattr(module, class_name)
    options = {k: v for k, v in options.items() if v is not None}
    try:
        return strategy_cls(**options)
    except TypeError as exc:
        raise ValidationError(
            f"Invalid options for {kind.value} strategy: {exc}"
        ) from exc


__all__ = [
    'ExecutionStrategy',
    'SequentialStrategy',
    'CpuParallelStrategy',
    'DenoisePipeline',
    'DENOISE_PASSES',
    'DEFAULT_KERNEL_SIZE',
    'DEFAULT_SIGMA',
    'FilterKind',
    'StrategyKind',
    'gaussian_kernel',
    'coerce_filter_kind',
    'coerce_strategy_kind',
    'create_strategy',
]
