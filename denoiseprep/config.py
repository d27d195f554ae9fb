# -*- coding: utf-8 -*-
"""
Run Configuration - Paths, strategy selection, and filter parameters.

Replaces fixed paths and implicit thread counts with one explicit
``PreprocessConfig`` handed to the dataset orchestrator at startup. A
configuration can be built in code, loaded from a YAML file, or assembled
by the command line (which layers flags over an optional YAML file).

Example YAML::

    manifest_path: train/_annotations.coco.json
    output_dir: train/processed_images
    strategy: cpu-parallel
    kernel_size: 5
    sigma: 1.5
    workers: 8

Relative paths in a YAML file are resolved against the file's directory.

Dependencies
------------
PyYAML

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
import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

# Third-party
import yaml

# denoiseprep internal
from denoiseprep.exceptions import ValidationError
from denoiseprep.filtering import coerce_strategy_kind
from denoiseprep.filtering._validation import validate_kernel_size, validate_sigma
from denoiseprep.filtering.kernel import DEFAULT_KERNEL_SIZE, DEFAULT_SIGMA
from denoiseprep.partition import DEFAULT_TILE_SHAPE, normalize_pair
from denoiseprep.vocabulary import StrategyKind

#: Output directory name used when none is configured.
DEFAULT_OUTPUT_DIRNAME = 'processed_images'

_PATH_FIELDS = ('manifest_path', 'source_dir', 'output_dir')


@dataclass
class PreprocessConfig:
    """Configuration for one preprocessing run.

    Parameters
    ----------
    manifest_path : Path
        JSON manifest listing the dataset images.
    source_dir : Path, optional
        Directory manifest paths are relative to. Defaults to the
        manifest's directory.
    output_dir : Path, optional
        Directory filtered images are written under, mirroring manifest
        paths. Defaults to ``<source_dir>/processed_images``.
    strategy : StrategyKind
        Execution strategy. Default ``StrategyKind.SEQUENTIAL``.
    kernel_size : int
        Kernel and window side length (odd, > 0). Default 5.
    sigma : float
        Gaussian standard deviation. Default 1.5.
    workers : int, optional
        CPU worker threads. Defaults to the CPU count.
    tile_shape : Tuple[int, int]
        GPU lanes per tile. Default ``(16, 16)``.
    device : str, optional
        GPU device (e.g. ``'cuda:0'``). Defaults to CUDA when available.
    """

    manifest_path: Path
    source_dir: Optional[Path] = None
    output_dir: Optional[Path] = None
    strategy: StrategyKind = StrategyKind.SEQUENTIAL
    kernel_size: int = DEFAULT_KERNEL_SIZE
    sigma: float = DEFAULT_SIGMA
    workers: Optional[int] = None
    tile_shape: Tuple[int, int] = DEFAULT_TILE_SHAPE
    device: Optional[str] = None

    def __post_init__(self) -> None:
        self.manifest_path = Path(self.manifest_path)
        if self.source_dir is None:
            self.source_dir = self.manifest_path.parent
        self.source_dir = Path(self.source_dir)
        if self.output_dir is None:
            self.output_dir = self.source_dir / DEFAULT_OUTPUT_DIRNAME
        self.output_dir = Path(self.output_dir)
        self.strategy = coerce_strategy_kind(self.strategy)
        if isinstance(self.tile_shape, list):
            self.tile_shape = tuple(self.tile_shape)

    def validate(self) -> None:
        """Check every parameter before any image is processed.

        Raises
        ------
        ValidationError
            If the kernel size, sigma, worker count, or tile shape is
            invalid.
        """
        validate_kernel_size(self.kernel_size)
        validate_sigma(self.sigma)
        if self.workers is not None and (
                isinstance(self.workers, bool)
                or not isinstance(self.workers, int)
                or self.workers <= 0):
            raise ValidationError(
                f"workers must be a positive integer, got {self.workers!r}"
            )
        try:
            normalize_pair(self.tile_shape, 'tile_shape')
        except (TypeError, ValueError) as exc:
            raise ValidationError(str(exc)) from exc

    def strategy_options(self) -> Dict[str, Any]:
        """Constructor options for the configured strategy.

        Returns
        -------
        Dict[str, Any]
            ``kernel_size`` and ``sigma``, plus ``workers`` for the CPU
            strategy or ``tile_shape`` and ``device`` for the GPU strategy.
        """
        options: Dict[str, Any] = {
            'kernel_size': self.kernel_size,
            'sigma': self.sigma,
        }
        if self.strategy is StrategyKind.CPU_PARALLEL:
            options['workers'] = self.workers
        elif self.strategy is StrategyKind.GPU_PARALLEL:
            options['tile_shape'] = self.tile_shape
            options['device'] = self.device
        return options

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Any],
        base_dir: Optional[Union[str, Path]] = None,
        **overrides: Any,
    ) -> 'PreprocessConfig':
        """Build a configuration from a plain mapping.

        Parameters
        ----------
        mapping : Mapping[str, Any]
            Field values keyed by field name.
        base_dir : str or Path, optional
            Directory relative path values are resolved against.
        **overrides
            Field values that take precedence over *mapping*. ``None``
            values are ignored.

        Raises
        ------
        ValidationError
            If *mapping* has unknown keys or lacks ``manifest_path``.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        values = dict(mapping)
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValidationError(
                f"Unknown configuration keys: {unknown}. "
                f"Supported keys: {sorted(known)}"
            )
        if base_dir is not None:
            for name in _PATH_FIELDS:
                if values.get(name) is not None:
                    values[name] = Path(base_dir) / Path(values[name])
        values.update({k: v for k, v in overrides.items() if v is not None})
        if values.get('manifest_path') is None:
            raise ValidationError("manifest_path is required")
        return cls(**values)

    @classmethod
    def from_yaml(
        cls, path: Union[str, Path], **overrides: Any
    ) -> 'PreprocessConfig':
        """Load a configuration from a YAML file.

        Parameters
        ----------
        path : str or Path
            YAML file containing a mapping of field names to values.
        **overrides
            Field values that take precedence over the file.

        Raises
        ------
        ValidationError
            If the file cannot be read or parsed, is not a mapping, or
            has unknown keys.
        """
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                cfg = yaml.safe_load(f)
        except OSError as exc:
            raise ValidationError(
                f"Could not read config file {path}: {exc}"
            ) from exc
        except yaml.YAMLError as exc:
            raise ValidationError(
                f"Could not parse config file {path}: {exc}"
            ) from exc
        if cfg is None:
            cfg = {}
        if not isinstance(cfg, dict):
            raise ValidationError(
                f"Config file {path} must contain a mapping, got "
                f"{type(cfg).__name__}"
            )
        return cls.from_mapping(cfg, base_dir=path.parent, **overrides)
