# -*- coding: utf-8 -*-
"""
Dataset Orchestrator - Denoise every image listed in a dataset manifest.

``DatasetPreprocessor`` walks a manifest in order, decodes each image to a
grayscale buffer, runs the two-pass denoise pipeline with the configured
execution strategy, and writes the result as lossless PNG under the
output directory at the same relative path, suffix replaced by ``.png``.
Per-image failures are logged and skipped; only manifest and output-root
failures abort the run.

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
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Type

# denoiseprep internal
from denoiseprep.config import PreprocessConfig
from denoiseprep.exceptions import (
    DecodeError,
    DirectoryCreateError,
    EncodeError,
    ResourceExhaustedError,
    ValidationError,
)
from denoiseprep.filtering import create_strategy
from denoiseprep.filtering.base import ExecutionStrategy
from denoiseprep.filtering.pipeline import DenoisePipeline
from denoiseprep.IO.base import ImageReader, ImageWriter
from denoiseprep.IO.image import GrayscaleReader, GrayscaleWriter
from denoiseprep.IO.manifest import ManifestEntry, load_manifest
from denoiseprep.IO.utils import ensure_directory, resolve_entry_path

logger = logging.getLogger(__name__)

#: Called as ``callback(processed, total)`` after each written image.
ProgressCallback = Callable[[int, int], None]

#: Suffix of every written image. Output is always lossless PNG.
OUTPUT_SUFFIX = '.png'

_SKIPPABLE = (
    ValidationError,
    DecodeError,
    ResourceExhaustedError,
    DirectoryCreateError,
    EncodeError,
)


@dataclass
class RunStatistics:
    """Outcome of one preprocessing run.

    Attributes
    ----------
    processed : int
        Images decoded, filtered, and written.
    total : int
        Entries listed in the manifest.
    skipped : List[Tuple[str, str]]
        ``(relative_path, reason)`` for every entry that was not written.
    elapsed : float
        Wall-clock seconds spent in the per-image loop.
    """

    processed: int = 0
    total: int = 0
    skipped: List[Tuple[str, str]] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def percent(self) -> int:
        """Share of manifest entries processed, as an integer percentage."""
        if self.total == 0:
            return 100
        return (self.processed * 100) // self.total

    def summary(self) -> str:
        """One-line ``Processed N of M images`` report."""
        return f"Processed {self.processed} of {self.total} images"


class DatasetPreprocessor:
    """Run the denoise pipeline over every image in a manifest.

    Parameters
    ----------
    config : PreprocessConfig
        Run configuration. Validated on construction.
    strategy : ExecutionStrategy, optional
        Strategy to filter with. When omitted, one is created from
        ``config`` and closed by ``close()``. A caller-supplied strategy
        is left open.
    reader_factory : type
        ``ImageReader`` subclass used to decode each image.
    writer_factory : type
        ``ImageWriter`` subclass used to encode each result.

    Raises
    ------
    ValidationError
        If the configuration is invalid.
    DependencyError
        If the GPU strategy is selected and PyTorch is not installed.

    Examples
    --------
    >>> config = PreprocessConfig('train/_annotations.coco.json')
    >>> with DatasetPreprocessor(config) as prep:
    ...     stats = prep.run()
    """

    def __init__(
        self,
        config: PreprocessConfig,
        strategy: Optional[ExecutionStrategy] = None,
        reader_factory: Type[ImageReader] = GrayscaleReader,
        writer_factory: Type[ImageWriter] = GrayscaleWriter,
    ) -> None:
        config.validate()
        self._config = config
        self._owns_strategy = strategy is None
        if strategy is None:
            strategy = create_strategy(
                config.strategy, **config.strategy_options()
            )
        self._strategy = strategy
        self._pipeline = DenoisePipeline(strategy)
        self._reader_factory = reader_factory
        self._writer_factory = writer_factory

    @property
    def config(self) -> PreprocessConfig:
        """The validated run configuration."""
        return self._config

    @property
    def strategy(self) -> ExecutionStrategy:
        """The strategy evaluating each filter pass."""
        return self._strategy

    def run(
        self, progress_callback: Optional[ProgressCallback] = None
    ) -> RunStatistics:
        """Denoise every manifest entry.

        Parameters
        ----------
        progress_callback : callable, optional
            Called as ``callback(processed, total)`` after each image is
            written.

        Returns
        -------
        RunStatistics
            Counts, skipped entries, and elapsed time.

        Raises
        ------
        ManifestError
            If the manifest cannot be read or parsed.
        DirectoryCreateError
            If the output root cannot be created.
        """
        cfg = self._config
        entries = load_manifest(cfg.manifest_path)
        ensure_directory(cfg.output_dir)

        stats = RunStatistics(total=len(entries))
        logger.info("Denoising %d images from %s into %s with %r",
                    stats.total, cfg.source_dir, cfg.output_dir,
                    self._strategy)

        start = time.perf_counter()
        for entry in entries:
            try:
                self.process_entry(entry)
            except _SKIPPABLE as exc:
                logger.warning("Skipping %s: %s", entry.relative_path, exc)
                stats.skipped.append((entry.relative_path, str(exc)))
                continue
            stats.processed += 1
            if progress_callback is not None:
                progress_callback(stats.processed, stats.total)
        stats.elapsed = time.perf_counter() - start

        logger.info("%s in %.3f seconds (%d skipped)",
                    stats.summary(), stats.elapsed, len(stats.skipped))
        return stats

    def process_entry(self, entry: ManifestEntry) -> Path:
        """Decode, filter, and write a single manifest entry.

        The result is written as PNG at the entry's relative path under
        the output directory, with the suffix replaced by ``.png`` so
        the file on disk holds the filtered pixels exactly.

        Returns
        -------
        Path
            Path the filtered image was written to.

        Raises
        ------
        ValidationError
            If the manifest record has no usable path, or the path
            escapes the dataset root.
        DecodeError
            If the source image cannot be decoded.
        ResourceExhaustedError
            If a filter pass cannot allocate its buffers.
        DirectoryCreateError
            If the output parent directory cannot be created.
        EncodeError
            If the filtered image cannot be written.
        """
        if entry.problem is not None:
            raise ValidationError(entry.problem)
        source_path = resolve_entry_path(
            self._config.source_dir, entry.relative_path
        )
        output_path = resolve_entry_path(
            self._config.output_dir, entry.relative_path
        ).with_suffix(OUTPUT_SUFFIX)

        with self._reader_factory(source_path) as reader:
            image = reader.read_full()
        filtered = self._pipeline.apply(image)

        ensure_directory(output_path.parent)
        with self._writer_factory(output_path) as writer:
            writer.write(filtered)
        logger.debug("Denoised %s -> %s", source_path, output_path)
        return output_path

    def close(self) -> None:
        """Close the strategy if this preprocessor created it."""
        if self._owns_strategy:
            self._strategy.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
