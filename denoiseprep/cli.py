# -*- coding: utf-8 -*-
"""
Command Line Entry Point - Denoise a manifest-listed dataset from a shell.

Usage::

    denoiseprep train/_annotations.coco.json --strategy cpu-parallel
    denoiseprep --config prep.yaml --log-level DEBUG

Values given on the command line override values from ``--config``, which
override the built-in defaults.

Exit codes: 0 when the run completes (even if some images were skipped),
1 on a fatal error (manifest, output directory, invalid parameter, missing
optional dependency), 2 on a usage error.

Dependencies
------------
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

# Standard library
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, TextIO, Tuple

# Third-party
from tqdm import tqdm

# denoiseprep internal
from denoiseprep.config import PreprocessConfig
from denoiseprep.dataset import DatasetPreprocessor
from denoiseprep.exceptions import DenoisePrepError
from denoiseprep.vocabulary import StrategyKind

logger = logging.getLogger(__name__)

#: Console progress bar layout: ``[=====     ] NN%``, 50 characters wide.
BAR_FORMAT = "[{bar:50}] {percentage:.0f}%"


def build_parser() -> argparse.ArgumentParser:
    """Build the ``denoiseprep`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="denoiseprep",
        description="Denoise every image listed in a COCO-style manifest "
                    "with a Gaussian pass followed by a local-mean pass.",
    )
    parser.add_argument(
        "manifest",
        type=Path,
        nargs="?",
        help="Path to the JSON manifest (may instead come from --config).",
    )
    parser.add_argument(
        "--source-dir",
        type=Path,
        help="Directory manifest paths are relative to. "
             "Default: the manifest's directory.",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Output directory. Default: <source-dir>/processed_images.",
    )
    parser.add_argument(
        "--strategy",
        choices=[k.value for k in StrategyKind],
        help="Execution strategy. Default: sequential.",
    )
    parser.add_argument(
        "--kernel-size",
        type=int,
        help="Odd kernel and window side length. Default: 5.",
    )
    parser.add_argument(
        "--sigma",
        type=float,
        help="Gaussian standard deviation in pixels. Default: 1.5.",
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Worker threads for cpu-parallel. Default: CPU count.",
    )
    parser.add_argument(
        "--tile-size",
        type=int,
        nargs="+",
        metavar="N",
        help="GPU tile size as ROWS [COLS]. Default: 16 16.",
    )
    parser.add_argument(
        "--device",
        type=str,
        help="Torch device for gpu-parallel, e.g. cuda:0.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML file with configuration values.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level. Default: WARNING.",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not draw the progress bar.",
    )
    return parser


class ConsoleProgress:
    """tqdm progress bar driven by the ``(processed, total)`` callback.

    The bar is created on the first report, once the total is known.

    Parameters
    ----------
    file : file-like, optional
        Stream to draw on. Defaults to ``sys.stdout``.
    """

    def __init__(self, file: Optional[TextIO] = None) -> None:
        self._file = file
        self._bar: Optional[tqdm] = None

    def __call__(self, processed: int, total: int) -> None:
        if self._bar is None:
            self._bar = tqdm(
                total=total,
                bar_format=BAR_FORMAT,
                ascii=" =",
                file=self._file if self._file is not None else sys.stdout,
            )
        self._bar.update(processed - self._bar.n)

    def close(self) -> None:
        """Finish the bar and move to a new line."""
        if self._bar is not None:
            self._bar.close()
            self._bar = None


def _skipped_lines(skipped: List[Tuple[str, str]]) -> List[str]:
    return [f"  {path}: {reason}" for path, reason in skipped]


def config_from_args(args: argparse.Namespace) -> PreprocessConfig:
    """Layer command line values over the optional YAML configuration.

    Raises
    ------
    ValidationError
        If the YAML file is unusable, no manifest is given, or a value
        is invalid.
    """
    tile_shape = None
    if args.tile_size:
        rows = args.tile_size[0]
        cols = args.tile_size[-1]
        tile_shape = (rows, cols)
    overrides = {
        'manifest_path': args.manifest,
        'source_dir': args.source_dir,
        'output_dir': args.output_dir,
        'strategy': args.strategy,
        'kernel_size': args.kernel_size,
        'sigma': args.sigma,
        'workers': args.workers,
        'tile_shape': tile_shape,
        'device': args.device,
    }
    if args.config is not None:
        return PreprocessConfig.from_yaml(args.config, **overrides)
    return PreprocessConfig.from_mapping({}, **overrides)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line interface.

    Parameters
    ----------
    argv : Sequence[str], optional
        Arguments without the program name. Defaults to ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 2
    if args.manifest is None and args.config is None:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: a manifest path or --config is "
              f"required", file=sys.stderr)
        return 2
    if args.tile_size is not None and len(args.tile_size) > 2:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: --tile-size takes ROWS [COLS]",
              file=sys.stderr)
        return 2

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    progress = None if args.no_progress else ConsoleProgress()
    try:
        config = config_from_args(args)
        print("Starting model training...")
        with DatasetPreprocessor(config) as prep:
            stats = prep.run(progress_callback=progress)
    except DenoisePrepError as exc:
        logger.error("%s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        if progress is not None:
            progress.close()

    print(f"Processing time: {stats.elapsed:.3f} seconds")
    print(stats.summary())
    if stats.skipped:
        print(f"Skipped {len(stats.skipped)} images:")
        print("\n".join(_skipped_lines(stats.skipped)))
    print("Training complete.")
    return 0
