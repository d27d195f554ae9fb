# -*- coding: utf-8 -*-
"""
Command Line Tests - Exit codes, console output, and option layering.

Dependencies
------------
pytest
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

import io

import pytest
import numpy as np

from denoiseprep.cli import ConsoleProgress, build_parser, config_from_args, main
from denoiseprep.vocabulary import StrategyKind


def _image(seed):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(20, 20), dtype=np.uint8)


class TestExitCodes:
    """Test process exit codes."""

    def test_success_with_skip(self, make_dataset, capsys):
        """Test exit 0 and the report when one image is missing."""
        manifest = make_dataset({"a.png": _image(1), "c.png": _image(3)},
                                listed=["a.png", "b.png", "c.png"])
        assert main([str(manifest)]) == 0
        out = capsys.readouterr().out
        assert "Starting model training..." in out
        assert "Processing time:" in out
        assert "Processed 2 of 3 images" in out
        assert "b.png" in out
        assert out.rstrip().endswith("Training complete.")
        assert (manifest.parent / "processed_images" / "a.png").is_file()

    def test_cpu_parallel(self, make_dataset, tmp_path):
        """Test a run with the thread-pool strategy and explicit output."""
        manifest = make_dataset({"a.png": _image(1)})
        out = tmp_path / "out"
        code = main([str(manifest), "--strategy", "cpu-parallel",
                     "--workers", "2", "--output-dir", str(out),
                     "--no-progress"])
        assert code == 0
        assert (out / "a.png").is_file()

    def test_missing_manifest(self, tmp_path, capsys):
        """Test exit 1 for an unreadable manifest."""
        assert main([str(tmp_path / "absent.json"), "--no-progress"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_kernel(self, make_dataset):
        """Test exit 1 for an even kernel size."""
        manifest = make_dataset({"a.png": _image(1)})
        assert main([str(manifest), "--kernel-size", "4"]) == 1

    def test_unknown_strategy(self, make_dataset):
        """Test exit 2 for a usage error."""
        manifest = make_dataset({"a.png": _image(1)})
        assert main([str(manifest), "--strategy", "quantum"]) == 2

    def test_no_manifest(self):
        """Test exit 2 when neither a manifest nor a config is given."""
        assert main([]) == 2

    def test_too_many_tile_values(self, make_dataset):
        """Test exit 2 for three tile dimensions."""
        manifest = make_dataset({"a.png": _image(1)})
        assert main([str(manifest), "--tile-size", "1", "2", "3"]) == 2

    def test_help(self, capsys):
        """Test that --help exits 0."""
        assert main(["--help"]) == 0
        assert "denoiseprep" in capsys.readouterr().out


class TestOptionLayering:
    """Test command line values over YAML values."""

    def test_flags_override_yaml(self, tmp_path):
        """Test precedence of flags, file, and defaults."""
        cfg_path = tmp_path / "prep.yaml"
        cfg_path.write_text(
            "manifest_path: m.json\nkernel_size: 3\nsigma: 2.0\n"
            "strategy: cpu-parallel\n"
        )
        args = build_parser().parse_args(
            ["--config", str(cfg_path), "--sigma", "0.5", "--tile-size", "8"]
        )
        cfg = config_from_args(args)
        assert cfg.manifest_path == tmp_path / "m.json"
        assert cfg.kernel_size == 3
        assert cfg.sigma == 0.5
        assert cfg.strategy is StrategyKind.CPU_PARALLEL
        assert cfg.tile_shape == (8, 8)
        assert cfg.workers is None

    def test_tile_pair(self, tmp_path):
        """Test two tile dimensions."""
        args = build_parser().parse_args(
            [str(tmp_path / "m.json"), "--tile-size", "8", "4"]
        )
        assert config_from_args(args).tile_shape == (8, 4)


class TestConsoleProgress:
    """Test the tqdm console progress bar."""

    def test_complete(self):
        """Test a finished run draws a full 50-character bar."""
        stream = io.StringIO()
        progress = ConsoleProgress(file=stream)
        for n in (1, 2, 3):
            progress(n, 3)
        progress.close()
        assert "[" + "=" * 50 + "] 100%" in stream.getvalue()

    def test_partial(self):
        """Test a run with skips stops short of a full bar."""
        stream = io.StringIO()
        progress = ConsoleProgress(file=stream)
        progress(1, 2)
        progress.close()
        assert "[" + "=" * 25 + " " * 25 + "] 50%" in stream.getvalue()

    def test_close_without_reports(self):
        """Test that closing an unused bar draws nothing."""
        stream = io.StringIO()
        progress = ConsoleProgress(file=stream)
        progress.close()
        assert stream.getvalue() == ""
