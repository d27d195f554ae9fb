# -*- coding: utf-8 -*-
"""
Configuration Tests - Defaults, validation, and YAML loading.

Dependencies
------------
pytest
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

from pathlib import Path

import pytest
import yaml

from denoiseprep.config import DEFAULT_OUTPUT_DIRNAME, PreprocessConfig
from denoiseprep.exceptions import ValidationError
from denoiseprep.vocabulary import StrategyKind


class TestDefaults:
    """Test derived default values."""

    def test_paths_follow_manifest(self, tmp_path):
        """Test source and output defaults."""
        cfg = PreprocessConfig(tmp_path / "train" / "m.json")
        assert cfg.source_dir == tmp_path / "train"
        assert cfg.output_dir == tmp_path / "train" / DEFAULT_OUTPUT_DIRNAME

    def test_output_follows_source(self, tmp_path):
        """Test that the output default tracks an explicit source."""
        cfg = PreprocessConfig("m.json", source_dir=tmp_path)
        assert cfg.output_dir == tmp_path / "processed_images"

    def test_parameter_defaults(self):
        """Test filter and strategy defaults."""
        cfg = PreprocessConfig("m.json")
        assert cfg.strategy is StrategyKind.SEQUENTIAL
        assert cfg.kernel_size == 5
        assert cfg.sigma == 1.5
        assert cfg.workers is None
        assert cfg.tile_shape == (16, 16)
        cfg.validate()

    def test_strategy_string(self):
        """Test that strategy strings are coerced."""
        cfg = PreprocessConfig("m.json", strategy="gpu-parallel")
        assert cfg.strategy is StrategyKind.GPU_PARALLEL

    def test_unknown_strategy(self):
        """Test that unknown strategies raise ValidationError."""
        with pytest.raises(ValidationError):
            PreprocessConfig("m.json", strategy="fpga")


class TestValidate:
    """Test parameter validation."""

    @pytest.mark.parametrize('field, value', [
        ('kernel_size', 4), ('kernel_size', 0), ('sigma', 0.0),
        ('sigma', -1.0), ('workers', 0), ('workers', 1.5),
        ('tile_shape', (0, 16)), ('tile_shape', 'x'),
    ])
    def test_invalid(self, field, value):
        """Test that each invalid value raises ValidationError."""
        cfg = PreprocessConfig("m.json", **{field: value})
        with pytest.raises(ValidationError):
            cfg.validate()

    def test_strategy_options(self):
        """Test per-strategy constructor options."""
        cfg = PreprocessConfig("m.json", workers=3, device='cpu')
        assert cfg.strategy_options() == {'kernel_size': 5, 'sigma': 1.5}
        cfg.strategy = StrategyKind.CPU_PARALLEL
        assert cfg.strategy_options()['workers'] == 3
        cfg.strategy = StrategyKind.GPU_PARALLEL
        options = cfg.strategy_options()
        assert options['tile_shape'] == (16, 16)
        assert options['device'] == 'cpu'
        assert 'workers' not in options


class TestFromYaml:
    """Test loading configuration files."""

    def test_load(self, tmp_path):
        """Test a full file with relative paths."""
        path = tmp_path / "prep.yaml"
        path.write_text(yaml.safe_dump({
            'manifest_path': 'train/m.json',
            'output_dir': 'out',
            'strategy': 'cpu-parallel',
            'kernel_size': 3,
            'sigma': 0.8,
            'workers': 2,
            'tile_shape': [8, 4],
        }))
        cfg = PreprocessConfig.from_yaml(path)
        assert cfg.manifest_path == tmp_path / "train" / "m.json"
        assert cfg.source_dir == tmp_path / "train"
        assert cfg.output_dir == tmp_path / "out"
        assert cfg.strategy is StrategyKind.CPU_PARALLEL
        assert cfg.kernel_size == 3
        assert cfg.sigma == 0.8
        assert cfg.workers == 2
        assert cfg.tile_shape == (8, 4)
        cfg.validate()

    def test_overrides_win(self, tmp_path):
        """Test that overrides beat file values and None is ignored."""
        path = tmp_path / "prep.yaml"
        path.write_text("manifest_path: m.json\nkernel_size: 3\nsigma: 2.0\n")
        cfg = PreprocessConfig.from_yaml(path, kernel_size=7, sigma=None)
        assert cfg.kernel_size == 7
        assert cfg.sigma == 2.0

    def test_override_supplies_manifest(self, tmp_path):
        """Test an empty file with the manifest given as an override."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        cfg = PreprocessConfig.from_yaml(path, manifest_path=Path("m.json"))
        assert cfg.manifest_path == Path("m.json")

    def test_manifest_required(self, tmp_path):
        """Test that a missing manifest path raises."""
        path = tmp_path / "prep.yaml"
        path.write_text("kernel_size: 3\n")
        with pytest.raises(ValidationError, match="manifest_path"):
            PreprocessConfig.from_yaml(path)

    def test_unknown_key(self, tmp_path):
        """Test that unknown keys raise ValidationError."""
        path = tmp_path / "prep.yaml"
        path.write_text("manifest_path: m.json\nthreads: 4\n")
        with pytest.raises(ValidationError, match="threads"):
            PreprocessConfig.from_yaml(path)

    def test_not_a_mapping(self, tmp_path):
        """Test that a list document raises ValidationError."""
        path = tmp_path / "prep.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValidationError, match="mapping"):
            PreprocessConfig.from_yaml(path)

    def test_bad_yaml(self, tmp_path):
        """Test that unparseable YAML raises ValidationError."""
        path = tmp_path / "prep.yaml"
        path.write_text("manifest_path: [unclosed\n")
        with pytest.raises(ValidationError, match="parse"):
            PreprocessConfig.from_yaml(path)

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises ValidationError."""
        with pytest.raises(ValidationError, match="read"):
            PreprocessConfig.from_yaml(tmp_path / "absent.yaml")
