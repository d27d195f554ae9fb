# -*- coding: utf-8 -*-
"""
Shared test fixtures - Synthetic images and on-disk datasets.

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

import json

import pytest
import numpy as np
from PIL import Image


@pytest.fixture
def flat_image():
    """64x48 image filled with the value 128."""
    return np.full((64, 48), 128, dtype=np.uint8)


@pytest.fixture
def random_image():
    """Reproducible 37x53 image of uniform random samples."""
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(37, 53), dtype=np.uint8)


@pytest.fixture
def checkerboard():
    """32x32 alternating 0/255 checkerboard."""
    rows, cols = np.indices((32, 32))
    return np.where((rows + cols) % 2 == 0, 255, 0).astype(np.uint8)


@pytest.fixture
def make_dataset(tmp_path):
    """Factory writing images and a COCO-style manifest under *tmp_path*.

    Called as ``make_dataset({'a.png': array, ...}, listed=[...])``.
    Returns the manifest path. Names in *listed* that are not in
    *images* appear in the manifest without a file on disk.
    """
    def _make(images, listed=None):
        root = tmp_path / "train"
        root.mkdir(exist_ok=True)
        for name, data in images.items():
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            Image.fromarray(data).save(path)
        names = list(images) if listed is None else listed
        manifest = {
            "info": {"description": "synthetic"},
            "images": [
                {"id": i, "file_name": name, "width": 0, "height": 0}
                for i, name in enumerate(names)
            ],
            "annotations": [],
        }
        path = root / "_annotations.coco.json"
        path.write_text(json.dumps(manifest), encoding='utf-8')
        return path

    return _make
