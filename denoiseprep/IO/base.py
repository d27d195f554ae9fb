# -*- coding: utf-8 -*-
"""
IO Base Classes - Abstract interfaces for image readers and writers.

Defines abstract base classes for decoding dataset images into 2D
``uint8`` buffers and encoding filtered buffers back to files. The
dataset orchestrator only talks to these interfaces, so alternative
codecs can be plugged in through its reader and writer factories.

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

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np


class ImageReader(ABC):
    """
    Abstract base class for all image readers.

    Attributes
    ----------
    filepath : Path
        Path to the image file
    metadata : Dict[str, Any]
        Image metadata extracted from the file

    Raises
    ------
    DecodeError
        If the specified filepath does not exist or cannot be opened
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        self.filepath = Path(filepath)
        self.metadata: Dict[str, Any] = {}
        self._load_metadata()

    @abstractmethod
    def _load_metadata(self) -> None:
        """
        Load metadata from the image file.

        Populates ``self.metadata`` with format-specific entries such as
        image dimensions and the source pixel mode.
        """
        pass

    @abstractmethod
    def read_full(self) -> np.ndarray:
        """
        Decode the entire image.

        Returns
        -------
        np.ndarray
            2D ``uint8`` array of shape ``(rows, cols)``

        Raises
        ------
        DecodeError
            If the pixel data cannot be decoded
        """
        pass

    @abstractmethod
    def get_shape(self) -> Tuple[int, int]:
        """
        Get the shape of the decoded image.

        Returns
        -------
        Tuple[int, int]
            ``(rows, cols)``
        """
        pass

    def close(self) -> None:
        """
        Close the reader and release resources.

        Default implementation does nothing. Override if the reader
        maintains open file handles or other resources.
        """
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False


class ImageWriter(ABC):
    """
    Abstract base class for all image writers.

    Attributes
    ----------
    filepath : Path
        Path where the image will be written
    metadata : Dict[str, Any]
        Image metadata to be written
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        self.filepath = Path(filepath)
        self.metadata = metadata or {}

    @abstractmethod
    def write(self, data: np.ndarray) -> None:
        """
        Encode image data to file.

        Parameters
        ----------
        data : np.ndarray
            Image data to write

        Raises
        ------
        ValidationError
            If data format is incompatible with the output format
        EncodeError
            If writing fails
        """
        pass

    def close(self) -> None:
        """
        Close the writer and release resources.

        Default implementation does nothing. Override if the writer
        maintains open file handles or other resources.
        """
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False
