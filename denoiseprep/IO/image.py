# -*- coding: utf-8 -*-
"""
Grayscale Image IO - Decode images to 8-bit luminance and encode them back.

Reads any Pillow-supported raster (PNG, JPEG, BMP, TIFF, ...) and converts
it to a single-channel ``uint8`` buffer. Writes 2D ``uint8`` buffers with
the file format inferred from the output suffix, falling back to PNG
when the suffix is missing or unknown to Pillow.

Dependencies
------------
Pillow

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
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

# Third-party
import numpy as np
from PIL import Image

# denoiseprep internal
from denoiseprep.exceptions import (
    DecodeError,
    EncodeError,
    ResourceExhaustedError,
    ValidationError,
)
from denoiseprep.IO.base import ImageReader, ImageWriter

logger = logging.getLogger(__name__)

#: Pillow mode every decoded image is converted to.
GRAYSCALE_MODE = 'L'

#: Format used when the output suffix does not identify one.
DEFAULT_FORMAT = 'PNG'

_PIL_ERRORS = (OSError, ValueError, Image.DecompressionBombError)


class GrayscaleReader(ImageReader):
    """Decode an image file into a 2D ``uint8`` luminance buffer.

    Color images are converted with Pillow's ITU-R 601-2 luma transform;
    images with more than 8 bits per sample are clipped to ``[0, 255]``.

    Parameters
    ----------
    filepath : str or Path
        Image file path.

    Raises
    ------
    DecodeError
        If the file does not exist or Pillow cannot identify it.

    Examples
    --------
    >>> from denoiseprep.IO import GrayscaleReader
    >>> with GrayscaleReader('train/0001.jpg') as reader:
    ...     image = reader.read_full()
    >>> image.dtype
    dtype('uint8')
    """

    def _load_metadata(self) -> None:
        if not self.filepath.is_file():
            raise DecodeError(f"File not found: {self.filepath}")
        try:
            with Image.open(self.filepath) as img:
                self.metadata = {
                    'format': img.format,
                    'mode': img.mode,
                    'rows': img.height,
                    'cols': img.width,
                }
        except _PIL_ERRORS as exc:
            raise DecodeError(
                f"Could not read image: {self.filepath} ({exc})"
            ) from exc

    def get_shape(self) -> Tuple[int, int]:
        return (self.metadata['rows'], self.metadata['cols'])

    def read_full(self) -> np.ndarray:
        """Decode the file and convert it to 8-bit luminance.

        Raises
        ------
        DecodeError
            If Pillow cannot decode the file.
        ResourceExhaustedError
            If the decoded buffer cannot be allocated.
        """
        try:
            with Image.open(self.filepath) as img:
                gray = img.convert(GRAYSCALE_MODE)
                data = np.array(gray, dtype=np.uint8)
        except MemoryError as exc:
            raise ResourceExhaustedError(
                f"Out of memory decoding image: {self.filepath}"
            ) from exc
        except _PIL_ERRORS as exc:
            raise DecodeError(
                f"Could not decode image: {self.filepath} ({exc})"
            ) from exc
        if data.ndim != 2 or data.size == 0:
            raise DecodeError(
                f"Decoded image has unusable shape {data.shape}: "
                f"{self.filepath}"
            )
        return data


class GrayscaleWriter(ImageWriter):
    """Encode a 2D ``uint8`` buffer to an image file.

    Parameters
    ----------
    filepath : str or Path
        Output file path. The suffix selects the format.
    metadata : Dict[str, Any], optional
        Writer bookkeeping; not embedded in the file.

    Examples
    --------
    >>> from denoiseprep.IO import GrayscaleWriter
    >>> with GrayscaleWriter('processed/0001.png') as writer:
    ...     writer.write(image)
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(filepath, metadata)
        suffix = self.filepath.suffix.lower()
        self.format = Image.registered_extensions().get(suffix, DEFAULT_FORMAT)

    def write(self, data: np.ndarray) -> None:
        """Write image data to file.

        Parameters
        ----------
        data : np.ndarray
            2D ``uint8`` array of shape ``(rows, cols)``.

        Raises
        ------
        ValidationError
            If *data* is not a 2D ``uint8`` array.
        EncodeError
            If Pillow cannot encode or write the file.
        """
        if not isinstance(data, np.ndarray) or data.ndim != 2:
            raise ValidationError(
                f"Expected 2D grayscale (rows, cols) array, got "
                f"{getattr(data, 'shape', type(data).__name__)}"
            )
        if data.dtype != np.uint8:
            raise ValidationError(f"Expected uint8 data, got {data.dtype}")

        try:
            img = Image.fromarray(np.ascontiguousarray(data))
            img.save(self.filepath, format=self.format)
        except (_PIL_ERRORS + (KeyError,)) as exc:
            raise EncodeError(
                f"Could not write image: {self.filepath} ({exc})"
            ) from exc
        logger.debug("Wrote %s %s image to %s",
                     data.shape, self.format, self.filepath)


def decode_image(path: Union[str, Path]) -> np.ndarray:
    """Decode *path* into a 2D ``uint8`` buffer.

    Raises
    ------
    DecodeError
        If the file is missing or cannot be decoded.
    """
    with GrayscaleReader(path) as reader:
        return reader.read_full()


def encode_image(path: Union[str, Path], data: np.ndarray) -> None:
    """Encode the 2D ``uint8`` buffer *data* to *path*.

    Raises
    ------
    EncodeError
        If the file cannot be written.
    """
    with GrayscaleWriter(path) as writer:
        writer.write(data)
