from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO

import numpy as np
from PIL import Image

from plotpng.config import SUPPORTED_EXTENSIONS, RenderConfig
from plotpng.errors import ImageWriteError, UsageError
from plotpng.raster.canvas import check_canvas, new_canvas


LOGGER = logging.getLogger(__name__)


def image_format_for(path: str | Path) -> str:
    suffix = Path(path).suffix.lower()
    try:
        return SUPPORTED_EXTENSIONS[suffix]
    except KeyError:
        valid = ", ".join(f'"{ext}"' for ext in SUPPORTED_EXTENSIONS)
        raise UsageError(
            f"Invalid file name given: {str(path)!r}.\nValid file names require one of the {valid} extensions.\n"
            'e.g. "file.png" rather than "file"'
        ) from None


class ImageFileWriter:
    """Step-wise image writer: open, header, rows, trailer, close.

    Pixel data is buffered until ``write_trailer`` hands it to Pillow. A
    failed step leaves whatever was already written on disk.
    """

    def __init__(self, path: str | Path, image_format: str | None = None) -> None:
        self._path = Path(path)
        self._format = image_format if image_format is not None else image_format_for(self._path)
        self._fp: BinaryIO | None = None
        self._size: tuple[int, int] | None = None
        self._image: Image.Image | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def image_format(self) -> str:
        return self._format

    def open(self) -> None:
        if self._fp is not None:
            raise ImageWriteError(f"[write_image] {self._path} is already open")
        try:
            self._fp = self._path.open("wb")
        except OSError as exc:
            raise ImageWriteError(f"[write_image] File {self._path} could not be opened for writing: {exc}") from exc
        LOGGER.debug("opened %s for %s output", self._path, self._format)

    def write_header(self, width: int, height: int, bit_depth: int = 8, color_mode: str = "RGB") -> None:
        self._require_open("writing header")
        if width <= 0 or height <= 0:
            raise ImageWriteError(f"[write_image] invalid image size {width}x{height}")
        if bit_depth != 8 or color_mode != "RGB":
            raise ImageWriteError(f"[write_image] unsupported pixel format: {bit_depth}-bit {color_mode}")
        self._size = (width, height)

    def allocate_rows(self) -> np.ndarray:
        width, height = self._require_header("allocating rows")
        return new_canvas(width, height)

    def write_rows(self, rows: np.ndarray) -> None:
        expected = self._require_header("writing rows")
        try:
            actual = check_canvas(rows)
        except ValueError as exc:
            raise ImageWriteError(f"[write_image] {exc}") from exc
        if actual != expected:
            raise ImageWriteError(f"[write_image] rows are {actual[0]}x{actual[1]}, header says {expected[0]}x{expected[1]}")
        self._image = Image.fromarray(np.ascontiguousarray(rows))

    def write_trailer(self) -> None:
        fp = self._require_open("end of write")
        if self._image is None:
            raise ImageWriteError("[write_image] no rows written before end of write")
        try:
            self._image.save(fp, format=self._format)
            fp.flush()
        except (OSError, ValueError) as exc:
            raise ImageWriteError(f"[write_image] Error during end of write: {exc}") from exc

    def close(self) -> None:
        if self._fp is not None:
            self._fp.close()
            self._fp = None

    def _require_open(self, step: str) -> BinaryIO:
        if self._fp is None:
            raise ImageWriteError(f"[write_image] Error during {step}: file not open")
        return self._fp

    def _require_header(self, step: str) -> tuple[int, int]:
        self._require_open(step)
        if self._size is None:
            raise ImageWriteError(f"[write_image] Error during {step}: header not written")
        return self._size


def write_image(path: str | Path, canvas: np.ndarray, config: RenderConfig | None = None) -> Path:
    cfg = config if config is not None else RenderConfig()
    width, height = check_canvas(canvas)
    writer = ImageFileWriter(path)
    try:
        writer.open()
        writer.write_header(width, height, bit_depth=cfg.bit_depth, color_mode=cfg.color_mode)
        writer.write_rows(canvas)
        writer.write_trailer()
    finally:
        writer.close()
    return writer.path
