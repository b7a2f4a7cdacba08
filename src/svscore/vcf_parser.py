"""Streaming reader for annotated SV VCF text."""

import gzip
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import IO, Literal

from .errors import InputFileError
from .models import VariantRecord

logger = logging.getLogger(__name__)

COMPRESSED_SUFFIXES = (".gz", ".bgz")

ReaderEvent = tuple[Literal["header"], str] | tuple[Literal["record"], VariantRecord]


def open_text(path: Path | str) -> IO[str]:
    """Open a plain or gzip-compressed text file for reading.

    Raises:
        InputFileError: If the file is missing or cannot be read.
    """
    path = Path(path)
    compressed = path.name.endswith(COMPRESSED_SUFFIXES)
    try:
        if compressed:
            return gzip.open(path, "rt", encoding="utf-8")
        return open(path, encoding="utf-8")
    except OSError as e:
        raise InputFileError(f"Could not open {path}: {e}") from e


def is_header(line: str) -> bool:
    return line.startswith("#")


class VCFRecordReader:
    """Iterate over header lines and parsed records of a VCF stream.

    Header lines are yielded unchanged (newline included). Data lines are
    parsed into VariantRecord objects numbered from 1; header lines do not
    advance the numbering.
    """

    def __init__(self, lines: Iterable[str]):
        self._lines = lines
        self.variants_read = 0

    def __iter__(self) -> Iterator[ReaderEvent]:
        for line in self._checked_lines():
            if is_header(line):
                yield "header", line if line.endswith("\n") else line + "\n"
                continue
            if not line.strip():
                continue
            self.variants_read += 1
            yield "record", VariantRecord.from_line(line, self.variants_read)

    def _checked_lines(self) -> Iterator[str]:
        lines = iter(self._lines)
        while True:
            try:
                line = next(lines)
            except StopIteration:
                return
            except (UnicodeDecodeError, OSError, EOFError) as e:
                raise InputFileError(
                    f"Could not decode VCF input after variant {self.variants_read}: {e}"
                ) from e
            yield line

    def records(self) -> Iterator[VariantRecord]:
        """Iterate over data records only, dropping headers."""
        for kind, item in self:
            if kind == "record":
                yield item
