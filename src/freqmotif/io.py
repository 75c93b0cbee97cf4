from __future__ import annotations

import gzip
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterator, Optional, TextIO

import pandas as pd

LINES_PER_RECORD = 4


@dataclass(frozen=True)
class Read:
    """A single sequencing read."""

    name: str
    sequence: str

    @property
    def length(self) -> int:
        return len(self.sequence)


def open_text(path: str | Path) -> TextIO:
    """Open a plain or gzip-compressed text file for reading."""
    if str(path).endswith(".gz"):
        return gzip.open(path, "rt")
    return open(path, "r")


def _skip_records(handle: IO[str], count: int) -> None:
    for _ in range(count * LINES_PER_RECORD):
        if not handle.readline():
            return


def read_fastq(path: str | Path, skip: int = 0, max_reads: Optional[int] = None) -> Iterator[Read]:
    """
    Lazily read (identifier, sequence) pairs from a FASTQ file.

    The first ``skip`` records are discarded without looking at them. Records
    whose sequence is shorter than two characters are dropped and do not count
    toward ``max_reads``. The identifier is the header line without its
    leading ``@``.

    Args:
        path: FASTQ file, optionally gzip-compressed (``.gz``)
        skip: Number of leading records to discard
        max_reads: Maximum number of valid reads to yield, ``None`` for all

    Yields:
        Read objects in file order
    """
    logger = logging.getLogger(__name__)
    produced = 0

    with open_text(path) as handle:
        logger.debug(f"Skipping the first {skip} reads")
        _skip_records(handle, skip)

        while max_reads is None or produced < max_reads:
            header = handle.readline()
            sequence = handle.readline()
            if not header or not sequence:
                break
            handle.readline()  # separator
            handle.readline()  # quality

            sequence = sequence.strip()
            if len(sequence) < 2:
                continue

            produced += 1
            yield Read(name=header.rstrip("\r\n")[1:], sequence=sequence)


def write_fasta_record(handle: IO[str], read: Read) -> None:
    """Append one read to an open FASTA handle."""
    handle.write(f">{read.name}\n")
    handle.write(f"{read.sequence}\n")


def write_results(table: pd.DataFrame, path: str | Path) -> None:
    """Write the ranked result table as ``Motif,Proportion`` CSV with four decimals."""
    table.to_csv(path, index=False, float_format="%.4f", encoding="utf-8", lineterminator="\n")


def read_results(path: str | Path) -> pd.DataFrame:
    """Read a result table written by :func:`write_results`."""
    return pd.read_csv(path, dtype={"Motif": str, "Proportion": float}, keep_default_na=False)
