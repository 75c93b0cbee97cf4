"""
aggregate
=========

Population level aggregation of per-read signals: motif votes collected
from the in-process motif engine, and low-complexity coverage merged from
the interval report of an external masking tool.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from typing import Dict, Iterable, Mapping


class MaskReportError(ValueError):
    """Raised when a masking report line carries invalid interval offsets."""


_OFFSET = re.compile(r"\+?[0-9]+")


def percentage(count: int, total: int) -> float:
    """Return ``count / total * 100``; a run without reads yields 0."""
    if total == 0:
        return 0.0
    return count / total * 100.0


class MotifVoteTable:
    """
    Number of reads in which each motif crossed the proportion threshold.

    Every call to :meth:`add` accounts for exactly one read, so a vote count
    can never exceed :attr:`total_reads`.
    """

    def __init__(self):
        self.votes: Counter = Counter()
        self.total_reads = 0

    def add(self, hits: Iterable[str]) -> None:
        """Register one read and one vote for each distinct motif in ``hits``."""
        self.total_reads += 1
        self.votes.update(set(hits))

    def percentages(self) -> Dict[str, float]:
        """Convert vote counts to the percentage of processed reads."""
        return {motif: percentage(count, self.total_reads) for motif, count in self.votes.items()}


def parse_mask_report(text: str) -> Dict[str, int]:
    """
    Sum masked bases per read from an interval report.

    Each line is expected to hold ``<read> <start> <end>`` with 1-based
    inclusive offsets. Lines with a different number of tokens are ignored.
    Intervals of the same read are summed without merging overlaps.

    Raises:
        MaskReportError: if start or end is not a non-negative integer, or the interval is negative
    """
    masked: Dict[str, int] = {}
    for line_number, line in enumerate(text.splitlines(), start=1):
        parts = line.split()
        if len(parts) != 3:
            continue
        name, start, end = parts
        if not (_OFFSET.fullmatch(start) and _OFFSET.fullmatch(end)):
            raise MaskReportError(f"Invalid interval on line {line_number}: {line!r}")
        length = int(end) - int(start) + 1
        if length < 0:
            raise MaskReportError(f"Interval end precedes start on line {line_number}: {line!r}")
        masked[name] = masked.get(name, 0) + length
    return masked


def count_low_complexity(masked: Mapping[str, int], lengths: Mapping[str, int], threshold: float) -> int:
    """Count reads whose masked fraction is strictly greater than ``threshold``."""
    logger = logging.getLogger(__name__)
    low_complexity = 0
    for name, masked_bases in masked.items():
        length = lengths.get(name)
        if length is None:
            logger.debug(f"Masked read {name!r} has no recorded length, ignored")
            continue
        if masked_bases / length > threshold:
            low_complexity += 1
    return low_complexity
