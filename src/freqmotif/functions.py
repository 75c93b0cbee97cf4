import itertools
from typing import Dict, FrozenSet

import numpy as np
from numba import njit

NUCLEOTIDES = "ATGC"
MOTIF_LENGTHS = (2, 3)

ALL_MOTIFS = tuple("".join(bases) for k in MOTIF_LENGTHS for bases in itertools.product(NUCLEOTIDES, repeat=k))

_ALPHABET = "ACGT"
_UNKNOWN = 4

_TRANS_TABLE = bytearray([_UNKNOWN] * 256)
for _char, _code in zip(b"ACGTacgt", [0, 1, 2, 3] * 2):
    _TRANS_TABLE[_char] = _code


def _decode_table(k):
    """Map base-5 window codes of length k back to motif strings."""
    letters = _ALPHABET + "N"
    return ["".join(letters[d] for d in digits) for digits in itertools.product(range(5), repeat=k)]


_DECODE = {k: _decode_table(k) for k in MOTIF_LENGTHS}
_VALID = {
    k: np.array([_UNKNOWN not in digits for digits in itertools.product(range(5), repeat=k)]) for k in MOTIF_LENGTHS
}


def encode_sequence(sequence: str) -> np.ndarray:
    """Integer-encode a nucleotide string (A, C, G, T -> 0..3, anything else -> 4)."""
    raw = sequence.encode("ascii", errors="replace")
    return np.frombuffer(raw.translate(_TRANS_TABLE), dtype=np.int8).copy()


@njit(cache=True)
def _count_windows(codes, k, size):
    """Count every overlapping window of length k as a base-5 code."""
    counts = np.zeros(size, dtype=np.int64)
    for i in range(codes.shape[0] - k + 1):
        idx = 0
        for j in range(k):
            idx = idx * 5 + codes[i + j]
        counts[idx] += 1
    return counts


def _window_counts(sequence: str) -> Dict[int, np.ndarray]:
    codes = encode_sequence(sequence)
    return {k: _count_windows(codes, k, 5**k) for k in MOTIF_LENGTHS if codes.shape[0] >= k}


def count_motifs(sequence: str) -> Dict[str, int]:
    """Return raw occurrence counts of every observed di- and trinucleotide window.

    Windows touching a character outside ``ACGT`` are reported with ``N`` in
    place of that character so that the totals still add up to ``L - 1`` and
    ``L - 2``.
    """
    frequencies = {}
    for k, counts in _window_counts(sequence).items():
        decode = _DECODE[k]
        for idx in np.flatnonzero(counts):
            frequencies[decode[idx]] = int(counts[idx])
    return frequencies


def motif_proportions(sequence: str) -> Dict[str, float]:
    """Within-read proportion of each observed motif of the fixed motif universe."""
    proportions = {}
    for k, counts in _window_counts(sequence).items():
        total = counts.sum()
        decode = _DECODE[k]
        for idx in np.flatnonzero(np.logical_and(counts > 0, _VALID[k])):
            proportions[decode[idx]] = counts[idx] / total
    return proportions


def motif_hits(sequence: str, threshold: float) -> FrozenSet[str]:
    """Return motifs whose within-read proportion is strictly greater than ``threshold``.

    Args:
        sequence: Read sequence, at least two characters long
        threshold: Proportion cutoff as a fraction

    Returns:
        Hit motifs; each one contributes a single vote for the read
    """
    return frozenset(motif for motif, proportion in motif_proportions(sequence).items() if proportion > threshold)
