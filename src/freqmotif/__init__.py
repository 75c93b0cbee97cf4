"""
freqmotif
==================

This package computes per-motif prevalence statistics across a collection
of short sequencing reads.  Two signals are combined: the over-representation
of dinucleotide and trinucleotide motifs within each read, and the
low-complexity masking coverage of each read reported by an external
masker such as ``sdust``.  The result is a ranked table of motif names and
the percentage of reads in which they cross a proportion threshold.

The top level modules expose the following key components:

``io``
    Lazy FASTQ reading with skip/limit semantics, the intermediate FASTA
    writer and the result table reader/writer.

``functions``
    Sliding-window motif counting and the per-read threshold test.

``aggregate``
    Population vote table and the merge of the masking report with the
    read length table.

``ranking``
    Construction of the zero-filled, sorted result table.

``execute``
    Wrappers around the external masking and plotting tools.

``pipeline``
    The sequential run orchestrator and its output workspace.

``plot``
    The default barplot renderer.

``cli``
    The command line interface exposing the pipeline to end users.
"""

from freqmotif.api import AnalysisConfig, analyze_fastq, create_config, run_analysis
from freqmotif.pipeline import AnalysisResult

__all__ = ["AnalysisConfig", "AnalysisResult", "analyze_fastq", "create_config", "run_analysis"]
