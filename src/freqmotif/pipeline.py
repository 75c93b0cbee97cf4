"""
Motif prevalence pipeline.
This module runs the sequential stages of an analysis: read scanning, low-complexity masking, ranking and plotting.
"""

import contextlib
import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, Optional, Sequence, Tuple, Union

import pandas as pd

from freqmotif.aggregate import MotifVoteTable, count_low_complexity, parse_mask_report, percentage
from freqmotif.execute import PLOT_COMMAND, SDUST_COMMAND, run_plotter, run_sdust
from freqmotif.functions import motif_hits
from freqmotif.io import read_fastq, write_fasta_record, write_results
from freqmotif.ranking import build_result_table

PathLike = Union[str, Path]

PROGRESS_INTERVAL = 10_000


@dataclass
class RunWorkspace:
    """Output locations of a single run."""

    output_dir: Path
    fasta_path: Path
    csv_path: Path
    plot_path: Path

    @classmethod
    def in_directory(cls, output_dir: PathLike) -> "RunWorkspace":
        output_dir = Path(output_dir)
        return cls(
            output_dir=output_dir,
            fasta_path=output_dir / "temp.fasta",
            csv_path=output_dir / "freq-motif.csv",
            plot_path=output_dir / "barplot_freq-motif.png",
        )


@contextlib.contextmanager
def open_workspace(output_dir: Optional[PathLike] = None, keep_fasta: bool = False) -> Iterator[RunWorkspace]:
    """
    Create the output directory of a run and remove the intermediate FASTA on exit.

    Without ``output_dir`` a unique ``freq_motif_<uuid>`` directory is created
    in the current working directory. Cleanup also happens when the run fails.
    """
    logger = logging.getLogger(__name__)
    if output_dir is None:
        output_dir = Path.cwd() / f"freq_motif_{uuid.uuid4()}"
    workspace = RunWorkspace.in_directory(output_dir)
    workspace.output_dir.mkdir(parents=True, exist_ok=True)
    try:
        yield workspace
    finally:
        if not keep_fasta and workspace.fasta_path.exists():
            logger.info("Cleaning up temporary files...")
            workspace.fasta_path.unlink()


@dataclass
class AnalysisResult:
    """Outcome of a pipeline run."""

    total_reads: int
    low_complexity_reads: int
    votes: Dict[str, int]
    table: pd.DataFrame
    workspace: RunWorkspace
    plot_path: Optional[Path] = None
    lengths: Dict[str, int] = field(default_factory=dict, repr=False)

    @property
    def csv_path(self) -> Path:
        return self.workspace.csv_path


def validate_parameters(max_reads: int, ratio: float, skip: int) -> None:
    """Check the numeric run parameters."""
    if not 0.0 < ratio < 100.0:
        raise ValueError(f"ratio must be a percentage strictly between 0 and 100, got {ratio}")
    if max_reads < 0:
        raise ValueError(f"max_reads must be non-negative, got {max_reads}")
    if skip < 0:
        raise ValueError(f"skip must be non-negative, got {skip}")


class Pipeline:
    """
    Sequential motif prevalence pipeline.

    Reads are scanned one at a time: each read is analysed, voted and written
    to the intermediate FASTA before the next is read. The masking tool runs
    only once the FASTA is complete.
    """

    def __init__(self, workspace: RunWorkspace, threshold: float):
        self.logger = logging.getLogger(__name__)
        self.workspace = workspace
        self.threshold = threshold

    def scan_reads(
        self, input_path: PathLike, max_reads: int, skip: int
    ) -> Tuple[MotifVoteTable, Dict[str, int]]:
        """
        Count motif votes over the input reads and write them to the intermediate FASTA.

        Returns:
            The vote table and the read length table
        """
        votes = MotifVoteTable()
        lengths: Dict[str, int] = {}

        self.logger.info(f"Opening the input file: {input_path}")
        self.logger.info(f"Skipping the first {skip} reads...")
        with open(self.workspace.fasta_path, "w") as fasta:
            for read in read_fastq(input_path, skip=skip, max_reads=max_reads):
                write_fasta_record(fasta, read)
                lengths[read.name] = read.length
                votes.add(motif_hits(read.sequence, self.threshold))

                if votes.total_reads % PROGRESS_INTERVAL == 0:
                    self.logger.info(f"Processed {votes.total_reads} reads...")

        self.logger.info(f"Total reads processed: {votes.total_reads}")
        return votes, lengths

    def mask_low_complexity(self, lengths: Dict[str, int], command: Sequence[str] = SDUST_COMMAND) -> int:
        """Run the masking tool on the intermediate FASTA and count low-complexity reads."""
        self.logger.info("Running SDUST...")
        report = run_sdust(self.workspace.fasta_path, command=command)
        masked = parse_mask_report(report)
        return count_low_complexity(masked, lengths, self.threshold)

    def rank(self, votes: MotifVoteTable, low_complexity_reads: int) -> pd.DataFrame:
        """Build the sorted result table."""
        self.logger.info("Sorting results...")
        low_complexity = percentage(low_complexity_reads, votes.total_reads)
        return build_result_table(votes.percentages(), low_complexity)

    def write(self, table: pd.DataFrame) -> Path:
        self.logger.info(f"Saving results to CSV: {self.workspace.csv_path}")
        write_results(table, self.workspace.csv_path)
        return self.workspace.csv_path

    def plot(self, ratio: float, command: Sequence[str] = PLOT_COMMAND) -> Path:
        self.logger.info("Running the barplot script...")
        run_plotter(self.workspace.csv_path, self.workspace.plot_path, ratio, command=command)
        return self.workspace.plot_path


def run_pipeline(
    input_path: PathLike,
    output_dir: Optional[PathLike] = None,
    max_reads: int = 100_000,
    ratio: float = 50.0,
    skip: int = 10_000,
    sdust_command: Sequence[str] = SDUST_COMMAND,
    plot_command: Optional[Sequence[str]] = PLOT_COMMAND,
    keep_fasta: bool = False,
) -> AnalysisResult:
    """
    Run a complete analysis of a FASTQ file.

    Args:
        input_path: FASTQ input, optionally gzip-compressed
        output_dir: Directory for the results, a unique one is created if omitted
        max_reads: Maximum number of reads to analyse
        ratio: Minimum proportion, in percent, for a motif or masked span to count
        skip: Number of leading reads to skip
        sdust_command: Command line of the low-complexity masker
        plot_command: Command line of the plotting tool, ``None`` to skip plotting
        keep_fasta: Keep the intermediate FASTA file

    Returns:
        AnalysisResult with the ranked table and output paths
    """
    validate_parameters(max_reads, ratio, skip)
    if not Path(input_path).exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    with open_workspace(output_dir, keep_fasta=keep_fasta) as workspace:
        pipeline = Pipeline(workspace, threshold=ratio / 100.0)

        votes, lengths = pipeline.scan_reads(input_path, max_reads=max_reads, skip=skip)
        low_complexity_reads = pipeline.mask_low_complexity(lengths, command=sdust_command)
        table = pipeline.rank(votes, low_complexity_reads)
        pipeline.write(table)

        plot_path = None
        if plot_command is not None:
            plot_path = pipeline.plot(ratio, command=plot_command)

    pipeline.logger.info(f"Analysis completed successfully. Results saved to '{workspace.output_dir}'.")
    return AnalysisResult(
        total_reads=votes.total_reads,
        low_complexity_reads=low_complexity_reads,
        votes=dict(votes.votes),
        table=table,
        workspace=workspace,
        plot_path=plot_path,
        lengths=lengths,
    )
