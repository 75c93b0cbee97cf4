"""High-level public API for motif prevalence analysis."""

import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

from freqmotif.execute import PLOT_COMMAND, SDUST_COMMAND
from freqmotif.pipeline import AnalysisResult, run_pipeline, validate_parameters

PathLike = Union[str, Path]
CommandRef = Union[str, Sequence[str]]


@dataclass
class AnalysisConfig:
    """Unified configuration object for library usage."""

    input_path: PathLike
    output_dir: Optional[PathLike] = None
    max_reads: int = 100_000
    ratio: float = 50.0
    skip: int = 10_000
    sdust_command: Tuple[str, ...] = field(default=SDUST_COMMAND)
    plot_command: Optional[Tuple[str, ...]] = field(default=PLOT_COMMAND)
    keep_fasta: bool = False

    @property
    def threshold(self) -> float:
        """Proportion threshold as a fraction."""
        return self.ratio / 100.0


def create_config(
    input_path: PathLike,
    output_dir: Optional[PathLike] = None,
    max_reads: int = 100_000,
    ratio: float = 50.0,
    skip: int = 10_000,
    sdust_command: CommandRef = SDUST_COMMAND,
    plot_command: Optional[CommandRef] = PLOT_COMMAND,
    keep_fasta: bool = False,
) -> AnalysisConfig:
    """Build a validated analysis config."""

    validate_parameters(max_reads, ratio, skip)

    return AnalysisConfig(
        input_path=input_path,
        output_dir=output_dir,
        max_reads=max_reads,
        ratio=ratio,
        skip=skip,
        sdust_command=_normalize_command(sdust_command),
        plot_command=_normalize_command(plot_command) if plot_command is not None else None,
        keep_fasta=keep_fasta,
    )


def analyze_fastq(input_path: PathLike, **kwargs) -> AnalysisResult:
    """Single-call entry point for motif prevalence analysis."""

    return run_analysis(create_config(input_path, **kwargs))


def run_analysis(config: AnalysisConfig) -> AnalysisResult:
    """Execute an analysis using the unified config."""

    return run_pipeline(
        input_path=config.input_path,
        output_dir=config.output_dir,
        max_reads=config.max_reads,
        ratio=config.ratio,
        skip=config.skip,
        sdust_command=config.sdust_command,
        plot_command=config.plot_command,
        keep_fasta=config.keep_fasta,
    )


def _normalize_command(command: CommandRef) -> Tuple[str, ...]:
    """Split a shell-like command string into an argument vector."""

    if isinstance(command, str):
        args = tuple(shlex.split(command))
    else:
        args = tuple(str(arg) for arg in command)
    if not args:
        raise ValueError("External command must not be empty.")
    return args
