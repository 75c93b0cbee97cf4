import logging
import subprocess
from pathlib import Path
from typing import Sequence, Union

PathLike = Union[str, Path]

SDUST_COMMAND = ("sdust",)
PLOT_COMMAND = ("freq-motif-barplot",)


class ExternalToolError(RuntimeError):
    """Raised when an external tool cannot be started or exits with a non-zero status."""


def _run(tool: str, args: Sequence[str]) -> subprocess.CompletedProcess:
    logger = logging.getLogger(__name__)
    logger.debug(" ".join(args))
    try:
        result = subprocess.run(args, shell=False, capture_output=True, text=True)
    except OSError as e:
        raise ExternalToolError(f"Failed to execute {tool} ({args[0]}): {e}") from e
    logger.debug(result.stderr)
    if result.returncode != 0:
        raise ExternalToolError(
            f"{tool} execution failed with exit status {result.returncode}: {result.stderr.strip()}"
        )
    return result


def run_sdust(fasta_path: PathLike, command: Sequence[str] = SDUST_COMMAND) -> str:
    """Run the low-complexity masker on a FASTA file and return its interval report."""
    args = [*command, str(fasta_path)]
    return _run("SDUST", args).stdout


def run_plotter(
    csv_path: PathLike, png_path: PathLike, ratio: float, command: Sequence[str] = PLOT_COMMAND
) -> None:
    """Render the result table to a bar plot with an external plotting command."""
    args = [*command, str(csv_path), str(png_path), f"{ratio}"]
    _run("Plotter", args)
