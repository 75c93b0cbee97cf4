import argparse
import logging
import os
import sys
from typing import Any, Dict

from freqmotif.api import create_config, run_analysis


def setup_logging(verbose: bool):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    if verbose:
        logging.getLogger("numba").setLevel(logging.WARNING)
        logging.getLogger("matplotlib").setLevel(logging.WARNING)


def create_arg_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        description=(
            "freq-motif: Analyze FASTQ files (including gzip) and generate statistics "
            "on motifs and low-complexity bases"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
 Examples:
   # Default run: skip 10000 reads, analyse the next 100000 at a 50% cutoff
   freq-motif -i reads.fastq.gz

   # Custom cutoff and output directory
   freq-motif -i reads.fastq -o results -r 30 -m 50000 -S 0

   # Use the original R script for the barplot
   freq-motif -i reads.fastq --plotter "Rscript generate_barplot.R"
         """,
    )

    io_group = parser.add_argument_group("Input/Output Options")
    io_group.add_argument("-i", "--input", required=True, help="Input FASTQ file (supports gzip).")
    io_group.add_argument(
        "-o",
        "--output-dir",
        help="Output directory to save results. (default: unique directory in current directory)",
    )
    io_group.add_argument(
        "--keep-fasta",
        action="store_true",
        help="Keep the intermediate FASTA file passed to the masking tool.",
    )

    analysis_group = parser.add_argument_group("Analysis Options")
    analysis_group.add_argument(
        "-m",
        "--max-reads",
        type=int,
        default=100_000,
        help="Maximum number of reads to analyze. (default: %(default)s)",
    )
    analysis_group.add_argument(
        "-r",
        "--ratio",
        type=float,
        default=50.0,
        help="Minimum proportion to consider, in percentage, strictly between 0 and 100. (default: %(default)s)",
    )
    analysis_group.add_argument(
        "-S",
        "--skip",
        type=int,
        default=10_000,
        help="Number of initial reads to skip. (default: %(default)s)",
    )

    tools_group = parser.add_argument_group("External Tools")
    tools_group.add_argument(
        "--sdust",
        default="sdust",
        help="Command used to mask low-complexity regions. (default: %(default)s)",
    )
    tools_group.add_argument(
        "--plotter",
        default="freq-motif-barplot",
        help="Command used to render the barplot from the result table. (default: %(default)s)",
    )
    tools_group.add_argument("--no-plot", action="store_true", help="Do not render the barplot.")

    technical_group = parser.add_argument_group("Technical Options")
    technical_group.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging for detailed execution tracking.",
    )

    return parser


def validate_inputs(args) -> None:
    """Validate input files."""
    logger = logging.getLogger(__name__)
    if not os.path.exists(args.input):
        logger.error(f"FASTQ file not found: {args.input}")
        sys.exit(1)


def map_args_to_config_kwargs(args) -> Dict[str, Any]:
    """Map CLI arguments to analysis config keyword arguments."""
    return {
        "output_dir": args.output_dir,
        "max_reads": args.max_reads,
        "ratio": args.ratio,
        "skip": args.skip,
        "sdust_command": args.sdust,
        "plot_command": None if args.no_plot else args.plotter,
        "keep_fasta": args.keep_fasta,
    }


def main_cli():
    """Main CLI entry point."""
    parser = create_arg_parser()

    if len(sys.argv) == 1:
        parser.print_help(sys.stderr)
        sys.exit(1)

    args = parser.parse_args()

    setup_logging(args.verbose)

    validate_inputs(args)

    logger = logging.getLogger(__name__)
    if args.verbose:
        logger.info("=" * 60)
        logger.info("freq-motif")
        logger.info("=" * 60)
        logger.info(f"Input: {args.input}")
        logger.info(f"Max reads: {args.max_reads}")
        logger.info(f"Ratio: {args.ratio}%")
        logger.info(f"Skip: {args.skip}")
        logger.info("=" * 60)

    try:
        config = create_config(args.input, **map_args_to_config_kwargs(args))
        result = run_analysis(config)
    except Exception as e:
        print(f"ERROR: Pipeline execution failed: {e}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    logger.info(f"Results saved to '{result.csv_path}'")
    if result.plot_path is not None:
        logger.info(f"Barplot saved to '{result.plot_path}'")


if __name__ == "__main__":
    main_cli()
