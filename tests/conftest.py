"""
Pytest configuration and common fixtures for freqmotif tests.
"""
import gzip
import sys
import tempfile
import textwrap
from pathlib import Path

import pytest

# Force testing the installed package, not the local source
project_root = str(Path(__file__).parent.parent.absolute())
if project_root in sys.path:
    sys.path.remove(project_root)


FAKE_SDUST = """
import sys

name = None
with open(sys.argv[1]) as handle:
    for line in handle:
        line = line.strip()
        if line.startswith(">"):
            name = line[1:]
        elif line and len(set(line)) == 1:
            print(f"{name}\\t1\\t{len(line)}")
"""

FAILING_TOOL = """
import sys

sys.stderr.write("tool exploded\\n")
sys.exit(3)
"""

FAKE_PLOTTER = """
import sys

csv_path, png_path, ratio = sys.argv[1:4]
with open(png_path, "w") as handle:
    handle.write(f"{csv_path} {ratio}\\n")
"""


def _write_fastq(path: Path, records, compress: bool = False) -> Path:
    lines = []
    for name, sequence in records:
        lines.extend([f"@{name}", sequence, "+", "I" * len(sequence)])
    text = "\n".join(lines) + "\n" if lines else ""
    if compress:
        with gzip.open(path, "wt") as handle:
            handle.write(text)
    else:
        path.write_text(text)
    return path


def _write_script(path: Path, source: str) -> tuple:
    path.write_text(textwrap.dedent(source))
    return (sys.executable, str(path))


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fastq_factory(temp_dir):
    """Return a function writing (name, sequence) records to a FASTQ file."""

    def factory(records, name="reads.fastq", compress=False):
        return _write_fastq(temp_dir / name, records, compress=compress)

    return factory


@pytest.fixture
def fake_sdust(temp_dir):
    """Masker stand-in reporting homopolymer reads as fully masked."""
    return _write_script(temp_dir / "fake_sdust.py", FAKE_SDUST)


@pytest.fixture
def failing_tool(temp_dir):
    """External tool stand-in that always exits with status 3."""
    return _write_script(temp_dir / "failing_tool.py", FAILING_TOOL)


@pytest.fixture
def fake_plotter(temp_dir):
    """Plotter stand-in writing its arguments to the output image path."""
    return _write_script(temp_dir / "fake_plotter.py", FAKE_PLOTTER)
