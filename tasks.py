"""
Developer task runner using Invoke.
Run `inv --list` to see tasks.

Key tasks:
  inv ocr --input <screenshot>
  inv parse --input data/interim/ocr_text/<name>.txt [--multi]
  inv scan --input <screenshot|txt> [--multi] [--save]
  inv test
  inv clean
"""

from invoke import task
from pathlib import Path
import shutil
import sys


REPO = Path(__file__).parent
OCRDIR = REPO / "data" / "interim" / "ocr_text"


def _python():
    """Return the python executable inside the current venv."""
    return sys.executable or "python"


@task(
    help={
        "input": "Path to a screenshot",
        "outdir": "Where to write recognized lines (default: data/interim/ocr_text)",
        "lang": "EasyOCR languages, space-separated (default: en)",
        "gpu": "Use GPU for OCR if CUDA available",
        "min_conf": "Min confidence to keep a span (default: 0.4)",
    }
)
def ocr(c, input, outdir=str(OCRDIR), lang="en", gpu=False, min_conf=0.4):
    """Run OCR on one screenshot and save its lines."""
    args = [
        "-m",
        "ocr.reader",
        "--input",
        f'"{input}"',
        "--outdir",
        f'"{outdir}"',
        "--lang",
        *lang.split(),
        "--min_conf",
        str(min_conf),
    ]
    if gpu:
        args.append("--gpu")
    c.run(f'"{_python()}" ' + " ".join(args), pty=False)


@task(
    help={
        "input": "Path to a .txt file of recognized lines",
        "multi": "Detect every card on an account-list screenshot",
    }
)
def parse(c, input, multi=False):
    """Extract card fields from recognized lines into JSON."""
    flag = " --multi" if multi else ""
    c.run(f'"{_python()}" -m parser.extractor --input "{input}"{flag}', pty=False)


@task(
    help={
        "input": "Screenshot or .txt file of recognized lines",
        "multi": "Detect every card on an account-list screenshot",
        "save": "Save detected cards to the collection",
    }
)
def scan(c, input, multi=False, save=False):
    """Run OCR -> parse (-> save) through the CLI."""
    args = ["-m", "cli.bestcard", "scan", f'"{input}"']
    if multi:
        args.append("--multi")
    if save:
        args.append("--save")
    c.run(f'"{_python()}" ' + " ".join(args), pty=False)


@task
def test(c):
    """Run unit tests with pytest."""
    c.run(f'"{_python()}" -m pytest -q', pty=False)


@task
def clean(c):
    """Delete interim OCR output."""
    if OCRDIR.exists():
        shutil.rmtree(OCRDIR)
        print(f"Removed {OCRDIR}")
    OCRDIR.mkdir(parents=True, exist_ok=True)
