"""
Command-line programs for corpusmi.

Programs:
    compute-mi: Score tuples read one per line from a file or stdin
    construct-vocab: Build a sorted vocabulary of a three-column file

Example:
    Normalized PMI of word pairs occurring at least 5 times::

        $ compute-mi -f 5 2 pairs.txt pairs.mi

    Positive PMI of triples with add-one smoothing::

        $ compute-mi -m psc -s laplace -a 1 3 triples.txt

.. codeauthor:: corpusmi contributors
"""

import argparse
import math
import sys
from contextlib import contextmanager
from typing import List, Optional

from .collector import TupleCollector
from .config import CONFIG
from .corpus_utils import (
    build_vocabulary,
    open_output,
    open_text,
    read_tuples,
    write_vocabulary,
)
from .measures import MEASURE_TYPES, SMOOTHING_TYPES, make_measure
from .performance import PerformanceMonitor
from .symbols import SymbolTable
from .validation import CorpusMIError, validate_arity


@contextmanager
def exit_on_error(message: str):
    """
    Report package and I/O errors as ``message: error`` and exit with
    status 1.

    :param message: What was being attempted
    """
    try:
        yield
    except (CorpusMIError, OSError) as e:
        print(f"{message}: {e}", file=sys.stderr)
        sys.exit(1)


def _format_score(score: float) -> str:
    # Undefined scores are written as NaN, matching earlier mi files.
    if math.isnan(score):
        return "NaN"
    return str(float(score))


def _compute_mi_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="compute-mi",
        description="Compute mutual information of tuples, one tuple per line.",
    )
    parser.add_argument("vars", type=int, metavar="VARS",
                        help="number of symbols per tuple (2 or 3)")
    parser.add_argument("input", nargs="?", default=None, metavar="INPUT",
                        help="input file, standard input if absent or '-'")
    parser.add_argument("output", nargs="?", default=None, metavar="OUTPUT",
                        help="output file, standard output if absent or '-'")
    parser.add_argument("-f", "--freq", type=int, default=CONFIG.DEFAULT_MIN_FREQ,
                        metavar="N", help="minimum frequency cut-off")
    parser.add_argument("-m", "--measure", choices=MEASURE_TYPES,
                        default=CONFIG.DEFAULT_MEASURE,
                        help="association measure (default: %(default)s)")
    parser.add_argument("-s", "--smoothing", choices=SMOOTHING_TYPES,
                        default=CONFIG.DEFAULT_SMOOTHING,
                        help="probability smoothing (default: %(default)s)")
    parser.add_argument("-a", "--alpha", type=float,
                        default=CONFIG.DEFAULT_LAPLACE_ALPHA,
                        help="Laplace smoothing pseudo-count (default: %(default)s)")
    parser.add_argument("-z", "--gzip", action="store_true",
                        help="read gzipped input")
    parser.add_argument("-p", "--progress", action="store_true",
                        help="report counting progress on standard error")
    return parser


def compute_mi_main(argv: Optional[List[str]] = None) -> int:
    """Entry point of the compute-mi program."""
    args = _compute_mi_parser().parse_args(argv)

    with exit_on_error("Invalid arguments"):
        validate_arity(args.vars, "in compute-mi")
        measure = make_measure(args.measure, args.smoothing, args.alpha)

    symbols = SymbolTable()
    collector = TupleCollector(args.vars)

    with exit_on_error("Cannot read input"):
        with open_text(args.input, compressed=args.gzip) as f:
            collector.count_all(
                read_tuples(f, symbols), show_progress=args.progress or None
            )

    with exit_on_error("Cannot write output"):
        with open_output(args.output) as out, PerformanceMonitor("Scoring tuples"):
            for tup, freq, score in collector.iterate(measure):
                if freq >= args.freq:
                    words = " ".join(symbols.resolve(v) for v in tup)
                    out.write(f"{words} {_format_score(score)}\n")

    return 0


def _construct_vocab_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="construct-vocab",
        description="Construct a sorted vocabulary from a three-column file.",
    )
    parser.add_argument("input", metavar="INPUT", help="input file")
    parser.add_argument("vocab_out", metavar="VOCAB_OUT",
                        help="output vocabulary (parquet)")
    parser.add_argument("-z", "--gzip", action="store_true",
                        help="read gzipped input")
    return parser


def construct_vocab_main(argv: Optional[List[str]] = None) -> int:
    """Entry point of the construct-vocab program."""
    args = _construct_vocab_parser().parse_args(argv)

    with exit_on_error("Cannot read input"):
        with open_text(args.input, compressed=args.gzip) as f:
            vocab = build_vocabulary(f, CONFIG.VOCAB_COLUMNS)

    with exit_on_error("Cannot write vocabulary"):
        write_vocabulary(vocab, args.vocab_out)

    return 0
