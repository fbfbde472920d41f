"""
Misc. utility functions for reading corpora and vocabularies.

.. codeauthor:: corpusmi contributors
"""

import gzip
import io
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple, Union

import polars as pl

from .config import PATTERNS, CONFIG
from .symbols import SymbolTable
from .validation import DataFormatError, validate_input_path


def _is_stdio(path) -> bool:
    return path is None or str(path) == "-"


@contextmanager
def open_text(path: Optional[Union[str, Path]] = None,
              compressed: bool = False) -> Iterator[io.TextIOBase]:
    """
    Open a text file for reading.

    :param path: A path to a text file. None or '-' reads standard input.
    :param compressed: Whether the file is gzip-compressed.
    :return: A context manager yielding a text stream.
    """
    if _is_stdio(path):
        if compressed:
            with gzip.open(sys.stdin.buffer, "rt", encoding="utf-8") as f:
                yield f
        else:
            yield sys.stdin
        return

    path = validate_input_path(path, "in open_text")
    if compressed:
        with gzip.open(path, "rt", encoding="utf-8") as f:
            yield f
    else:
        with open(path, "r", encoding="utf-8") as f:
            yield f


@contextmanager
def open_output(path: Optional[Union[str, Path]] = None) -> Iterator[io.TextIOBase]:
    """
    Open a text file for writing.

    :param path: A path to a text file. None or '-' writes standard output.
    :return: A context manager yielding a text stream.
    """
    if _is_stdio(path):
        yield sys.stdout
        sys.stdout.flush()
        return

    with open(path, "w", encoding="utf-8") as f:
        yield f


def split_fields(line: str) -> list:
    """
    Split a line into whitespace-separated fields.

    :param line: A line of text.
    :return: The non-empty fields of the line.
    """
    return [field for field in PATTERNS.WHITESPACE.split(line.strip()) if field]


def read_tuples(lines: Iterable[str],
                symbols: SymbolTable) -> Iterator[Tuple[int, ...]]:
    """
    Read one tuple per line, interning every field.

    Blank lines are skipped. The length of each tuple is not checked here;
    collectors reject tuples that do not match their arity.

    :param lines: Lines of whitespace-separated symbols.
    :param symbols: The table used to intern symbols.
    :return: An iterator of tuples of symbol identifiers.
    """
    for line in lines:
        fields = split_fields(line)
        if not fields:
            continue
        yield tuple(symbols.intern(field) for field in fields)


def build_vocabulary(lines: Iterable[str],
                     n_columns: int = CONFIG.VOCAB_COLUMNS) -> pl.DataFrame:
    """
    Build a sorted vocabulary from lines with a fixed number of columns.

    Identifiers are assigned in sorted order of the symbols, so that the
    vocabulary of a corpus does not depend on the order of its lines.

    :param lines: Lines of whitespace-separated symbols.
    :param n_columns: The number of fields every line must have.
    :return: A polars DataFrame with 'symbol' and 'id' columns.
    """
    vocab = set()

    for lineno, line in enumerate(lines, start=1):
        fields = split_fields(line)
        if len(fields) != n_columns:
            raise DataFormatError(
                f"Line {lineno} does not have {n_columns} columns: "
                f"{line.rstrip()}"
            )
        vocab.update(fields)

    df = (
        pl.DataFrame({"symbol": sorted(vocab)}, schema={"symbol": pl.String})
        .with_row_index("id")
        .select(["symbol", "id"])
    )
    return df


def write_vocabulary(vocab: pl.DataFrame, path: Union[str, Path]) -> None:
    """
    Write a vocabulary to a parquet file.

    :param vocab: A DataFrame produced by build_vocabulary.
    :param path: The output path.
    """
    if vocab.columns != ["symbol", "id"]:
        raise DataFormatError("""
                        Invalid DataFrame.
                        Expected a DataFrame produced by build_vocabulary.
                        """)
    vocab.write_parquet(path)


def read_vocabulary(path: Union[str, Path]) -> pl.DataFrame:
    """
    Read a vocabulary written by write_vocabulary.

    :param path: A path to a parquet file.
    :return: A polars DataFrame with 'symbol' and 'id' columns.
    """
    path = validate_input_path(path, "in read_vocabulary")
    return pl.read_parquet(path)
