"""
Functions for turning counted tuples into association tables.

This module provides the main table-producing API, serving as convenient
wrappers around :class:`AssociationAnalyzer`. Results are polars
DataFrames (or scipy sparse matrices for pairs) ready for filtering,
joining and export.

Main Functions:
    collect: Count tuples of tokens, interning them on the way
    mi_table: Score every counted tuple with a mutual information measure
    cooccurrence_matrix: Sparse matrix of pair counts or scores

Example:
    Collocation extraction from word pairs::

        import corpusmi as cmi

        pairs = [
            ["strong", "tea"],
            ["strong", "tea"],
            ["powerful", "computer"],
            ["strong", "computer"],
        ]

        collector, symbols = cmi.collect(pairs, arity=2)

        table = cmi.mi_table(collector, measure="nsc", symbols=symbols)
        print(table.head())
        # Symbol_1   Symbol_2   Freq   MI
        # powerful   computer   1      0.5
        # strong     tea        2      0.415037...

.. codeauthor:: corpusmi contributors
"""

from typing import Hashable, Iterable, Optional, Sequence, Tuple, Union

import numpy as np
import polars as pl
from scipy.sparse import coo_matrix

from .collector import TupleCollector
from .config import CONFIG
from .measures import MutualInformation, make_measure
from .performance import MemoryOptimizer, PerformanceMonitor
from .smoothing import Smoothing
from .symbols import SymbolTable
from .validation import (
    ParameterValidationError,
    suggest_alternatives_for_empty_results,
    validate_min_freq,
)


class AssociationAnalyzer:
    """Handles scoring of counted tuples and association tables."""

    @staticmethod
    def _symbol_columns(arity: int) -> list:
        return [f"{CONFIG.SYMBOL_COLUMN_PREFIX}{i + 1}" for i in range(arity)]

    @staticmethod
    def _resolve(tup: Sequence[Hashable], symbols: Optional[SymbolTable]) -> tuple:
        if symbols is None:
            return tuple(tup)
        return tuple(symbols.resolve(v) for v in tup)

    def collect(
        self,
        rows: Iterable[Sequence[Hashable]],
        arity: int = CONFIG.DEFAULT_ARITY,
        symbols: Optional[SymbolTable] = None,
    ) -> Tuple[TupleCollector, SymbolTable]:
        """
        Count tuples of tokens.

        :param rows: Sequences of ``arity`` tokens. Strings are interned
            through the symbol table, other values are counted as they are.
        :param arity: Number of tokens per tuple
        :param symbols: A symbol table to extend, a new one if None
        :return: The collector and the symbol table
        """
        if symbols is None:
            symbols = SymbolTable()

        collector = TupleCollector(arity)

        def interned():
            for row in rows:
                yield tuple(
                    symbols.intern(v) if isinstance(v, str) else v for v in row
                )

        with PerformanceMonitor("Counting tuples"):
            collector.count_all(interned())

        return collector, symbols

    def mi_table(
        self,
        collector: TupleCollector,
        measure: Union[str, MutualInformation] = CONFIG.DEFAULT_MEASURE,
        smoothing: Union[str, Smoothing] = CONFIG.DEFAULT_SMOOTHING,
        alpha: float = CONFIG.DEFAULT_LAPLACE_ALPHA,
        min_freq: int = CONFIG.DEFAULT_MIN_FREQ,
        symbols: Optional[SymbolTable] = None,
    ) -> pl.DataFrame:
        """
        Generate a table of tuples by association measure.

        :param collector: A collector holding the counts of a corpus
        :param measure: One of 'sc', 'nsc', 'psc', 'pnsc', or a measure
        :param smoothing: One of 'raw' or 'laplace', or a smoothing instance
        :param alpha: Pseudo-count for 'laplace' smoothing
        :param min_freq: Minimum joint frequency of reported tuples
        :param symbols: Resolve identifiers to strings through this table
        :return: A polars DataFrame with one column per tuple position,
            'Freq' and 'MI', sorted by 'MI' in descending order
        """
        validate_min_freq(min_freq, "in mi_table")
        mi = make_measure(measure, smoothing, alpha)
        MemoryOptimizer.warn_if_large(len(collector), "in mi_table")

        columns = self._symbol_columns(collector.arity)

        rows = []
        with PerformanceMonitor("Scoring tuples"):
            for tup, freq, score in collector.iterate(mi):
                if freq >= min_freq:
                    rows.append(self._resolve(tup, symbols) + (freq, score))

        if not rows:
            suggest_alternatives_for_empty_results(
                "mi_table", min_freq=min_freq, n_tuples=len(collector)
            )
            symbol_type = pl.String if symbols is not None else pl.Int64
            return pl.DataFrame(
                schema=[(c, symbol_type) for c in columns]
                + [(CONFIG.FREQ_COLUMN, pl.UInt32), (CONFIG.MI_COLUMN, pl.Float64)]
            )

        df = (
            pl.DataFrame(
                rows,
                schema=columns + [CONFIG.FREQ_COLUMN, CONFIG.MI_COLUMN],
                orient="row",
            )
            .with_columns(
                pl.col(CONFIG.FREQ_COLUMN).cast(pl.UInt32),
                pl.col(CONFIG.MI_COLUMN).cast(pl.Float64),
            )
            .sort(
                [CONFIG.MI_COLUMN] + columns,
                descending=[True] + [False] * len(columns),
            )
        )

        return df

    def cooccurrence_matrix(
        self,
        collector: TupleCollector,
        symbols: Optional[SymbolTable] = None,
        measure: Optional[Union[str, MutualInformation]] = None,
        smoothing: Union[str, Smoothing] = CONFIG.DEFAULT_SMOOTHING,
        alpha: float = CONFIG.DEFAULT_LAPLACE_ALPHA,
    ) -> coo_matrix:
        """
        Convert the pairs of a collector to a COOrdinate format matrix.

        Rows are indexed by the identifier of the first symbol, columns by
        the identifier of the second one.

        :param collector: A collector of pairs of integer identifiers
        :param symbols: The table the identifiers come from; its size is
            used as the matrix shape
        :param measure: Store scores of this measure instead of counts,
            e.g. 'psc' for a PPMI matrix
        :param smoothing: One of 'raw' or 'laplace', or a smoothing instance
        :param alpha: Pseudo-count for 'laplace' smoothing
        :return: A COOrdinate format matrix
        """
        if collector.arity != 2:
            raise ParameterValidationError(
                f"Co-occurrence matrices require a collector of pairs, "
                f"got arity {collector.arity}."
            )

        if measure is None:
            pairs = [(tup, float(freq)) for tup, freq in collector.joint_freqs.items()]
        else:
            mi = make_measure(measure, smoothing, alpha)
            pairs = [(tup, score) for tup, _, score in collector.iterate(mi)]

        if not pairs:
            suggest_alternatives_for_empty_results("cooccurrence_matrix")

        rows = np.array([tup[0] for tup, _ in pairs], dtype=np.int64)
        cols = np.array([tup[1] for tup, _ in pairs], dtype=np.int64)
        data = np.array([value for _, value in pairs], dtype=np.float64)

        if symbols is not None:
            shape = (len(symbols), len(symbols))
        else:
            shape = (
                int(rows.max()) + 1 if len(rows) else 0,
                int(cols.max()) + 1 if len(cols) else 0,
            )

        return coo_matrix((data, (rows, cols)), shape=shape)


# Initialize analyzer instance for use in wrapper functions
_assoc_analyzer = AssociationAnalyzer()


def collect(
    rows: Iterable[Sequence[Hashable]],
    arity: int = CONFIG.DEFAULT_ARITY,
    symbols: Optional[SymbolTable] = None,
) -> Tuple[TupleCollector, SymbolTable]:
    """
    Count tuples of tokens.

    :param rows: Sequences of ``arity`` tokens
    :param arity: Number of tokens per tuple
    :param symbols: A symbol table to extend, a new one if None
    :return: The collector and the symbol table
    """
    return _assoc_analyzer.collect(rows, arity, symbols)


def mi_table(
    collector: TupleCollector,
    measure: Union[str, MutualInformation] = CONFIG.DEFAULT_MEASURE,
    smoothing: Union[str, Smoothing] = CONFIG.DEFAULT_SMOOTHING,
    alpha: float = CONFIG.DEFAULT_LAPLACE_ALPHA,
    min_freq: int = CONFIG.DEFAULT_MIN_FREQ,
    symbols: Optional[SymbolTable] = None,
) -> pl.DataFrame:
    """
    Generate a table of tuples by association measure.

    :param collector: A collector holding the counts of a corpus
    :param measure: One of 'sc', 'nsc', 'psc', 'pnsc', or a measure
    :param smoothing: One of 'raw' or 'laplace', or a smoothing instance
    :param alpha: Pseudo-count for 'laplace' smoothing
    :param min_freq: Minimum joint frequency of reported tuples
    :param symbols: Resolve identifiers to strings through this table
    :return: A polars DataFrame of tuples, frequencies and scores
    """
    return _assoc_analyzer.mi_table(
        collector, measure, smoothing, alpha, min_freq, symbols
    )


def cooccurrence_matrix(
    collector: TupleCollector,
    symbols: Optional[SymbolTable] = None,
    measure: Optional[Union[str, MutualInformation]] = None,
    smoothing: Union[str, Smoothing] = CONFIG.DEFAULT_SMOOTHING,
    alpha: float = CONFIG.DEFAULT_LAPLACE_ALPHA,
) -> coo_matrix:
    """
    Convert the pairs of a collector to a COOrdinate format matrix.

    :param collector: A collector of pairs of integer identifiers
    :param symbols: The table the identifiers come from
    :param measure: Store scores of this measure instead of counts
    :param smoothing: One of 'raw' or 'laplace', or a smoothing instance
    :param alpha: Pseudo-count for 'laplace' smoothing
    :return: A COOrdinate format matrix
    """
    return _assoc_analyzer.cooccurrence_matrix(
        collector, symbols, measure, smoothing, alpha
    )
