"""
Mutual information measures over collector statistics.

A measure scores one tuple given the four tables of a
:class:`~corpusmi.collector.TupleCollector`. Probability estimation is
delegated to a :mod:`~corpusmi.smoothing` strategy, so measures and
smoothing can be swapped independently, and measures can wrap other
measures.

Classes:
    MutualInformation: Interface shared by all measures
    SpecificCorrelation: Generalized PMI for n-ary tuples
    PositiveMutualInformation: Truncates another measure at zero

Functions:
    make_measure: Build a measure from its short name

Example:
    Positive normalized PMI with add-one smoothing::

        from corpusmi.measures import (
            PositiveMutualInformation,
            SpecificCorrelation,
        )
        from corpusmi.smoothing import LaplaceSmoothing

        measure = PositiveMutualInformation(
            SpecificCorrelation(normalize=True, smoothing=LaplaceSmoothing(1.0))
        )

        for tup, freq, score in collector.iterate(measure):
            ...

.. codeauthor:: corpusmi contributors
"""

from abc import ABC, abstractmethod
from typing import Hashable, Mapping, Optional, Sequence, Union

import numpy as np

from .config import CONFIG
from .smoothing import LaplaceSmoothing, RawSmoothing, Smoothing
from .validation import validate_choice

MEASURE_TYPES = ["sc", "nsc", "psc", "pnsc"]
SMOOTHING_TYPES = ["raw", "laplace"]


class MutualInformation(ABC):
    """Interface for mutual information measures."""

    @abstractmethod
    def score(
        self,
        tup: Sequence[Hashable],
        event_freqs: Sequence[Mapping[Hashable, int]],
        event_sums: Sequence[int],
        joint_freqs: Mapping[tuple, int],
        joint_sum: int,
    ) -> float:
        """
        Compute the association score of a tuple.

        :param tup: The tuple to score
        :param event_freqs: Per-position mappings from symbols to counts
        :param event_sums: Per-position totals
        :param joint_freqs: Mapping from tuples to joint counts
        :param joint_sum: Total number of tuples counted
        :return: The score, possibly NaN or infinite for zero counts
        """
        ...

    def __call__(self, tup, event_freqs, event_sums, joint_freqs, joint_sum) -> float:
        return self.score(tup, event_freqs, event_sums, joint_freqs, joint_sum)


class SpecificCorrelation(MutualInformation):
    """
    Specific correlation (Van de Cruys, 2011).

    The specific correlation measure is a generalization of PMI for multiple
    random variables::

        sc(x, ..., z) = ln( P(x, ..., z) / (P(x) ... P(z)) )

    If normalization is enabled, the result will lie between -1 and 1.
    Positive values are divided by ``-(n - 1) ln P(x, ..., z)`` and negative
    values by ``-ln P(x, ..., z)``, since the largest attainable positive and
    negative scores differ in magnitude. For pairs this is the usual
    normalized PMI.

    :param normalize: Rescale scores to [-1, 1]
    :param smoothing: Probability estimation strategy, unsmoothed by default
    """

    def __init__(self, normalize: bool = False, smoothing: Optional[Smoothing] = None):
        self.normalize = normalize
        self.smoothing = smoothing if smoothing is not None else RawSmoothing()

    def score(self, tup, event_freqs, event_sums, joint_freqs, joint_sum) -> float:
        tuple_p = np.float64(self.smoothing.joint_prob(tup, joint_freqs, joint_sum))
        indep_p = np.float64(
            self.smoothing.marginal_prob(tup, event_freqs, event_sums)
        )

        with np.errstate(divide="ignore", invalid="ignore"):
            pmi = np.log(tuple_p / indep_p)

            if not self.normalize:
                return float(pmi)

            if pmi >= 0:
                return float(pmi / (-(len(tup) - 1) * np.log(tuple_p)))
            return float(pmi / -np.log(tuple_p))

    def __repr__(self) -> str:
        return (
            f"SpecificCorrelation(normalize={self.normalize}, "
            f"smoothing={self.smoothing!r})"
        )


class PositiveMutualInformation(MutualInformation):
    """
    Positive mutual information.

    This measure is a simple wrapper around another mutual information
    measure that will 'round' negative scores to 0. NaN scores are
    passed through unchanged.

    :param measure: The measure to wrap
    """

    def __init__(self, measure: MutualInformation):
        self.measure = measure

    def score(self, tup, event_freqs, event_sums, joint_freqs, joint_sum) -> float:
        score = self.measure.score(
            tup, event_freqs, event_sums, joint_freqs, joint_sum
        )
        if score < 0:
            return 0.0
        return score

    def __repr__(self) -> str:
        return f"PositiveMutualInformation({self.measure!r})"


def make_measure(
    measure: Union[str, MutualInformation] = CONFIG.DEFAULT_MEASURE,
    smoothing: Union[str, Smoothing] = CONFIG.DEFAULT_SMOOTHING,
    alpha: float = CONFIG.DEFAULT_LAPLACE_ALPHA,
) -> MutualInformation:
    """
    Build a mutual information measure from its short name.

    :param measure: One of 'sc' (specific correlation), 'nsc' (normalized),
        'psc' (positive) or 'pnsc' (positive normalized). A measure instance
        is returned unchanged.
    :param smoothing: One of 'raw' or 'laplace', or a smoothing instance
    :param alpha: Pseudo-count for 'laplace' smoothing
    :return: A measure instance
    """
    if isinstance(measure, MutualInformation):
        return measure

    validate_choice(measure, MEASURE_TYPES, "measure", "in make_measure")

    if isinstance(smoothing, Smoothing):
        strategy = smoothing
    else:
        validate_choice(smoothing, SMOOTHING_TYPES, "smoothing", "in make_measure")
        if smoothing == "laplace":
            strategy = LaplaceSmoothing(alpha)
        else:
            strategy = RawSmoothing()

    base = SpecificCorrelation(normalize=measure.endswith("nsc"), smoothing=strategy)

    if measure.startswith("p"):
        return PositiveMutualInformation(base)
    return base
