"""
Probability estimation strategies for association measures.

A smoothing strategy turns the counts held by a
:class:`~corpusmi.collector.TupleCollector` into two probabilities for a
tuple: its joint probability P(x, ..., z) and the probability the tuple
would have if its symbols were independent events, P(x)...P(z).

Classes:
    Smoothing: Abstract interface shared by all strategies
    RawSmoothing: Relative frequencies without correction
    LaplaceSmoothing: Additive (add-alpha) smoothing

Arithmetic is done in numpy float64 so that zero counts produce NaN or
infinite values rather than exceptions.

Example:
    Estimating probabilities from count tables::

        from corpusmi.smoothing import LaplaceSmoothing

        event_freqs = [{1: 3, 3: 4, 5: 5}, {2: 4, 4: 7}]
        event_sums = [12, 11]
        joint_freqs = {(1, 1): 1, (1, 2): 2, (1, 3): 1, (1, 4): 7}

        smoothing = LaplaceSmoothing(1.0)
        p_joint = smoothing.joint_prob((1, 2), joint_freqs, 11)
        p_indep = smoothing.marginal_prob((1, 2), event_freqs, event_sums)

.. codeauthor:: corpusmi contributors
"""

from abc import ABC, abstractmethod
from typing import Hashable, Mapping, Sequence

import numpy as np

from .validation import validate_alpha


class Smoothing(ABC):
    """Interface for probability estimation from frequency tables."""

    @abstractmethod
    def joint_prob(
        self,
        tup: Sequence[Hashable],
        joint_freqs: Mapping[tuple, int],
        joint_sum: int,
    ) -> float:
        """
        Get the joint probability of x...z, P(x,...,z).

        :param tup: The tuple of symbols
        :param joint_freqs: Mapping from tuples to joint counts
        :param joint_sum: Total number of tuples counted
        :return: The estimated joint probability
        """
        ...

    @abstractmethod
    def marginal_prob(
        self,
        tup: Sequence[Hashable],
        event_freqs: Sequence[Mapping[Hashable, int]],
        event_sums: Sequence[int],
    ) -> float:
        """
        Get the expected probability of x...z as independent events,
        P(x)...P(z).

        :param tup: The tuple of symbols
        :param event_freqs: Per-position mappings from symbols to counts
        :param event_sums: Per-position totals
        :return: The product of the per-position probabilities
        """
        ...


def _event_counts(tup, event_freqs) -> np.ndarray:
    return np.array(
        [event_freqs[idx].get(v, 0) for idx, v in enumerate(tup)], dtype=np.float64
    )


class RawSmoothing(Smoothing):
    """
    Compute probabilities without smoothing.

    A symbol without any recorded occurrence at its position yields a zero
    marginal probability, and an empty table yields 0/0. Both surface as
    NaN or infinite scores downstream.
    """

    def joint_prob(self, tup, joint_freqs, joint_sum) -> float:
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(
                np.float64(joint_freqs.get(tuple(tup), 0)) / np.float64(joint_sum)
            )

    def marginal_prob(self, tup, event_freqs, event_sums) -> float:
        counts = _event_counts(tup, event_freqs)
        sums = np.asarray(event_sums[: len(counts)], dtype=np.float64)
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(np.prod(counts / sums))

    def __repr__(self) -> str:
        return "RawSmoothing()"


class LaplaceSmoothing(Smoothing):
    """
    Additive (Laplace) smoothing.

    Every count is incremented by a pseudo-count ``alpha``, and every
    denominator by ``alpha`` times the number of distinct entries of the
    table the count comes from:

    * joint: ``(f(t) + alpha) / (N + |joint_freqs| * alpha)``
    * marginal: ``prod_i (f_i(t[i]) + alpha) / (N_i + |event_freqs[i]| * alpha)``

    With ``alpha=0`` this is identical to :class:`RawSmoothing`.

    :param alpha: The pseudo-count, a finite value >= 0
    """

    def __init__(self, alpha: float = 1.0):
        validate_alpha(alpha, "in LaplaceSmoothing")
        self.alpha = float(alpha)

    def joint_prob(self, tup, joint_freqs, joint_sum) -> float:
        numerator = np.float64(joint_freqs.get(tuple(tup), 0)) + self.alpha
        denominator = np.float64(joint_sum) + len(joint_freqs) * self.alpha
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(numerator / denominator)

    def marginal_prob(self, tup, event_freqs, event_sums) -> float:
        counts = _event_counts(tup, event_freqs)
        n = len(counts)
        sums = np.asarray(event_sums[:n], dtype=np.float64)
        sizes = np.array([len(freqs) for freqs in event_freqs[:n]], dtype=np.float64)
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(np.prod((counts + self.alpha) / (sums + sizes * self.alpha)))

    def __repr__(self) -> str:
        return f"LaplaceSmoothing(alpha={self.alpha})"
