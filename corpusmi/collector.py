"""
Frequency collection for mutual information computations.

:class:`TupleCollector` accumulates, during a single pass over a corpus,
the counts every association measure needs:

* ``event_freqs[i]``: occurrences of each symbol at tuple position ``i``
* ``event_sums[i]``: total observations at position ``i``
* ``joint_freqs``: occurrences of each distinct tuple
* ``joint_sum``: total number of tuples counted

Observations are stored as plain Python tuples of a fixed arity, which
are hashable, compare element-wise and avoid the overhead of per-tuple
lists.

Example:
    Counting word pairs and scoring them::

        from corpusmi import TupleCollector, SpecificCorrelation

        collector = TupleCollector(2)
        for pair in [(0, 1), (0, 1), (2, 1), (0, 3)]:
            collector.count(pair)

        measure = SpecificCorrelation(normalize=True)
        for tup, freq, score in collector.iterate(measure):
            print(tup, freq, score)

.. codeauthor:: corpusmi contributors
"""

from types import MappingProxyType
from typing import (
    Dict,
    Hashable,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Sized,
    Tuple,
)

from .config import CONFIG
from .measures import MutualInformation
from .performance import ProgressTracker
from .validation import (
    ArityError,
    validate_arity,
    validate_min_freq,
    validate_tuple_length,
)


class TupleCollector:
    """
    A collector of fixed-arity observations.

    The collector is mutated only through :meth:`count`, :meth:`count_all`,
    :meth:`merge` and :meth:`prune`. Scoring through :meth:`iterate` reads
    the tables without modifying them and must not overlap with a mutating
    call.

    :param arity: Number of symbols per tuple, one of
        ``CONFIG.SUPPORTED_ARITIES``
    """

    def __init__(self, arity: int = CONFIG.DEFAULT_ARITY):
        validate_arity(arity, "in TupleCollector")
        self._arity = arity
        self._event_freqs: List[Dict[Hashable, int]] = [{} for _ in range(arity)]
        self._event_sums: List[int] = [0] * arity
        self._joint_freqs: Dict[Tuple, int] = {}
        self._joint_sum = 0

    @property
    def arity(self) -> int:
        return self._arity

    @property
    def event_freqs(self) -> Tuple[Mapping[Hashable, int], ...]:
        """Read-only per-position symbol counts."""
        return tuple(MappingProxyType(freqs) for freqs in self._event_freqs)

    @property
    def event_sums(self) -> Tuple[int, ...]:
        """Per-position totals."""
        return tuple(self._event_sums)

    @property
    def joint_freqs(self) -> Mapping[Tuple, int]:
        """Read-only tuple counts."""
        return MappingProxyType(self._joint_freqs)

    @property
    def joint_sum(self) -> int:
        """Total number of tuples counted, including pruned ones."""
        return self._joint_sum

    def count(self, tup: Sequence[Hashable]) -> None:
        """
        Count an observation.

        :param tup: A sequence of exactly ``arity`` symbols
        :raises ArityError: If the sequence has the wrong length
        """
        validate_tuple_length(tup, self._arity)
        tup = tuple(tup)
        # Unhashable symbols fail here, before any table is updated.
        joint_count = self._joint_freqs.get(tup, 0)

        for idx, v in enumerate(tup):
            freqs = self._event_freqs[idx]
            freqs[v] = freqs.get(v, 0) + 1
            self._event_sums[idx] += 1

        self._joint_freqs[tup] = joint_count + 1
        self._joint_sum += 1

    def count_all(
        self,
        tuples: Iterable[Sequence[Hashable]],
        show_progress: Optional[bool] = None,
    ) -> int:
        """
        Count every observation of an iterable.

        :param tuples: Sequences of exactly ``arity`` symbols
        :param show_progress: Report progress on standard error, defaults to
            ``CONFIG.SHOW_PROGRESS``. Sized inputs are reported as a
            percentage
        :return: The number of observations counted
        """
        total = len(tuples) if isinstance(tuples, Sized) else None
        tracker = ProgressTracker(
            total=total, description="Counting tuples", show_progress=show_progress
        )
        n = 0
        for tup in tuples:
            self.count(tup)
            n += 1
            tracker.update()
        tracker.finish()
        return n

    def iterate(
        self, mi: MutualInformation
    ) -> Iterator[Tuple[Tuple, int, float]]:
        """
        Iterate over all observations, their frequencies, and mutual
        information scores as defined by the provided measure.

        Every call starts a new pass. The order of the triples follows the
        joint table and should not be relied upon.

        :param mi: The measure used to score each tuple
        :return: An iterator of ``(tuple, frequency, score)`` triples
        """
        event_freqs = self.event_freqs
        event_sums = self.event_sums
        joint_freqs = self.joint_freqs
        joint_sum = self._joint_sum

        for tup, tuple_count in joint_freqs.items():
            score = mi.score(tup, event_freqs, event_sums, joint_freqs, joint_sum)
            yield tup, tuple_count, score

    def prune(self, min_joint_freq: int) -> int:
        """
        Remove tuples with a joint frequency below a cut-off.

        Marginal counts and the joint sum keep describing the whole corpus,
        so probabilities of the remaining tuples are unaffected.

        :param min_joint_freq: Tuples counted fewer times are removed
        :return: The number of distinct tuples removed
        """
        validate_min_freq(min_joint_freq, "in TupleCollector.prune")
        pruned = [
            tup for tup, freq in self._joint_freqs.items() if freq < min_joint_freq
        ]
        for tup in pruned:
            del self._joint_freqs[tup]
        return len(pruned)

    def merge(self, other: "TupleCollector") -> "TupleCollector":
        """
        Add the counts of another collector to this one.

        Counting shards of a corpus in separate collectors and merging them
        gives the same tables as counting the whole corpus in one.

        :param other: A collector with the same arity
        :return: This collector
        """
        if other.arity != self._arity:
            raise ArityError(
                f"Attempting to merge collector of size {other.arity} "
                f"into collector of size {self._arity}"
            )

        for idx, freqs in enumerate(other._event_freqs):
            own = self._event_freqs[idx]
            for v, freq in freqs.items():
                own[v] = own.get(v, 0) + freq
            self._event_sums[idx] += other._event_sums[idx]

        for tup, freq in other._joint_freqs.items():
            self._joint_freqs[tup] = self._joint_freqs.get(tup, 0) + freq
        self._joint_sum += other._joint_sum

        return self

    def frequency(self, tup: Sequence[Hashable]) -> int:
        """Joint frequency of a tuple, 0 if it was never counted or was pruned."""
        return self._joint_freqs.get(tuple(tup), 0)

    def __len__(self) -> int:
        return len(self._joint_freqs)

    def __contains__(self, tup) -> bool:
        return tuple(tup) in self._joint_freqs

    def __repr__(self) -> str:
        return (
            f"TupleCollector(arity={self._arity}, tuples={len(self)}, "
            f"joint_sum={self._joint_sum})"
        )
