"""
Pytest configuration and shared fixtures for corpusmi tests.

This module provides shared test fixtures, utilities, and configuration
for the corpusmi test suite.
"""

import pytest
import polars as pl

import corpusmi as cmi


# Count tables of a small fixed scenario. The tables do not come from one
# collector (the position sums differ), which is fine for probability
# estimation on its own.
SCENARIO_TUPLE = (1, 2)
SCENARIO_EVENT_FREQS = [{1: 3, 3: 4, 5: 5}, {2: 4, 4: 7}]
SCENARIO_EVENT_SUMS = [12, 11]
SCENARIO_JOINT_FREQS = {(1, 1): 1, (1, 2): 2, (1, 3): 1, (1, 4): 7}
SCENARIO_JOINT_SUM = 11


@pytest.fixture
def scenario_tables():
    """Fixed count tables with known PMI values."""
    return {
        "tup": SCENARIO_TUPLE,
        "event_freqs": SCENARIO_EVENT_FREQS,
        "event_sums": SCENARIO_EVENT_SUMS,
        "joint_freqs": SCENARIO_JOINT_FREQS,
        "joint_sum": SCENARIO_JOINT_SUM,
    }


@pytest.fixture
def word_pairs():
    """Adjective-noun pairs with a clear collocation."""
    return [
        ("strong", "tea"),
        ("strong", "tea"),
        ("strong", "tea"),
        ("powerful", "computer"),
        ("powerful", "computer"),
        ("strong", "computer"),
        ("powerful", "tea"),
        ("hot", "tea"),
        ("new", "computer"),
        ("new", "car"),
    ]


@pytest.fixture
def word_triples():
    """Verb-subject-object triples."""
    return [
        ("drink", "man", "tea"),
        ("drink", "man", "tea"),
        ("drink", "woman", "tea"),
        ("drink", "woman", "coffee"),
        ("drive", "man", "car"),
        ("drive", "woman", "car"),
        ("buy", "man", "car"),
        ("buy", "woman", "coffee"),
    ]


@pytest.fixture
def pair_collector(word_pairs):
    """Collector and symbol table of the word pairs."""
    return cmi.collect(word_pairs, arity=2)


@pytest.fixture
def triple_collector(word_triples):
    """Collector and symbol table of the word triples."""
    return cmi.collect(word_triples, arity=3)


@pytest.fixture
def pairs_file(tmp_path, word_pairs):
    """The word pairs written one per line, with a blank line."""
    path = tmp_path / "pairs.txt"
    lines = [" ".join(pair) for pair in word_pairs]
    lines.insert(3, "")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def triples_file(tmp_path, word_triples):
    """The word triples written one per line."""
    path = tmp_path / "triples.txt"
    path.write_text(
        "\n".join("\t".join(t) for t in word_triples) + "\n", encoding="utf-8"
    )
    return path


# Test utilities
def expected_marginals(tuples, arity):
    """Count symbols per position the straightforward way."""
    counts = [{} for _ in range(arity)]
    for tup in tuples:
        for idx, v in enumerate(tup):
            counts[idx][v] = counts[idx].get(v, 0) + 1
    return counts


def expected_joint(tuples):
    """Count tuples the straightforward way."""
    counts = {}
    for tup in tuples:
        counts[tuple(tup)] = counts.get(tuple(tup), 0) + 1
    return counts


def assert_mi_table_valid(table: pl.DataFrame, arity: int):
    """Assert that an MI table has the expected structure."""
    assert isinstance(table, pl.DataFrame), "Result should be a polars DataFrame"

    expected = [f"Symbol_{i + 1}" for i in range(arity)] + ["Freq", "MI"]
    assert table.columns == expected, f"Columns should be {expected}"

    assert table["Freq"].dtype == pl.UInt32, "Freq should be UInt32"
    assert table["MI"].dtype == pl.Float64, "MI should be Float64"

    if table.height > 0:
        assert (table["Freq"] > 0).all(), "All frequencies should be positive"


# Hypothesis strategies for property-based testing
try:
    from hypothesis import strategies as st

    @st.composite
    def tuple_stream_strategy(draw, arity=2, max_symbol=5, min_size=1, max_size=60):
        """Generate streams of tuples over a small symbol alphabet."""
        symbol = st.integers(min_value=0, max_value=max_symbol)
        return draw(
            st.lists(
                st.tuples(*[symbol] * arity), min_size=min_size, max_size=max_size
            )
        )

    @pytest.fixture
    def tuple_stream_strategy_fixture():
        return tuple_stream_strategy

except ImportError:
    # Hypothesis not available, provide dummy fixtures
    @pytest.fixture
    def tuple_stream_strategy_fixture():
        pytest.skip("Hypothesis not available for property-based testing")
