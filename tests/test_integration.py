"""
Integration tests for corpusmi focusing on file input and the command line.

This module runs the compute-mi and construct-vocab programs end to end
and checks the reading utilities they are built from.
"""

import gzip
import math

import pytest
import polars as pl

import corpusmi as cmi
from corpusmi.cli import compute_mi_main, construct_vocab_main, exit_on_error
from corpusmi.validation import DataFormatError, FileSystemError


def _parse_output(text):
    scores = {}
    for line in text.strip().splitlines():
        *words, score = line.split(" ")
        scores[tuple(words)] = float(score)
    return scores


class TestReading:
    """Tests for the line-oriented reading utilities."""

    def test_read_tuples_skips_blank_lines(self, pairs_file, word_pairs):
        symbols = cmi.SymbolTable()
        with cmi.open_text(pairs_file) as f:
            tuples = list(cmi.read_tuples(f, symbols))
        assert len(tuples) == len(word_pairs)
        assert [tuple(symbols.resolve(v) for v in t) for t in tuples] == word_pairs

    def test_read_tuples_mixed_whitespace(self):
        symbols = cmi.SymbolTable()
        tuples = list(cmi.read_tuples(["  a\tb  \n", "b   a\n"], symbols))
        assert tuples == [(0, 1), (1, 0)]

    def test_open_gzipped(self, tmp_path):
        path = tmp_path / "pairs.txt.gz"
        with gzip.open(path, "wt", encoding="utf-8") as f:
            f.write("a b\nc d\n")
        with cmi.open_text(path, compressed=True) as f:
            assert [line.split() for line in f] == [["a", "b"], ["c", "d"]]

    def test_open_missing_file(self, tmp_path):
        with pytest.raises(FileSystemError):
            with cmi.open_text(tmp_path / "missing.txt"):
                pass

    def test_open_directory(self, tmp_path):
        with pytest.raises(FileSystemError):
            with cmi.open_text(tmp_path):
                pass


class TestVocabulary:
    """Tests for sorted vocabulary construction."""

    def test_build_vocabulary(self, triples_file):
        with cmi.open_text(triples_file) as f:
            vocab = cmi.build_vocabulary(f)

        symbols = vocab.get_column("symbol").to_list()
        assert symbols == sorted(symbols)
        assert len(set(symbols)) == len(symbols)
        assert vocab.get_column("id").to_list() == list(range(len(symbols)))
        assert "drink" in symbols and "coffee" in symbols

    def test_wrong_column_count(self):
        with pytest.raises(DataFormatError) as excinfo:
            cmi.build_vocabulary(["a b c\n", "a b\n"])
        assert "Line 2" in str(excinfo.value)

    def test_write_and_read(self, tmp_path):
        vocab = cmi.build_vocabulary(["b a c", "c d a"])
        path = tmp_path / "vocab.parquet"
        cmi.write_vocabulary(vocab, path)
        assert cmi.read_vocabulary(path).equals(vocab)

    def test_write_rejects_other_frames(self, tmp_path):
        with pytest.raises(DataFormatError):
            cmi.write_vocabulary(pl.DataFrame({"a": [1]}), tmp_path / "v.parquet")


class TestComputeMI:
    """End-to-end tests for the compute-mi program."""

    def test_pairs_to_stdout(self, pairs_file, word_pairs, capsys):
        assert compute_mi_main(["2", str(pairs_file)]) == 0
        scores = _parse_output(capsys.readouterr().out)

        assert set(scores) == set(word_pairs)
        assert all(-1 <= s <= 1 for s in scores.values())

    def test_matches_table_api(self, pairs_file, pair_collector, capsys):
        compute_mi_main(["-m", "psc", "-s", "laplace", "-a", "0.5", "2", str(pairs_file)])
        scores = _parse_output(capsys.readouterr().out)

        collector, symbols = pair_collector
        table = cmi.mi_table(
            collector, measure="psc", smoothing="laplace", alpha=0.5, symbols=symbols
        )
        for row in table.iter_rows(named=True):
            key = (row["Symbol_1"], row["Symbol_2"])
            assert scores[key] == pytest.approx(row["MI"])

    def test_frequency_cutoff(self, pairs_file, tmp_path):
        output = tmp_path / "pairs.mi"
        assert compute_mi_main(["-f", "2", "2", str(pairs_file), str(output)]) == 0
        scores = _parse_output(output.read_text(encoding="utf-8"))
        assert set(scores) == {("strong", "tea"), ("powerful", "computer")}

    def test_triples(self, triples_file, capsys):
        assert compute_mi_main(["-m", "sc", "3", str(triples_file)]) == 0
        scores = _parse_output(capsys.readouterr().out)
        assert len(scores) == 7
        # P = 2/8, marginals 4/8 * 4/8 * 3/8
        assert scores[("drink", "man", "tea")] == pytest.approx(
            math.log((2 / 8) / ((4 / 8) * (4 / 8) * (3 / 8)))
        )

    def test_gzipped_input(self, tmp_path, capsys):
        path = tmp_path / "pairs.txt.gz"
        with gzip.open(path, "wt", encoding="utf-8") as f:
            f.write("a b\na b\nc d\n")
        assert compute_mi_main(["-z", "2", str(path)]) == 0
        assert len(_parse_output(capsys.readouterr().out)) == 2

    def test_undefined_score_written_as_nan(self, tmp_path, capsys):
        path = tmp_path / "single.txt"
        path.write_text("a b\na b\n", encoding="utf-8")
        assert compute_mi_main(["2", str(path)]) == 0
        assert capsys.readouterr().out == "a b NaN\n"

    def test_wrong_tuple_length_exits(self, triples_file, capsys):
        with pytest.raises(SystemExit) as excinfo:
            compute_mi_main(["2", str(triples_file)])
        assert excinfo.value.code == 1
        assert "collector of size 2" in capsys.readouterr().err

    def test_unsupported_arity_exits(self, pairs_file, capsys):
        with pytest.raises(SystemExit) as excinfo:
            compute_mi_main(["4", str(pairs_file)])
        assert excinfo.value.code == 1
        assert "Cannot handle 4 variables" in capsys.readouterr().err

    def test_missing_input_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            compute_mi_main(["2", str(tmp_path / "missing.txt")])
        assert excinfo.value.code == 1
        assert "Cannot read input" in capsys.readouterr().err

    def test_progress_goes_to_stderr(self, pairs_file, capsys):
        compute_mi_main(["-p", "2", str(pairs_file)])
        captured = capsys.readouterr()
        assert "Counting tuples" in captured.err
        assert "Counting tuples" not in captured.out


class TestConstructVocab:
    """End-to-end tests for the construct-vocab program."""

    def test_construct_vocab(self, triples_file, tmp_path):
        output = tmp_path / "vocab.parquet"
        assert construct_vocab_main([str(triples_file), str(output)]) == 0
        vocab = pl.read_parquet(output)
        assert vocab.columns == ["symbol", "id"]
        assert vocab.get_column("symbol").to_list() == sorted(
            vocab.get_column("symbol").to_list()
        )

    def test_two_column_input_exits(self, pairs_file, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            construct_vocab_main([str(pairs_file), str(tmp_path / "vocab.parquet")])
        assert excinfo.value.code == 1
        assert "does not have 3 columns" in capsys.readouterr().err


def test_exit_on_error_passes_other_exceptions():
    with pytest.raises(KeyError):
        with exit_on_error("Should not catch"):
            raise KeyError("x")
