"""
Error handling and validation utilities for corpusmi.

This module provides the package exception hierarchy and the parameter
checks shared by the collector, the association measures and the
command-line programs.

Exception Classes:
    CorpusMIError: Base exception for all corpusmi errors
    ArityError: Tuple shape does not match a collector's arity
    ParameterValidationError: Function parameter validation
    DataFormatError: Malformed input lines or tables
    FileSystemError: File access validation
    ValidationWarning: Non-fatal validation warnings
    PerformanceWarning: Performance-related warnings

Validation Functions:
    validate_arity: Validate a collector arity
    validate_tuple_length: Check a tuple against a collector arity
    validate_alpha: Validate an additive smoothing parameter
    validate_min_freq: Validate a frequency cut-off
    validate_choice: Validate a named option with suggestions
    validate_input_path: Validate an input file path
    suggest_alternatives_for_empty_results: Suggestions for empty tables

Numeric anomalies (zero counts, NaN or infinite scores) are not errors:
they are reported as-is in the score column.

Example:
    Catching all corpusmi errors::

        from corpusmi import TupleCollector
        from corpusmi.validation import CorpusMIError

        collector = TupleCollector(2)

        try:
            collector.count((1, 2, 3))
        except CorpusMIError as e:
            print(f"Counting failed: {e}")

.. codeauthor:: corpusmi contributors
"""

import math
import warnings
from typing import Optional, Sequence, Union
from pathlib import Path

from .config import CONFIG


class CorpusMIError(Exception):
    """
    Base exception class for all corpusmi errors.

    This is the parent class for all custom exceptions in the corpusmi
    package. It allows for catching all corpusmi-specific errors with
    a single except clause.
    """

    pass


class ArityError(CorpusMIError, ValueError):
    """
    Raised when a tuple does not have the arity of its collector.

    This signals a programming error in the caller (tuples assembled with
    the wrong shape), not bad corpus data, and should not be recovered
    from silently.

    Example:
        >>> from corpusmi import TupleCollector
        >>> TupleCollector(2).count((1, 2, 3))
        ArityError: Attempting to add tuple of size 3 to collector of size 2
    """

    pass


class ParameterValidationError(CorpusMIError):
    """Raised when function parameters are invalid."""

    pass


class DataFormatError(CorpusMIError):
    """Raised when input data format is incorrect."""

    pass


class FileSystemError(CorpusMIError):
    """Raised when file system operations fail."""

    pass


class ValidationWarning(UserWarning):
    """Warning for potentially problematic but non-fatal issues."""

    pass


class PerformanceWarning(UserWarning):
    """Warning for performance-related issues."""

    pass


def validate_arity(arity: int, context: str = "") -> None:
    """
    Validate the arity of a collector.

    :param arity: Number of symbols per tuple
    :param context: Context for error messages
    """
    if isinstance(arity, bool) or not isinstance(arity, int):
        raise ParameterValidationError(
            f"Arity must be an integer {context}, got {type(arity).__name__}: {arity}"
        )

    supported = CONFIG.SUPPORTED_ARITIES
    if arity not in supported:
        raise ParameterValidationError(
            f"Cannot handle {arity} variables {context}. "
            f"Supported arities are: {', '.join(str(a) for a in supported)}. "
            "Use 2 for pairs (e.g. word/context), 3 for triples."
        )


def validate_tuple_length(tup: Sequence, arity: int) -> None:
    """
    Check that a tuple matches the arity of a collector.

    :param tup: Tuple of symbols
    :param arity: Collector arity
    """
    if len(tup) != arity:
        raise ArityError(
            f"Attempting to add tuple of size {len(tup)} "
            f"to collector of size {arity}"
        )


def validate_alpha(alpha: float, context: str = "") -> None:
    """
    Validate the pseudo-count of additive smoothing.

    :param alpha: Smoothing parameter, must be finite and >= 0
    :param context: Context for error messages
    """
    if isinstance(alpha, bool) or not isinstance(alpha, (int, float)):
        raise ParameterValidationError(
            f"Alpha must be a number {context}, got {type(alpha).__name__}: {alpha}"
        )

    if not math.isfinite(alpha) or alpha < 0:
        raise ParameterValidationError(
            f"Alpha must be a finite value >= 0 {context}, got {alpha}. "
            "Use alpha=0 for unsmoothed estimates, alpha=1 for add-one smoothing."
        )


def validate_min_freq(min_freq: int, context: str = "") -> None:
    """
    Validate a joint frequency cut-off.

    :param min_freq: Minimum joint frequency
    :param context: Context for error messages
    """
    if isinstance(min_freq, bool) or not isinstance(min_freq, int):
        raise ParameterValidationError(
            f"Minimum frequency must be an integer {context}, "
            f"got {type(min_freq).__name__}: {min_freq}"
        )

    if min_freq < 0:
        raise ParameterValidationError(
            f"Minimum frequency must be >= 0 {context}, got {min_freq}."
        )


def validate_choice(
    value: str, valid_types: Sequence[str], name: str, context: str = ""
) -> None:
    """
    Validate a named option with helpful suggestions.

    :param value: Parameter value to validate
    :param valid_types: List of valid values
    :param name: Parameter name for error messages
    :param context: Context for error messages
    """
    if value in valid_types:
        return

    value = str(value)

    # Try to suggest close matches
    suggestions = []
    if value.lower() in [v.lower() for v in valid_types]:
        suggestions = [v for v in valid_types if v.lower() == value.lower()]
    else:
        for valid_type in valid_types:
            if value and (valid_type.startswith(value[:2]) or value in valid_type):
                suggestions.append(valid_type)

    error_msg = f"Invalid {name} parameter {context}: '{value}'\n"
    error_msg += f"Valid options are: {', '.join(valid_types)}"

    if suggestions:
        error_msg += f"\nDid you mean: {', '.join(suggestions)}?"

    raise ParameterValidationError(error_msg)


def validate_input_path(path: Optional[Union[str, Path]], context: str = "") -> Path:
    """
    Validate an input file path and provide helpful error messages.

    :param path: File path to validate
    :param context: Context for error messages
    :return: Validated Path object
    """
    if path is None or (isinstance(path, str) and path.strip() == ""):
        raise FileSystemError(
            f"Input path is empty {context}. Please provide a valid file path."
        )

    path = Path(path)

    if not path.exists():
        parent = path.parent
        if parent.exists():
            similar = [
                f.name
                for f in parent.iterdir()
                if f.is_file() and f.name.lower().startswith(path.name[:3].lower())
            ]
            suggestion = ""
            if similar:
                suggestion = f"\nDid you mean: {', '.join(sorted(similar)[:3])}?"
        else:
            suggestion = f"\nParent directory also doesn't exist: {parent}"

        raise FileSystemError(
            f"File does not exist {context}: {path}{suggestion}"
        )

    if path.is_dir():
        raise FileSystemError(
            f"Path is a directory {context}: {path}\n"
            "Please provide a path to a file, not a directory."
        )

    return path


def suggest_alternatives_for_empty_results(operation: str, **kwargs):
    """Provide suggestions when operations return empty results."""
    suggestions = []

    if operation == "mi_table":
        min_freq = kwargs.get("min_freq", CONFIG.DEFAULT_MIN_FREQ)
        if min_freq > 1:
            suggestions.append(f"Try reducing min_freq (currently {min_freq})")

        n_tuples = kwargs.get("n_tuples", 0)
        if n_tuples == 0:
            suggestions.append("Check that tuples were counted before scoring")

    elif operation == "cooccurrence_matrix":
        suggestions.append("Check that the collector holds pairs of symbols")

    if suggestions:
        warning_msg = f"No results found for {operation}. Suggestions:\n"
        warning_msg += "\n".join(f"- {s}" for s in suggestions)
        warnings.warn(warning_msg, ValidationWarning)
