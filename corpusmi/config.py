"""
Configuration constants for corpusmi.

.. codeauthor:: corpusmi contributors
"""

from dataclasses import dataclass
from typing import Tuple
import re


@dataclass
class ProcessingConfig:
    """Configuration constants for counting and scoring."""

    # Tuple shapes the collector accepts
    SUPPORTED_ARITIES: Tuple[int, ...] = (2, 3)
    DEFAULT_ARITY: int = 2

    # Scoring defaults
    DEFAULT_MEASURE: str = "nsc"
    DEFAULT_SMOOTHING: str = "raw"
    DEFAULT_LAPLACE_ALPHA: float = 1.0
    DEFAULT_MIN_FREQ: int = 1

    # Vocabulary construction
    VOCAB_COLUMNS: int = 3

    # Output column names
    SYMBOL_COLUMN_PREFIX: str = "Symbol_"
    FREQ_COLUMN: str = "Freq"
    MI_COLUMN: str = "MI"

    # Progress and performance reporting
    SHOW_PROGRESS: bool = False
    PROGRESS_INTERVAL: int = 1000000  # tuples between progress lines
    SLOW_OPERATION_SECONDS: float = 5.0

    # Memory thresholds
    LARGE_TABLE_THRESHOLD: int = 5000000  # distinct tuples


@dataclass
class RegexPatterns:
    """Compiled regex patterns for line processing."""

    WHITESPACE = re.compile(r"\s+")


# Global configuration instance
CONFIG = ProcessingConfig()
PATTERNS = RegexPatterns()
