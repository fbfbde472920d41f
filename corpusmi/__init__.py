"""
corpusmi: Association statistics for tuples of corpus symbols.

This package counts fixed-arity tuples of symbols (word n-grams, word and
context pairs) in a single pass over a corpus and scores every distinct
tuple with pointwise mutual information variants. Measures and
probability smoothing strategies are independent building blocks that
can be combined freely.
"""

# Counting
from .collector import TupleCollector

# Probability estimation
from .smoothing import Smoothing, RawSmoothing, LaplaceSmoothing

# Association measures
from .measures import (
    MutualInformation,
    SpecificCorrelation,
    PositiveMutualInformation,
    make_measure,
)

# Symbol interning
from .symbols import SymbolTable

# Table-producing functions
from .analysis import (
    AssociationAnalyzer,
    collect,
    mi_table,
    cooccurrence_matrix,
)

# Utility functions
from .corpus_utils import (
    open_text,
    read_tuples,
    build_vocabulary,
    write_vocabulary,
    read_vocabulary,
)

# Configuration
from .config import ProcessingConfig, RegexPatterns

# Performance utilities
from .performance import (
    ProgressTracker,
    PerformanceMonitor,
    MemoryOptimizer,
)

# Validation and error handling
from .validation import (
    # Exception classes
    CorpusMIError,
    ArityError,
    ParameterValidationError,
    DataFormatError,
    FileSystemError,
    ValidationWarning,
    PerformanceWarning,
    # Validation functions
    validate_arity,
    validate_alpha,
    validate_min_freq,
)

# Package metadata
__version__ = "0.1.0"
__author__ = "corpusmi contributors"
__email__ = "corpusmi@users.noreply.github.com"

# Public API - define what gets imported with "from corpusmi import *"
__all__ = [
    # Counting
    "TupleCollector",
    # Smoothing
    "Smoothing",
    "RawSmoothing",
    "LaplaceSmoothing",
    # Measures
    "MutualInformation",
    "SpecificCorrelation",
    "PositiveMutualInformation",
    "make_measure",
    # Symbols
    "SymbolTable",
    # Tables
    "AssociationAnalyzer",
    "collect",
    "mi_table",
    "cooccurrence_matrix",
    # Utility functions
    "open_text",
    "read_tuples",
    "build_vocabulary",
    "write_vocabulary",
    "read_vocabulary",
    # Configuration
    "ProcessingConfig",
    "RegexPatterns",
    # Performance utilities
    "ProgressTracker",
    "PerformanceMonitor",
    "MemoryOptimizer",
    # Validation and error handling
    "CorpusMIError",
    "ArityError",
    "ParameterValidationError",
    "DataFormatError",
    "FileSystemError",
    "ValidationWarning",
    "PerformanceWarning",
    "validate_arity",
    "validate_alpha",
    "validate_min_freq",
]
