"""Text-level helpers for Forge models and test files."""

__all__ = [
    "InstanceError",
    "ScanError",
    "ScannedSuite",
    "assignment_name",
    "blank_headers",
    "combine_tests_with_model",
    "first_appended_line",
    "instance_formula",
    "normalize_newlines",
    "scan_tests",
    "sig_names",
    "strip_comments",
]

from .instance import instance_formula, InstanceError, sig_names
from .program import assignment_name, blank_headers, combine_tests_with_model, first_appended_line, \
    normalize_newlines, strip_comments
from .suite import scan_tests, ScanError, ScannedSuite
