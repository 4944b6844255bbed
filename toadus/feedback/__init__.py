"""Mutation-based feedback on student test suites."""

__all__ = [
    "ArtifactError",
    "ArtifactNotEnabledError",
    "ArtifactStore",
    "ArtifactTransportError",
    "ConceptualMutator",
    "Decryptor",
    "FeedbackEventLog",
    "FeedbackReporter",
    "HintGenerator",
    "HintResolver",
    "LoggingReporter",
    "MutationError",
    "PlainTextDecryptor",
    "StepCounter",
    "ThoroughnessAnalyzer",
    "choose_n",
    "format_failure_hints",
    "format_thoroughness_hints",
    "hint_difference",
    "messages",
]

from . import messages
from .errors import ArtifactError, ArtifactNotEnabledError, ArtifactTransportError, MutationError
from .generator import HintGenerator
from .hints import choose_n, format_failure_hints, format_thoroughness_hints, hint_difference
from .mutator import ConceptualMutator
from .reporter import FeedbackEventLog, FeedbackReporter, LoggingReporter, StepCounter
from .resolver import HintResolver
from .store import ArtifactStore, Decryptor, PlainTextDecryptor
from .thoroughness import ThoroughnessAnalyzer
