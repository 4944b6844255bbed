__all__ = [
    # Base
    "BaseModel",
    "FrozenModel",
    # Enums
    "DeploymentEnvironment",
    "FeedbackEvent",
    "FeedbackStrategy",
    "TestKind",
    "TestPolarity",
    "ThoroughnessMode",
    # Evaluation
    "EvaluationRun",
    "EvaluatorExit",
    "SourceLocation",
    "TestOutcomeRecord",
    "TIMEOUT_MESSAGE",
    # Suites
    "StudentTest",
    # Hints
    "HintTable",
]

from .base import BaseModel, FrozenModel
from .enum import DeploymentEnvironment, FeedbackEvent, FeedbackStrategy, TestKind, TestPolarity, ThoroughnessMode
from .evaluation import EvaluationRun, EvaluatorExit, SourceLocation, TestOutcomeRecord, TIMEOUT_MESSAGE
from .hint import HintTable
from .suite import StudentTest
