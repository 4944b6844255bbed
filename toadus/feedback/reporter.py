"""Where user-visible progress goes, and where research events are recorded."""

from __future__ import annotations

import logging
import typing as t
from abc import abstractmethod

from toadus.model import FeedbackEvent

logger = logging.getLogger(__name__)


class FeedbackReporter(t.Protocol):
    """Receives progress and diagnostics while feedback is being generated.

    The final feedback text is returned by `HintGenerator.generate_hints`;
    everything else a student should see along the way goes through here.
    """

    @abstractmethod
    def progress(self, message: str) -> None: ...

    @abstractmethod
    def warn(self, message: str) -> None: ...

    @abstractmethod
    def error(self, message: str) -> None: ...


class LoggingReporter(object):
    def __init__(self, name: str = "toadus.feedback.progress") -> None:
        self.logger = logging.getLogger(name)

    def progress(self, message: str) -> None:
        self.logger.info(message)

    def warn(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)


class StepCounter(object):
    """Numbers the `🐸 Step N:` lines of one feedback request."""

    def __init__(self, reporter: FeedbackReporter) -> None:
        self.reporter = reporter
        self.count = 0

    def __call__(self, message: str) -> None:
        self.count += 1
        self.reporter.progress(f"🐸 Step {self.count}: {message}")


class FeedbackEventLog(object):
    """Structured record of feedback events, emitted as log records.

    Each event is logged at INFO with its payload as `extra`, so a handler
    attached to `toadus.feedback.events` receives every field.
    """

    def __init__(self, name: str = "toadus.feedback.events") -> None:
        self.logger = logging.getLogger(name)

    def record(self, event: FeedbackEvent, level: int = logging.INFO, **payload: t.Any) -> None:
        self.logger.log(level, event.value, extra={"event": event.value, **payload})

    def assistance_request(self, strategy: str, thoroughness: str) -> None:
        self.record(FeedbackEvent.AssistanceRequest, feedbackstrategy=strategy, thoroughness=thoroughness)

    def mutant(
        self,
        event: FeedbackEvent,
        *,
        test_file_name: str,
        assignment: str,
        student_preds: str,
        mutant: str,
        test_failure_message: str | None = None,
    ) -> None:
        payload: dict[str, t.Any] = {
            "testFileName": test_file_name,
            "assignment": assignment,
            "student_preds": student_preds,
            "conceptual_mutant": mutant,
        }
        if test_failure_message is not None:
            payload["test_failure_message"] = test_failure_message
        self.record(event, **payload)

    def ambiguous_test(self, test_file_name: str, student_tests: str, wheat_output: str) -> None:
        self.record(
            FeedbackEvent.AmbiguousTest,
            studentTests=student_tests,
            wheat_output=wheat_output,
            testFile=test_file_name,
        )

    def file_download(self, url: str, status_code: int | None = None) -> None:
        self.record(FeedbackEvent.FileDownload, level=logging.ERROR, url=url, status_code=status_code)
