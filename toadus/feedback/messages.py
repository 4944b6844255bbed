"""Text shown to students. Kept in one place so wording changes stay reviewable."""

from __future__ import annotations

import typing as t

from toadus.model.evaluation import TIMEOUT_MESSAGE

FEEDBACK_FORM_URL: t.Final[str] = "https://forms.gle/t2imxLGNC7Yqpo6GA"

NOT_ENABLED_MESSAGE: t.Final[str] = (
    "Sorry! Toadus Ponens is not available for this assignment. "
    "Please contact course staff if you believe this is an error."
)
NETWORK_ERROR_MESSAGE: t.Final[str] = "Toadus : Network error. Terminating run."
LAUNCH_FAILURE_MESSAGE: t.Final[str] = "Could not run Toadus Ponens process."

CONSISTENCY_MESSAGE: t.Final[str] = (
    "🎉 Your tests are all consistent with the assignment specification! 🎉 "
    "Just because your tests are consistent, however, does not mean they thoroughly explore the problem space."
)
ANALYZED_CONSISTENCY_MESSAGE: t.Final[str] = (
    "🎉 Analyzed tests are all consistent with the assignment specification! "
    "However, the tests we could not analyze are either inconsistent with "
    "or test behavior not specified by the problem statement."
)
AMBIGUOUS_TEST_MESSAGE: t.Final[str] = (
    "Analyzed test(s) examine behaviors that are not clearly defined in the problem specification. "
    "They are not necessarily incorrect, but I cannot provide feedback around them.\n"
    f"If you disagree with this, fill out this form: {FEEDBACK_FORM_URL}"
)
SOMETHING_WENT_WRONG: t.Final[str] = (
    "Something went wrong during Toadus Ponens analysis. "
    "While I will still make a best effort to provide useful feedback, "
    "consider examining your tests with course staff. "
    "You may find it useful to share the error log with them."
)
MISSING_HINT_WARNING: t.Final[str] = (
    "Something went wrong during Toadus Ponens analysis. "
    "While I will still make a best effort to provide useful feedback, "
    "consider examining your tests with course staff."
)

SKIPPED_TEST_MESSAGE: t.Final[str] = (
    "Toadus Ponens cannot analyze test-expects or arbitrary assertions of satisfaction "
    "(e.g., assert {...} is sat|unsat)."
)
SKIPPED_ADDITIONAL: t.Final[str] = "Additionally, could not analyze the following tests:\n"

NO_THOROUGHNESS_HINT_MESSAGE: t.Final[str] = (
    "I could not generate a hint to help evaluate test thoroughness. "
    "It's important to remember that this doesn't automatically mean the tests are exhaustive "
    "or explore every aspect of the problem."
)
NO_INCONSISTENT_TESTS_MESSAGE: t.Final[str] = (
    "The remaining tests seem consistent with the problem, "
    "but may test behavior that is not clearly defined in the problem specification. "
    "You may want to change settings to 'Per Test' to get individual feedback around these tests."
)
UNSPECIFIED_BEHAVIOR_WARNING: t.Final[str] = (
    "🚨: Some analyzed tests examine behavior not specified by the problem statement."
)

FAILURE_HINT_PREFIX: t.Final[str] = "🐸💡 "
THOROUGHNESS_HINT_PREFIX: t.Final[str] = "🐸 🗯️ "

__all__ = [
    "AMBIGUOUS_TEST_MESSAGE",
    "ANALYZED_CONSISTENCY_MESSAGE",
    "CONSISTENCY_MESSAGE",
    "FAILURE_HINT_PREFIX",
    "FEEDBACK_FORM_URL",
    "LAUNCH_FAILURE_MESSAGE",
    "MISSING_HINT_WARNING",
    "NETWORK_ERROR_MESSAGE",
    "NO_INCONSISTENT_TESTS_MESSAGE",
    "NO_THOROUGHNESS_HINT_MESSAGE",
    "NOT_ENABLED_MESSAGE",
    "SKIPPED_ADDITIONAL",
    "SKIPPED_TEST_MESSAGE",
    "SOMETHING_WENT_WRONG",
    "THOROUGHNESS_HINT_PREFIX",
    "TIMEOUT_MESSAGE",
    "UNSPECIFIED_BEHAVIOR_WARNING",
    "runtime_error_message",
]


def runtime_error_message(stderr: str) -> str:
    return f"I found a runtime or syntax error in your tests:\n {stderr}"
