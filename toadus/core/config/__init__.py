__all__ = [
    "EvaluatorSettings",
    "FeedbackSettings",
    "LoggingSettings",
    "Settings",
    "StoreSettings",
]


from .feedback import EvaluatorSettings, FeedbackSettings, StoreSettings
from .logging import LoggingSettings
from .settings import Settings
