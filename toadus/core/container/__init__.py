__all__ = [
    "BootConfiguration",
    "FeedbackContainer",
    "ToadusContainer",
]

from .feedback import FeedbackContainer
from .toadus import BootConfiguration, ToadusContainer
