__all__ = [
    "BootConfiguration",
    "di",
    "LoggingProvider",
    "Settings",
    "ToadusContainer",
]


from . import di
from .config import Settings
from .container import BootConfiguration, ToadusContainer
from .provider import LoggingProvider
