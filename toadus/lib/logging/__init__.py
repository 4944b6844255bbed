__all__ = ["ExtraFormatter", "LogStyle", "TRACE", "TraceLogLevelLogger"]

from .extra import ExtraFormatter
from .style import LogStyle
from .trace import TRACE, TraceLogLevelLogger
