import json
import logging
import string
import sys
import textwrap
import typing as t

import pygments
from pygments.formatters import Terminal256Formatter
from pygments.lexers.data import JsonLexer  # pyright: ignore [reportMissingTypeStubs]
from pygments.style import Style

from .json import JSONEncoder
from .style import LogStyle

# attributes every LogRecord carries, plus those added by formatting and colorlog
ReservedKeys: t.Final[frozenset[str]] = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", None, None).__dict__
) | {"message", "asctime", "log_color", "reset"}


def abbreviate(value: t.Any, limit: int | None) -> t.Any:
    """Shorten long strings (whole Forge programs, mostly) to `limit` characters."""
    if limit is None or not isinstance(value, str) or len(value) <= limit:
        return value
    lines = value.count("\n") + 1
    return f"{value[:limit]}... [{len(value)} chars, {lines} lines]"


class ExtraFormatter(logging.Formatter):
    """Render a record with its base formatter, then append its `extra` fields as JSON.

    Continuation lines of a multi-line message are indented to line up with
    the first. String fields longer than `max_value_length` are abbreviated.
    """

    def __init__(
        self,
        base: type[logging.Formatter],
        format: str | None,
        datefmt: str | None = None,
        indent: bool | None = True,
        pyg_style: t.Type[Style] = LogStyle,
        style: t.Literal["%", "{", "$"] = "%",
        validate: bool = True,
        *,
        defaults: t.Any = None,
        no_color: bool = False,
        max_value_length: int | None = None,
        **kwargs: t.Any,
    ):
        super().__init__(format, datefmt=datefmt, style=style, validate=validate, defaults=defaults)
        self.base = base(format, datefmt=datefmt, style=style, validate=validate, defaults=defaults, **kwargs)
        self.pyg_style = pyg_style
        self.indent = bool(indent)
        self.no_color = no_color
        self.max_value_length = max_value_length

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()
        if "\n" in msg:
            prefix = self.base.format(record)
            margin = " " * sum(1 for c in prefix[: prefix.find(msg)] if c in string.printable)
            first, rest = msg.split("\n", 1)
            record.msg = record.message = f"{first}\n{textwrap.indent(rest, margin)}"
            record.args = None
        message = self.base.format(record)

        extra = {
            k: abbreviate(v, self.max_value_length)
            for k, v in sorted(record.__dict__.items())
            if k not in ReservedKeys
        }
        if not extra:
            return message

        js = json.dumps(extra, indent=(4 if self.indent else None), cls=JSONEncoder)
        if self.colorize:
            hl = pygments.highlight  # pyright: ignore [reportUnknownMemberType, reportUnknownVariableType]
            js = hl(js, JsonLexer(), Terminal256Formatter(style=self.pyg_style), None)
        return f"{message} {js.strip()}"

    @property
    def colorize(self) -> bool:
        return not self.no_color and sys.stderr.isatty()

    def __getattr__(self, name: str) -> t.Any:
        if name == "base":
            raise AttributeError(name)
        return getattr(self.base, name)
