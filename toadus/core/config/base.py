import typing as t

from pydantic_settings import BaseSettings as PydanticBaseSettings

from toadus.model import BaseModel


class BaseSettings(PydanticBaseSettings, BaseModel):  # pyright: ignore [reportIncompatibleVariableOverride]
    """Settings section; `model_dump` keeps aliases, as `BaseModel` does."""

    def __init__(self, cf: dict[str, t.Any] | None = None, **kwargs: t.Any):
        # allow initialization from a plain dict of values
        if cf is not None:
            kwargs = {**cf, **kwargs}
        super().__init__(**kwargs)
