import typing as t

import pydantic as p


class BaseModel(p.BaseModel):
    def model_dump(self, *, by_alias: bool | None = True, **kwargs: t.Any) -> dict[str, t.Any]:  # pyright: ignore [reportIncompatibleMethodOverride]
        # aliases are the external names (e.g. "()" and "class" for dictConfig)
        return super().model_dump(by_alias=by_alias, **kwargs)


class FrozenModel(BaseModel):
    """Value records produced while analyzing a run; never edited after creation."""

    model_config = p.ConfigDict(frozen=True)
