import enum
import json
import pathlib
import typing as t

import pydantic as p

JSONPrimitive = str | int | float | bool | None
JSONValue = JSONPrimitive | list["JSONValue"] | dict[str, "JSONValue"]


def encode_bytes(obj: bytes) -> str:
    lorig = len(obj)
    h = obj[:64].hex()
    s = " ".join([h[i : i + 2] for i in range(0, 32, 2)])

    if lorig > 64:
        s += " ..."
    return f"[{lorig:5}] {s.upper()}"


class JSONEncoder(json.JSONEncoder):
    def get_encoders(self) -> dict[type, t.Callable[[t.Any], JSONValue]]:
        return {
            bytes: encode_bytes,
            set: list,
            frozenset: list,
            tuple: list,
            pathlib.Path: str,
            enum.Enum: lambda e: e.value,
            p.BaseModel: lambda m: m.model_dump(mode="json"),
            p.AnyUrl: str,
        }

    def default(self, o: t.Any) -> JSONValue:
        for type_, encode in self.get_encoders().items():
            if isinstance(o, type_):
                return encode(o)
        return repr(o)
