"""Payload codecs."""

from __future__ import annotations

import base64
import json
from abc import ABC, abstractmethod
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from .exceptions import CodecError

T = TypeVar("T")


class PayloadCodec(ABC):
    """Serializes structured values to text and back."""

    @abstractmethod
    def encode(self, value: Any) -> str: ...

    @abstractmethod
    def decode(self, text: str, shape: type[T]) -> T: ...


class JsonCodec(PayloadCodec):
    """Compact JSON with sorted keys, so equal values always encode identically.

    Dataclasses, pydantic models, enums and dates are converted through
    pydantic before serialization.
    """

    def __init__(self) -> None:
        self._adapters: dict[Any, TypeAdapter[Any]] = {}

    def encode(self, value: Any) -> str:
        try:
            return json.dumps(
                to_jsonable_python(value),
                ensure_ascii=False,
                sort_keys=True,
                separators=(",", ":"),
            )
        except (PydanticSerializationError, TypeError, ValueError) as e:
            raise CodecError(f"Failed to encode {type(value).__name__}: {e}", cause=e) from e

    def decode(self, text: str, shape: type[T]) -> T:
        adapter = self._adapters.get(shape)
        if adapter is None:
            adapter = TypeAdapter(shape)
            self._adapters[shape] = adapter
        try:
            return adapter.validate_json(text)
        except ValidationError as e:
            name = getattr(shape, "__name__", repr(shape))
            raise CodecError(f"Failed to decode {name}: {e}", cause=e) from e


def to_base64_text(text: str) -> str:
    """Standard base64 of the UTF-8 bytes of text."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def from_base64_text(data: str) -> str:
    return base64.b64decode(data, validate=True).decode("utf-8")
