"""JsonCodec unit tests."""

import dataclasses
from datetime import date

import pytest

from crpt_api import CodecError, CreateDocumentResponse, JsonCodec
from crpt_api.codec import from_base64_text, to_base64_text


@dataclasses.dataclass
class _Product:
    gtin: str
    produced: date


def test_encode_is_independent_of_key_order() -> None:
    """Equal mappings encode to the same compact text."""
    codec = JsonCodec()
    assert codec.encode({"b": 1, "a": 2}) == codec.encode({"a": 2, "b": 1}) == '{"a":2,"b":1}'


def test_encode_dataclass_and_date() -> None:
    """Dataclasses and dates are converted to JSON values."""
    encoded = JsonCodec().encode(_Product(gtin="0460", produced=date(2024, 1, 31)))
    assert encoded == '{"gtin":"0460","produced":"2024-01-31"}'


def test_encode_keeps_non_ascii() -> None:
    """Non-ASCII text is written unescaped."""
    assert JsonCodec().encode({"name": "молоко"}) == '{"name":"молоко"}'


def test_encode_unsupported_value_raises_codec_error() -> None:
    """Values with no JSON form raise CodecError."""
    with pytest.raises(CodecError):
        JsonCodec().encode({"x": object()})


def test_decode_into_response_model() -> None:
    """Decoding validates into the response model."""
    parsed = JsonCodec().decode('{"value":"doc-1"}', CreateDocumentResponse)
    assert parsed == CreateDocumentResponse(value="doc-1")


def test_decode_plain_types() -> None:
    """Plain types are decoded as is."""
    assert JsonCodec().decode('{"a":[1,2]}', dict) == {"a": [1, 2]}


def test_decode_invalid_raises_codec_error() -> None:
    """Malformed JSON raises CodecError."""
    with pytest.raises(CodecError) as exc_info:
        JsonCodec().decode("{not json", CreateDocumentResponse)
    assert exc_info.value.code == "CODEC_ERROR"


def test_base64_round_trip_preserves_all_bytes() -> None:
    """Base64 text decodes back to the original UTF-8 text."""
    text = '{"name":"молоко","emoji":"🥛","ctrl":"\\u0000"}'
    encoded = to_base64_text(text)
    assert encoded == to_base64_text(text)
    assert from_base64_text(encoded) == text
