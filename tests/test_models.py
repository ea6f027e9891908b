"""Data model unit tests."""

import pytest

from crpt_api import CallOptions, CreateDocumentRequest


def test_create_document_request_to_dict() -> None:
    """The envelope carries the fixed format and type constants."""
    request = CreateDocumentRequest(product_document="eyJ9", signature="sig==", product_group="milk")
    assert request.to_dict() == {
        "document_format": "MANUAL",
        "product_document": "eyJ9",
        "product_group": "milk",
        "signature": "sig==",
        "type": "LP_INTRODUCE_GOODS",
    }


def test_create_document_request_omits_missing_product_group() -> None:
    """product_group is left out when absent."""
    data = CreateDocumentRequest(product_document="eyJ9", signature="sig==").to_dict()
    assert "product_group" not in data


@pytest.mark.parametrize(
    ("product_group", "expected"),
    [("milk", "milk"), (None, None), ("", None), ("  ", None)],
)
def test_call_options_product_group(product_group: str | None, expected: str | None) -> None:
    """Blank product groups normalize to None."""
    assert CallOptions(product_group=product_group).normalized_product_group() == expected


def test_call_options_of_product_group() -> None:
    """of_product_group sets only the product group."""
    options = CallOptions.of_product_group("shoes")
    assert options.product_group == "shoes"
    assert options.headers is None
    assert options.request_timeout is None
