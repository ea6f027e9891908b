"""crpt_api data models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class DocumentFormat(StrEnum):
    """Document encoding format accepted by the create endpoint."""

    MANUAL = "MANUAL"


class DocumentType(StrEnum):
    """Document type accepted by the create endpoint."""

    LP_INTRODUCE_GOODS = "LP_INTRODUCE_GOODS"


@dataclass(frozen=True)
class CallOptions:
    """Per-call overrides. None means "use the client default"."""

    headers: Mapping[str, str] | None = None
    request_timeout: float | None = None
    product_group: str | None = None

    @classmethod
    def of_product_group(cls, product_group: str) -> CallOptions:
        return cls(product_group=product_group)

    def normalized_product_group(self) -> str | None:
        """Return the product group, or None when it is absent or blank."""
        if self.product_group is None or not self.product_group.strip():
            return None
        return self.product_group


@dataclass(frozen=True)
class HttpRequest:
    """A single HTTP exchange handed to a Transport."""

    method: str
    url: str
    headers: Mapping[str, str]
    body: str | None
    timeout: float | None


@dataclass(frozen=True)
class RawResponse:
    """Status, body and headers as returned by a Transport."""

    status_code: int
    body: str = ""
    headers: Mapping[str, list[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class CreateDocumentRequest:
    """Wire envelope of the create document call."""

    product_document: str
    signature: str
    product_group: str | None = None
    document_format: DocumentFormat = DocumentFormat.MANUAL
    type: DocumentType = DocumentType.LP_INTRODUCE_GOODS

    def to_dict(self) -> dict[str, Any]:
        """Convert to the request body dict. product_group is omitted when unset."""
        data: dict[str, Any] = {
            "document_format": str(self.document_format),
            "product_document": self.product_document,
            "signature": self.signature,
            "type": str(self.type),
        }
        if self.product_group is not None:
            data["product_group"] = self.product_group
        return data


@dataclass
class CreateDocumentResponse:
    """Body of a successful create document call."""

    value: str | None = None


@dataclass(frozen=True)
class CreateDocumentResult:
    """Successful outcome: the raw response and, when it parsed, its body."""

    raw: RawResponse
    parsed: CreateDocumentResponse | None = None
