from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..shared.models import ContentPointer, OperationResult


@dataclass(frozen=True)
class ResolutionResult(OperationResult):
    domain: Optional[str] = None
    address: Optional[str] = None
    content: Optional[ContentPointer] = None
    metadata: dict[str, str] = field(default_factory=dict)
    resolver_address: Optional[str] = None


@dataclass(frozen=True)
class VerificationResult(OperationResult):
    verified: bool = False
    domain: Optional[str] = None
    owner_address: Optional[str] = None


@dataclass(frozen=True)
class PropertyResult(OperationResult):
    domain: Optional[str] = None
    address: Optional[str] = None
    content: Optional[ContentPointer] = None
    metadata: dict[str, str] = field(default_factory=dict)
    resolver_address: Optional[str] = None
    property_metadata: dict[str, Any] = field(default_factory=dict)
