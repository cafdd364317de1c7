"""
Parser for serialized change sets.

The update action receives {"changes": "<JSON array>"} where each element is
{"productId": str, "variantId": str, "newPrice": number}.
"""

from dataclasses import dataclass, field
from typing import Any
import json
import math

from models.price_update import ChangeRecord


@dataclass
class ChangesPayloadParseResult:
    """Result of parsing a serialized change set."""
    changes: list[ChangeRecord] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return len(self.errors) == 0


def _parse_record(index: int, item: Any, errors: list[str]):
    if not isinstance(item, dict):
        errors.append(f"[{index}] expected object")
        return None

    product_id = item.get("productId")
    variant_id = item.get("variantId")
    new_price = item.get("newPrice")

    if not isinstance(product_id, str) or not product_id:
        errors.append(f"[{index}] productId must be a non-empty string")
        return None
    if not isinstance(variant_id, str) or not variant_id:
        errors.append(f"[{index}] variantId must be a non-empty string")
        return None
    if isinstance(new_price, bool) or not isinstance(new_price, (int, float)) \
            or not math.isfinite(new_price):
        errors.append(f"[{index}] newPrice must be a finite number")
        return None

    return ChangeRecord(product_id=product_id, variant_id=variant_id, new_price=float(new_price))


def parse_changes_payload(raw: Any) -> ChangesPayloadParseResult:
    """
    Parse the JSON array of change records.

    Args:
        raw: JSON text of the array

    Returns:
        ChangesPayloadParseResult; any invalid element is reported in errors
    """
    if not isinstance(raw, str) or not raw.strip():
        return ChangesPayloadParseResult(errors=["changes must be a JSON array string"])

    try:
        items = json.loads(raw)
    except ValueError as e:
        return ChangesPayloadParseResult(errors=[f"invalid JSON: {e}"])

    if not isinstance(items, list):
        return ChangesPayloadParseResult(errors=["changes must be a JSON array"])

    result = ChangesPayloadParseResult()
    for index, item in enumerate(items):
        record = _parse_record(index, item, result.errors)
        if record is not None:
            result.changes.append(record)

    return result


def serialize_changes(changes: list[ChangeRecord]) -> dict[str, str]:
    """Inverse of parse_changes_payload(): the form body sent to the updater."""
    return {
        "changes": json.dumps([change.model_dump(by_alias=True) for change in changes])
    }
