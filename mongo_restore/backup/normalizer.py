"""Convert exported JSON values back into typed MongoDB values.

Exports flatten ObjectIds and dates into plain strings. ``normalize`` walks a
parsed document and turns them back into ``bson.ObjectId`` and timezone-aware
``datetime`` values, following a small set of per-key rules:

  - ``name`` is always copied unchanged
  - a string ``_id`` becomes an ObjectId without validation
  - ``payments`` and ``purchasedProducts`` arrays get their known id/date
    fields converted, nothing else
  - any other string that parses as a date becomes a datetime
  - plain arrays get their ObjectId-shaped strings converted; documents held
    by plain arrays are not descended into
  - nested documents are normalized recursively
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List

from bson import ObjectId
from bson.errors import InvalidId

from ..exceptions import ConversionError


def is_date_string(value: str) -> bool:
    """Return True if ``value`` parses as an ISO-8601 date or date-time.

    This is the date detection heuristic on its own, so its false positives
    (for example eight-digit strings such as ``"20230101"``) can be tested
    separately from the conversion rules.
    """
    return _parse_datetime(value) is not None


def _parse_datetime(value: str):
    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_timestamp(value: str, field: str = "") -> datetime:
    """Convert a date string to a timezone-aware datetime."""
    parsed = _parse_datetime(value)
    if parsed is None:
        raise ConversionError(field, value, "timestamp")
    return parsed


def to_object_id(value: str, field: str = "_id") -> ObjectId:
    """Convert a 24-hex-character string to an ObjectId."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as e:
        raise ConversionError(field, value, "ObjectId") from e


def normalize(value: Any) -> Any:
    """Return a copy of ``value`` with exported strings converted to typed values."""
    if isinstance(value, list):
        return [normalize(item) for item in value]

    if isinstance(value, dict):
        return {key: _normalize_field(key, item) for key, item in value.items()}

    return value


def _normalize_field(key: str, value: Any) -> Any:
    strategy = FIELD_STRATEGIES.get(key, _default_strategy)
    return strategy(value)


def _keep(value: Any) -> Any:
    return value


def _convert_id(value: Any) -> Any:
    # Not pre-validated; a malformed _id raises ConversionError
    if isinstance(value, str):
        return to_object_id(value, "_id")
    return _default_strategy(value)


def _convert_payments(value: Any) -> Any:
    if not isinstance(value, list):
        return _default_strategy(value)

    payments = []
    for payment in value:
        if isinstance(payment, dict):
            payment = dict(payment)
            if payment.get("_id") and isinstance(payment["_id"], str):
                payment["_id"] = to_object_id(payment["_id"], "payments._id")
            if payment.get("date") and isinstance(payment["date"], str):
                payment["date"] = to_timestamp(payment["date"], "payments.date")
        payments.append(payment)
    return payments


def _convert_purchased_products(value: Any) -> Any:
    if not isinstance(value, list):
        return _default_strategy(value)

    products = []
    for product in value:
        if isinstance(product, dict):
            product = dict(product)
            if product.get("_id") and isinstance(product["_id"], str):
                product["_id"] = to_object_id(product["_id"], "purchasedProducts._id")
            product_id = product.get("productId")
            if isinstance(product_id, str) and ObjectId.is_valid(product_id):
                product["productId"] = ObjectId(product_id)
        products.append(product)
    return products


def _convert_array(value: List[Any]) -> List[Any]:
    return [
        ObjectId(item) if isinstance(item, str) and ObjectId.is_valid(item) else item
        for item in value
    ]


def _default_strategy(value: Any) -> Any:
    if isinstance(value, str) and is_date_string(value):
        return to_timestamp(value)
    if isinstance(value, list):
        return _convert_array(value)
    return normalize(value)


FIELD_STRATEGIES: Dict[str, Callable[[Any], Any]] = {
    "name": _keep,
    "_id": _convert_id,
    "payments": _convert_payments,
    "purchasedProducts": _convert_purchased_products,
}
