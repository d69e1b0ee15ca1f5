from datetime import datetime, timezone
from typing import Any, Union

from pydantic import BaseModel, Field, StrictBool, StrictFloat, StrictInt, StrictStr, ValidationError

from products_api.errors import InvalidProductError


class ProductIn(BaseModel):
    """Required shape of a product write. Each field is strictly typed, so
    `"9.99"` is not a price and `"true"` is not a stock flag."""

    name: StrictStr = Field(min_length=1)
    description: StrictStr = Field(min_length=1)
    price: Union[StrictInt, StrictFloat]
    category: StrictStr = Field(min_length=1)
    inStock: StrictBool


def validate_product(payload: Any) -> dict[str, Any]:
    """
    Check a write payload and return the document to store.

    Unrecognised fields are kept as sent; only the required fields are checked.
    Raises InvalidProductError for anything that is not a JSON object or fails
    a field rule.
    """
    if not isinstance(payload, dict):
        raise InvalidProductError()

    try:
        product = ProductIn.model_validate(payload)
    except ValidationError as exc:
        raise InvalidProductError() from exc

    document = dict(payload)
    document.update(product.model_dump())
    return document


def serialize_product(doc: dict[str, Any]) -> dict[str, Any]:
    out = {"id": str(doc["_id"])}
    for key, value in doc.items():
        if key == "_id":
            continue
        # Stored dates are UTC; clients not opened with tz_aware return them naive.
        if isinstance(value, datetime) and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        out[key] = value
    return out
