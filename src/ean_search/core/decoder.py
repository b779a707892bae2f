"""
Decoding of EAN Search JSON bodies into records.

The API answers with several shapes for the same kind of data:

- a bare object: ``{"ean": "...", ...}``
- a one-element array around that object: ``[{"ean": "...", ...}]``
- a list wrapped in an object: ``{"productlist": [{...}, {...}]}``

Decoding never raises. Malformed JSON, missing fields and fields of the
wrong type turn into "not found", an empty list or the field default.
"""

import json
import logging
from typing import Any, List, Optional

from ..models import Product, ProductFull
from .exceptions import InvalidResponseError

logger = logging.getLogger(__name__)

PRODUCT_LIST_FIELD = "productlist"

_MISSING = object()


class ResponseDecoder:
    """
    Turns raw response bodies into Product / ProductFull records and leaf values.

    Examples:
        >>> decoder = ResponseDecoder()
        >>> decoder.decode_single('[{"ean": "5099750442227", "name": "Bohemian Rhapsody"}]').name
        'Bohemian Rhapsody'
        >>> decoder.decode_list('{"productlist": []}')
        []
    """

    # ==================== Parsing ====================

    def parse(self, raw: Optional[str]) -> Any:
        """
        Parse a body as JSON.

        Raises:
            InvalidResponseError: If the body is missing or not JSON
        """
        if raw is None:
            raise InvalidResponseError("Empty response body")
        try:
            return json.loads(raw)
        except (ValueError, RecursionError) as e:
            raise InvalidResponseError(f"Malformed JSON: {e}") from e

    @staticmethod
    def unwrap(root: Any) -> Any:
        """
        Normalize a single-entity root.

        Returns the first element of a non-empty array, None for an empty
        array and the root itself otherwise.
        """
        if isinstance(root, list):
            return root[0] if root else None
        return root

    def _single_root(self, raw: Optional[str]) -> Any:
        try:
            return self.unwrap(self.parse(raw))
        except InvalidResponseError as e:
            logger.debug("Discarding undecodable response: %s", e)
            return None

    # ==================== Records ====================

    def decode_product(self, node: Any) -> Optional[Product]:
        """Decode one JSON object into a Product; None if it is not an object."""
        if not isinstance(node, dict):
            return None
        return Product(
            ean=as_text(node.get("ean")),
            name=as_text(node.get("name")),
            category_id=as_int(node.get("categoryId")),
            category_name=as_text(node.get("categoryName")),
            issuing_country=as_text(node.get("issuingCountry")),
        )

    def decode_single(self, raw: Optional[str]) -> Optional[ProductFull]:
        """
        Decode a lookup response.

        Returns:
            ProductFull, or None when the body is empty, malformed,
            an empty array or not an object
        """
        node = self._single_root(raw)
        product = self.decode_product(node)
        if product is None:
            return None
        return ProductFull(
            product=product,
            google_category_id=as_int(node.get("googleCategoryId")),
        )

    def decode_list(self, raw: Optional[str]) -> List[Product]:
        """
        Decode a ``productlist`` response.

        Elements that are not JSON objects are skipped; order is kept.

        Returns:
            List of products, empty on any decoding problem
        """
        try:
            root = self.parse(raw)
        except InvalidResponseError as e:
            logger.debug("Discarding undecodable product list: %s", e)
            return []

        if not isinstance(root, dict):
            return []

        items = root.get(PRODUCT_LIST_FIELD)
        if not isinstance(items, list):
            return []

        products = []
        for item in items:
            product = self.decode_product(item)
            if product is not None:
                products.append(product)
            else:
                logger.debug("Skipping non-object %s entry: %r", PRODUCT_LIST_FIELD, item)
        return products

    # ==================== Leaf values ====================

    def decode_field(self, raw: Optional[str], name: str) -> Any:
        """Raw value of one field of a single-entity response, or None."""
        node = self._single_root(raw)
        if not isinstance(node, dict):
            return None
        return node.get(name)

    def decode_text(self, raw: Optional[str], name: str) -> str:
        """Field as text, "" when absent."""
        return as_text(self.decode_field(raw, name))

    def decode_flag(self, raw: Optional[str], name: str) -> bool:
        """True exactly when the field reads "1" or "true" (any case)."""
        text = self.decode_text(raw, name)
        return text == "1" or text.lower() == "true"

    def decode_count(self, raw: Optional[str], name: str) -> Optional[int]:
        """Field as integer, None when absent or non-numeric."""
        value = as_int(self.decode_field(raw, name), default=_MISSING)
        return None if value is _MISSING else value


def as_text(value: Any, default: str = "") -> str:
    """
    Convert a JSON leaf to text.

    Strings are kept, booleans become "true"/"false" and numbers their
    decimal text. None, objects and arrays give the default.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return default


def as_int(value: Any, default: Any = 0) -> Any:
    """
    Convert a JSON leaf to int.

    Integers are kept, floats truncated and numeric strings parsed.
    Booleans and everything else give the default.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return default
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
        try:
            return as_int(float(value), default)
        except ValueError:
            return default
    return default
