"""
EAN Search API client: barcode, ISBN and product lookups.
"""

from typing import List, Optional, Union
from urllib.parse import quote_plus

from .core.config import EANSearchConfig
from .core.decoder import ResponseDecoder
from .core.executor import UNKNOWN_CREDITS, Params, RequestExecutor
from .language import Language
from .models import Product, ProductFull

LanguageId = Union[Language, int]


def _encode_term(text) -> str:
    """URL-encode free search text (spaces become "+"); non-text gives "".

    Characters that cannot be encoded as UTF-8 become "?".
    """
    if isinstance(text, (str, bytes)):
        return quote_plus(text, errors="replace")
    return ""


class EANSearch:
    """
    Client for the EAN-Search.org API.

    Every method is total: failures (network errors, HTTP errors, malformed
    responses) are reported through the method's empty value - None, [],
    "" or False - and never raised.

    Example:
        >>> with EANSearch("my-token") as client:
        ...     product = client.barcode_lookup("5099750442227")
        ...     if product:
        ...         print(product.name, product.category_name)
    """

    def __init__(self, token: str, config: Optional[EANSearchConfig] = None):
        """
        Args:
            token: API access token
            config: Client configuration (defaults if None)

        Raises:
            ConfigurationError: If the token is empty
        """
        object.__setattr__(self, '_executor', RequestExecutor(token, config))
        object.__setattr__(self, '_decoder', ResponseDecoder())
        object.__setattr__(self, '_initialized', True)

    def __setattr__(self, name, value):
        """Forbid changes after init (the token is fixed for the client's lifetime)."""
        if hasattr(self, '_initialized'):
            raise RuntimeError(
                f"Cannot modify '{name}' - EANSearch is immutable. "
                f"Create new instance instead."
            )
        object.__setattr__(self, name, value)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self):
        """Release the HTTP sessions of all threads."""
        self._executor.close()

    def _fetch(self, params: Params) -> Optional[str]:
        result = self._executor.call(params)
        return result.body if result.ok else None

    # ==================== Lookups ====================

    def barcode_lookup(self, ean: str, language: LanguageId = Language.ENGLISH) -> Optional[ProductFull]:
        """
        Look up a product by EAN/UPC/GTIN.

        Args:
            ean: Barcode, passed to the API verbatim
            language: Preferred language of the product name

        Returns:
            ProductFull, or None if not found or on error
        """
        body = self._fetch([("op", "barcode-lookup"), ("ean", ean), ("language", language)])
        return self._decoder.decode_single(body)

    def isbn_lookup(self, isbn: str) -> Optional[ProductFull]:
        """Look up a book by ISBN-10 or ISBN-13."""
        body = self._fetch([("op", "barcode-lookup"), ("isbn", isbn)])
        return self._decoder.decode_single(body)

    def verify_checksum(self, ean: str) -> bool:
        """True if the service reports the barcode's checksum as valid."""
        body = self._fetch([("op", "verify-checksum"), ("ean", ean)])
        return self._decoder.decode_flag(body, "valid")

    def issuing_country_lookup(self, ean: str) -> str:
        """ISO code of the country that issued the barcode, "" if unknown."""
        body = self._fetch([("op", "issuing-country"), ("ean", ean)])
        return self._decoder.decode_text(body, "issuingCountry")

    def barcode_image(self, ean: str, width: int, height: int) -> str:
        """
        Barcode image for an EAN.

        Returns:
            Base64-encoded PNG as sent by the API, "" on error
        """
        body = self._fetch([
            ("op", "barcode-image"),
            ("ean", ean),
            ("width", width),
            ("height", height),
        ])
        return self._decoder.decode_text(body, "barcode")

    # ==================== Searches ====================

    def product_search(self, name: str, language: LanguageId = Language.ANY, page: int = 0) -> List[Product]:
        """
        Search products by (part of the) name.

        Args:
            name: Search text
            language: Restrict results to one language (ANY = no filter)
            page: Result page, starting at 0
        """
        return self._search([
            ("op", "product-search"),
            ("name", _encode_term(name)),
            ("language", language),
            ("page", page),
        ])

    def similar_product_search(self, name: str, language: LanguageId = Language.ANY, page: int = 0) -> List[Product]:
        """Search products with names similar to ``name``."""
        return self._search([
            ("op", "similar-product-search"),
            ("name", _encode_term(name)),
            ("language", language),
            ("page", page),
        ])

    def category_search(
        self,
        category: int,
        name: str,
        language: LanguageId = Language.ANY,
        page: int = 0,
    ) -> List[Product]:
        """Search products by name within one numeric category."""
        return self._search([
            ("op", "category-search"),
            ("category", category),
            ("name", _encode_term(name)),
            ("language", language),
            ("page", page),
        ])

    def barcode_prefix_search(
        self,
        prefix: str,
        language: LanguageId = Language.ENGLISH,
        page: int = 0,
    ) -> List[Product]:
        """List products whose barcode starts with ``prefix`` (passed verbatim)."""
        return self._search([
            ("op", "barcode-prefix-search"),
            ("prefix", prefix),
            ("language", language),
            ("page", page),
        ])

    def _search(self, params: Params) -> List[Product]:
        return self._decoder.decode_list(self._fetch(params))

    # ==================== Account ====================

    def credits_remaining(self) -> int:
        """
        Remaining API credits.

        The count is taken from the credits header of any earlier response.
        Only when none was seen yet, one account-status call is made.

        Returns:
            Credit count, -1 if the service did not report one
        """
        if self._executor.credits_remaining == UNKNOWN_CREDITS:
            body = self._fetch([("op", "account-status")])
            if self._executor.credits_remaining == UNKNOWN_CREDITS:
                count = self._decoder.decode_count(body, "creditsRemaining")
                if count is not None:
                    self._executor.record_credits(count)
        return self._executor.credits_remaining

    def reset_credit_tracking(self) -> None:
        """Forget the cached credit count; the next inquiry asks the service again."""
        self._executor.reset_credits()
