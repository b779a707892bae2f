"""Records returned by the EAN Search API."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Product:
    """
    Basic product information, as returned by the search endpoints.

    Attributes:
        ean: EAN/UPC code
        name: Product name
        category_id: Numeric category id
        category_name: Category name
        issuing_country: ISO code of the country that issued the barcode
    """
    ean: str = ""
    name: str = ""
    category_id: int = 0
    category_name: str = ""
    issuing_country: str = ""


@dataclass(frozen=True)
class ProductFull:
    """
    Product details from a barcode or ISBN lookup.

    Wraps a Product and adds the Google product taxonomy id. The product
    fields are readable directly (``full.name``).
    """
    product: Product = field(default_factory=Product)
    google_category_id: int = 0

    @property
    def ean(self) -> str:
        return self.product.ean

    @property
    def name(self) -> str:
        return self.product.name

    @property
    def category_id(self) -> int:
        return self.product.category_id

    @property
    def category_name(self) -> str:
        return self.product.category_name

    @property
    def issuing_country(self) -> str:
        return self.product.issuing_country
