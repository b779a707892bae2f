"""
Basic EAN Search Usage Examples

Demonstrates barcode lookups, searches and the credit counter.
Set EAN_SEARCH_TOKEN before running.
"""

import os

from ean_search import EANSearch, Language


def barcode_lookup(client):
    """Look up one product by EAN."""
    print("\n=== Barcode Lookup ===")

    product = client.barcode_lookup("5099750442227")
    if product is None:
        print("Not found")
        return

    print(f"Name: {product.name}")
    print(f"Category: {product.category_name} ({product.category_id})")
    print(f"Issued in: {product.issuing_country}")


def book_lookup(client):
    """Look up a book by ISBN-10."""
    print("\n=== ISBN Lookup ===")

    book = client.isbn_lookup("1119578884")
    print(f"Title: {book.name if book else 'not found'}")


def checks(client):
    """Checksum and issuing country."""
    print("\n=== Checks ===")

    print(f"Checksum valid: {client.verify_checksum('5099750442227')}")
    print(f"Issuing country: {client.issuing_country_lookup('5099750442227')}")


def searches(client):
    """Name, category and prefix searches."""
    print("\n=== Searches ===")

    for product in client.product_search("Bohemian Rhapsody"):
        print(f"{product.ean} {product.name}")

    for product in client.category_search(45, "Thriller", language=Language.ENGLISH):
        print(f"{product.ean} {product.name}")

    print(f"Prefix matches on page 0: {len(client.barcode_prefix_search('4007249146'))}")


if __name__ == "__main__":
    with EANSearch(os.environ["EAN_SEARCH_TOKEN"]) as client:
        barcode_lookup(client)
        book_lookup(client)
        checks(client)
        searches(client)
        print(f"\nCredits remaining: {client.credits_remaining()}")
