"""
Logging and Retry Configuration Examples

Shows structured logging and the rate-limit retry policy.
Set EAN_SEARCH_TOKEN before running.
"""

import os

from ean_search import EANSearch, EANSearchConfig, LoggingConfig, RetryConfig


def colored_console():
    """Colored console logging for local debugging."""
    print("\n=== Colored Console Logging ===")

    config = EANSearchConfig.create(
        timeout=10,
        logging=LoggingConfig.create(level="DEBUG", format="colored"),
    )

    with EANSearch(os.environ["EAN_SEARCH_TOKEN"], config=config) as client:
        client.verify_checksum("5099750442227")


def json_file_logging():
    """JSON records in a rotating file, tagged with static fields."""
    print("\n=== JSON File Logging ===")

    config = EANSearchConfig(
        logging=LoggingConfig.create(
            level="INFO",
            format="json",
            enable_console=False,
            enable_file=True,
            file_path="logs/ean_search.log",
            extra_fields={"service": "catalog-sync"},
        )
    )

    with EANSearch(os.environ["EAN_SEARCH_TOKEN"], config=config) as client:
        client.product_search("Bohemian Rhapsody")

    print("Written to logs/ean_search.log")


def patient_retries():
    """More attempts and longer waits for batch jobs hitting the rate limit."""
    print("\n=== Retry Policy ===")

    config = EANSearchConfig(
        retry=RetryConfig(
            max_attempts=6,
            backoff_base=1.0,
            backoff_max=30.0,
            retry_after_max=120.0,
        )
    )

    with EANSearch(os.environ["EAN_SEARCH_TOKEN"], config=config) as client:
        for ean in ("5099750442227", "4006381333931", "0012345678905"):
            product = client.barcode_lookup(ean)
            print(f"{ean}: {product.name if product else '-'}")


if __name__ == "__main__":
    colored_console()
    json_file_logging()
    patient_retries()
