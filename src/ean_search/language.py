"""Language ids understood by the EAN Search API."""

from enum import IntEnum


class Language(IntEnum):
    """Numeric language ids; ANY disables the language filter."""
    ENGLISH = 1
    DANISH = 2
    GERMAN = 3
    SPANISH = 4
    FINNISH = 5
    FRENCH = 6
    ITALIAN = 8
    DUTCH = 10
    NORWEGIAN = 11
    POLISH = 12
    PORTUGUESE = 13
    SWEDISH = 15
    ANY = 99
