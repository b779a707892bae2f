"""
Helpers for keeping the API token out of logs and error messages.
"""

import re
from typing import Any, Dict, Optional, Set
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

MASK = '***REDACTED***'

# Query parameters and log fields whose values must never be written out
SENSITIVE_KEYS = {
    'token',
    'access_token',
    'api_key',
    'apikey',
    'password',
    'secret',
    'authorization',
}

_TOKEN_PATTERN = re.compile(r'([?&]token=)([^&\s]+)', re.IGNORECASE)


def sanitize_url(url: str, extra_params: Optional[Set[str]] = None, mask: str = MASK) -> str:
    """
    Mask sensitive query parameters of a URL for safe logging.

    Parameter order and all other values are kept as they are.

    Args:
        url: URL to sanitize
        extra_params: Additional parameter names to mask (case-insensitive)
        mask: Replacement value

    Examples:
        >>> sanitize_url('https://api.ean-search.org/api?op=barcode-lookup&ean=1&token=abc&format=json')
        'https://api.ean-search.org/api?op=barcode-lookup&ean=1&token=***REDACTED***&format=json'
    """
    if not url:
        return url

    sensitive = SENSITIVE_KEYS | ({p.lower() for p in extra_params} if extra_params else set())

    try:
        parsed = urlparse(url)
        if not parsed.query:
            return url

        pairs = parse_qsl(parsed.query, keep_blank_values=True)
        if not any(name.lower() in sensitive for name, _ in pairs):
            return url

        masked = [(name, mask if name.lower() in sensitive else value) for name, value in pairs]
        return urlunparse(parsed._replace(query=urlencode(masked, safe='*')))
    except ValueError:
        # Never fall back to the original URL
        return _TOKEN_PATTERN.sub(rf'\1{mask}', url)


def mask_sensitive_data(data: Any, mask: str = MASK) -> Any:
    """
    Recursively mask sensitive values in log fields.

    Dict keys listed in SENSITIVE_KEYS are replaced with the mask, strings
    that look like URLs are passed through sanitize_url.

    Examples:
        >>> mask_sensitive_data({"token": "abc", "ean": "5099750442227"})
        {'token': '***REDACTED***', 'ean': '5099750442227'}
    """
    if isinstance(data, dict):
        return _mask_dict(data, mask)

    if isinstance(data, (list, tuple)):
        return type(data)(mask_sensitive_data(item, mask) for item in data)

    if isinstance(data, str) and '://' in data:
        return sanitize_url(data, mask=mask)

    return data


def _mask_dict(data: Dict[Any, Any], mask: str) -> Dict[Any, Any]:
    result = {}
    for key, value in data.items():
        if str(key).lower() in SENSITIVE_KEYS:
            result[key] = mask
        else:
            result[key] = mask_sensitive_data(value, mask)
    return result
