from __future__ import annotations

from typing import Optional
from urllib.parse import urlparse


def extract_domain(url: Optional[str]) -> str:
    """Hostname without a leading 'www.'; input returned unchanged when it is not a URL."""
    if not url:
        return url or ""
    try:
        host = urlparse(str(url).strip()).hostname
    except ValueError:
        return url
    if not host:
        return url
    return host[4:] if host.startswith("www.") else host


def format_number(value: int) -> str:
    """German digit grouping: 1234567 -> '1.234.567'."""
    return f"{value:,}".replace(",", ".")
