"""
Core Module - URL Utilities.

============================================================
RESPONSIBILITY
============================================================
Turns user input into a scan target.

- normalize_url: canonical https origin for a target
- extract_domain: bare host without "www."
- domain_to_company_name: first guess at a display name
- is_company_website: rejects common social platforms
- generate_job_id: sortable scan identifier

============================================================
"""

import random
import re
import string
import time
from typing import Optional
from urllib.parse import urlsplit

from .exceptions import InvalidTargetError


_HOSTNAME_PATTERN = re.compile(
    r"^(?=.{1,253}$)([a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?)(\.[a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?)*$"
)

_BASE36_ALPHABET = string.digits + string.ascii_lowercase

SOCIAL_DOMAINS = (
    "facebook.com",
    "twitter.com",
    "x.com",
    "linkedin.com",
    "instagram.com",
    "youtube.com",
    "tiktok.com",
    "pinterest.com",
    "reddit.com",
    "github.com",
    "medium.com",
)


def normalize_url(target: Optional[str]) -> str:
    """
    Normalize a user-supplied target to an https origin.

    Steps: trim, lowercase, strip trailing slashes, default the
    scheme to https, upgrade http to https, keep only
    scheme + host (+ non-default port).

    Args:
        target: Raw user input such as "Example.com/about/"

    Returns:
        Origin string such as "https://example.com"

    Raises:
        InvalidTargetError: If no valid host can be derived
    """
    if target is None or not str(target).strip():
        raise InvalidTargetError("Invalid URL format", target=target)

    url = str(target).strip().lower().rstrip("/")

    if not url.startswith("http://") and not url.startswith("https://"):
        url = "https://" + url

    if url.startswith("http://"):
        url = "https://" + url[len("http://"):]

    try:
        parts = urlsplit(url)
        hostname = parts.hostname
        port = parts.port
    except ValueError as e:
        raise InvalidTargetError("Invalid URL format", target=target, cause=e)

    # Bare labels such as "localhost" are rejected
    if not hostname or "." not in hostname or not _HOSTNAME_PATTERN.match(hostname):
        raise InvalidTargetError("Invalid URL format", target=target)

    if port is not None and port != 443:
        return f"https://{hostname}:{port}"
    return f"https://{hostname}"


def extract_domain(url: str) -> str:
    """
    Extract the bare domain from a URL or target string.

    Falls back to a best-effort string strip when the input
    cannot be normalized.
    """
    try:
        hostname = urlsplit(normalize_url(url)).hostname or ""
    except InvalidTargetError:
        stripped = re.sub(r"^(https?://)?(www\.)?", "", url or "")
        return stripped.split("/")[0]

    if hostname.startswith("www."):
        hostname = hostname[len("www."):]
    return hostname


def domain_to_company_name(domain: str) -> str:
    """
    Derive a display name from a domain.

    "acme-widgets.co.uk" -> "Acme Widgets"
    """
    first_label = (domain or "").split(".")[0]
    with_spaces = re.sub(r"[-_]", " ", first_label)
    with_spaces = re.sub(r"([a-z])([A-Z])", r"\1 \2", with_spaces)

    return " ".join(
        word[:1].upper() + word[1:] for word in with_spaces.split(" ")
    )


def is_company_website(url: str) -> bool:
    """Return False for well-known social or hosting platforms."""
    domain = extract_domain(url)
    return not any(social in domain for social in SOCIAL_DOMAINS)


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_job_id() -> str:
    """Generate a scan id: scan_<base36 epoch ms>_<6 random base36 chars>."""
    timestamp = _to_base36(int(time.time() * 1000))
    suffix = "".join(random.choice(_BASE36_ALPHABET) for _ in range(6))
    return f"scan_{timestamp}_{suffix}"
