"""
Social media URL classification.

Only the hostname and path are inspected; nothing is fetched from the
platforms themselves.
"""

from typing import Any, Dict, NamedTuple, Optional
from urllib.parse import urlparse

PLATFORM_DOMAINS = {
    "instagram": ("instagram.com",),
    "youtube": ("youtube.com", "youtu.be"),
    "facebook": ("facebook.com",),
}

# Instagram paths where the first segment is a content type, not the handle.
INSTAGRAM_CONTENT_PREFIXES = ("p", "reel")


class UrlValidation(NamedTuple):
    platform: str
    handle: str
    is_valid: bool
    data: Optional[Dict[str, Any]] = None


def _host_matches(hostname: str, domain: str) -> bool:
    return hostname == domain or hostname.endswith("." + domain)


def classify_hostname(hostname: str) -> str:
    hostname = hostname.lower()
    for platform, domains in PLATFORM_DOMAINS.items():
        if any(_host_matches(hostname, domain) for domain in domains):
            return platform
    return "unknown"


def extract_instagram_handle(path: str) -> str:
    parts = [p for p in path.split("/") if p]
    if not parts:
        return ""
    if parts[0] in INSTAGRAM_CONTENT_PREFIXES:
        return parts[1] if len(parts) > 1 else ""
    return parts[0]


def validate_social_media_url(url: str) -> UrlValidation:
    """Classify ``url`` as instagram, youtube, facebook or unknown.

    Instagram URLs are only valid when a handle can be read from the path.
    """
    try:
        parsed = urlparse(url)
    except ValueError:
        return UrlValidation("unknown", "", False)

    if not parsed.hostname:
        return UrlValidation("unknown", "", False)

    platform = classify_hostname(parsed.hostname)
    if platform == "unknown":
        return UrlValidation("unknown", "", False)

    data = {"originalUrl": url}
    if platform == "instagram":
        handle = extract_instagram_handle(parsed.path)
        return UrlValidation(platform, handle, bool(handle), data)

    return UrlValidation(platform, "", True, data)
