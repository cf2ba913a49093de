"""
User-agent parsing into browser descriptors.

ua-parser does the matching; this module only folds its browser families
into the vendor names rules are written against and derives device flags.
"""

from typing import Any, Dict, Optional, Set

from ua_parser import user_agent_parser

from ..rules.models import BrowserDescriptor

# ua-parser family -> vendor. Mobile variants share the desktop vendor name
# and add the "mobile" flag instead.
_VENDOR_ALIASES: Dict[str, str] = {
    "Mobile Safari": "Safari",
    "Mobile Safari UI/WKWebView": "Safari",
    "Chrome Mobile": "Chrome",
    "Chrome Mobile iOS": "Chrome",
    "Chrome Mobile WebView": "Chrome",
    "Firefox Mobile": "Firefox",
    "Firefox iOS": "Firefox",
    "Edge Mobile": "Edge",
    "Opera Mobile": "Opera",
    "Opera Mini": "Opera",
    "IE": "Internet Explorer",
    "IE Mobile": "Internet Explorer",
}

_MOBILE_FAMILIES = frozenset({
    "Mobile Safari",
    "Mobile Safari UI/WKWebView",
    "Chrome Mobile",
    "Chrome Mobile WebView",
    "Firefox Mobile",
    "Edge Mobile",
    "Opera Mobile",
    "Opera Mini",
    "IE Mobile",
})

_MOBILE_DEVICES = frozenset({"iPhone", "iPod"})
_TABLET_DEVICES = frozenset({"iPad", "Kindle"})


def _vendor(family: str) -> str:
    if not family or family == "Other":
        return ""
    return _VENDOR_ALIASES.get(family, family)


def _version(user_agent: Dict[str, Any]) -> str:
    parts = []
    for key in ("major", "minor", "patch"):
        value = user_agent.get(key)
        if not value:
            break
        parts.append(value)
    return ".".join(parts)


def _detect_flags(parsed: Dict[str, Any], vendor: str, raw: str) -> Set[str]:
    family = parsed["user_agent"].get("family") or ""
    os_family = parsed["os"].get("family") or ""
    device = parsed["device"].get("family") or ""

    flags = set()

    # Android phones announce "Mobile"; Android tablets do not.
    android = os_family == "Android"
    if device in _TABLET_DEVICES or "Tablet" in device or (android and "Mobile" not in raw):
        flags.add("tablet")
    elif family in _MOBILE_FAMILIES or device in _MOBILE_DEVICES or (android and "Mobile" in raw):
        flags.add("mobile")

    if os_family == "iOS" or device in _MOBILE_DEVICES or device == "iPad":
        flags.add("ios")
    if android:
        flags.add("android")
    if device == "Spider":
        flags.add("bot")
    if vendor:
        flags.add(vendor.lower().replace(" ", "_"))

    return flags


def parse_user_agent(user_agent: Optional[str]) -> BrowserDescriptor:
    """Parse a User-Agent header value.

    >>> parse_user_agent("Mozilla/5.0 (X11; Linux x86_64; rv:10.0.1) Gecko/20100101 Firefox/10.0.1").vendor
    'Firefox'
    """
    if not user_agent:
        return BrowserDescriptor()

    parsed = user_agent_parser.Parse(user_agent)
    vendor = _vendor(parsed["user_agent"].get("family") or "")

    return BrowserDescriptor(
        vendor=vendor,
        version=_version(parsed["user_agent"]) if vendor else "",
        flags=frozenset(_detect_flags(parsed, vendor, user_agent)),
        user_agent=user_agent,
    )
