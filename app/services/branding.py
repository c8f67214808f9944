# app/services/branding.py
"""
Per-school branding, resolved from the request hostname.

Tenants (schools) are matched on their domain, first exactly and then on the
parent domain, so `ppdb.sekolah.sch.id` finds the school registered as
`sekolah.sch.id`. Logo URL and color come from tenant-editable fields and are
validated before they reach a page. Resolution never fails: anything that goes
wrong yields the default branding.
"""
import logging
import re
from dataclasses import asdict, dataclass
from typing import Optional
from urllib.parse import urlsplit

from app.core.config import Settings
from app.services.store import PrincipalStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Branding:
    app_name: str
    school_name: str
    logo_url: Optional[str] = None
    primary_color: Optional[str] = None

    def to_public(self) -> dict:
        d = asdict(self)
        return {
            "appName": d["app_name"],
            "schoolName": d["school_name"],
            "logoUrl": d["logo_url"],
            "primaryColor": d["primary_color"],
        }


def default_branding(settings: Settings) -> Branding:
    return Branding(app_name=settings.app_name, school_name=settings.default_school_name)


# Second-level suffixes where the registrable domain has three labels.
MULTI_PART_SUFFIXES = frozenset(
    {
        "sch.id",
        "ac.id",
        "co.id",
        "or.id",
        "go.id",
        "my.id",
        "web.id",
        "net.id",
        "ponpes.id",
        "co.uk",
        "ac.uk",
        "org.uk",
        "com.au",
        "edu.au",
        "com.my",
        "edu.my",
        "com.sg",
        "edu.sg",
    }
)

_PORT_RE = re.compile(r":\d+$")
_HEX_COLOR_RE = re.compile(r"#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})")
_BLOCKED_SCHEMES = ("data:", "javascript:", "vbscript:", "file:", "about:", "blob:")

HOVER_OPACITY = 0.87


# =========================
# Validators (pure)
# =========================
def validate_hex_color(value) -> Optional[str]:
    """`#abc`, `abc`, `#aabbcc` or `aabbcc` -> `#aabbcc`; anything else -> None."""
    if not isinstance(value, str):
        return None
    m = _HEX_COLOR_RE.fullmatch(value)
    if not m:
        return None
    digits = m.group(1).lower()
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return f"#{digits}"


def validate_logo_url(value) -> Optional[str]:
    """
    Accepts absolute https URLs and same-origin paths starting with `/` or `./`.
    Rejects script-capable schemes, protocol-relative URLs and `..` traversal.
    """
    if not isinstance(value, str):
        return None
    url = value.strip()
    if not url:
        return None

    lowered = url.lower()
    if lowered.startswith(_BLOCKED_SCHEMES):
        return None
    # browsers treat backslashes like slashes, so `/\evil.com` is protocol-relative
    if "\\" in url or any(ord(c) < 0x20 for c in url):
        return None

    try:
        parts = urlsplit(url)
    except ValueError:
        return None

    if parts.scheme:
        if parts.scheme.lower() != "https" or not parts.netloc:
            return None
        return url

    if url.startswith("//") or ".." in url:
        return None
    if url.startswith("/") or url.startswith("./"):
        return url
    return None


def generate_hover_color(hex_color) -> Optional[str]:
    """Hover tint for buttons: the same color at 0.87 opacity."""
    color = validate_hex_color(hex_color)
    if color is None:
        return None
    r = int(color[1:3], 16)
    g = int(color[3:5], 16)
    b = int(color[5:7], 16)
    return f"rgba({r}, {g}, {b}, {HOVER_OPACITY})"


# =========================
# Hostname handling
# =========================
def strip_port(hostname: str) -> str:
    return _PORT_RE.sub("", hostname)


def parent_domain(hostname: str) -> Optional[str]:
    """
    `a.b.example.com` -> `example.com`; `ppdb.sekolah.sch.id` -> `sekolah.sch.id`.
    None when the hostname has fewer than three labels.
    """
    labels = hostname.split(".")
    if len(labels) < 3:
        return None
    if ".".join(labels[-2:]).lower() in MULTI_PART_SUFFIXES:
        return ".".join(labels[-3:])
    return ".".join(labels[-2:])


def _branding_from_school(school, settings: Settings) -> Branding:
    return Branding(
        app_name=settings.app_name,
        school_name=school.school_name or settings.default_school_name,
        logo_url=validate_logo_url(school.logo_url),
        primary_color=validate_hex_color(school.primary_color),
    )


def resolve_branding(store: PrincipalStore, hostname: str, settings: Settings) -> Branding:
    fallback = default_branding(settings)
    try:
        if not isinstance(hostname, str) or not hostname:
            return fallback

        host = strip_port(hostname)
        if not host or "\x00" in host:
            return fallback

        school = store.find_tenant_by_domain(host)
        if school is None:
            parent = parent_domain(host)
            if parent and parent != host:
                school = store.find_tenant_by_domain(parent)

        if school is None:
            return fallback
        return _branding_from_school(school, settings)
    except Exception:
        logger.exception("Error resolving branding for host=%r", hostname)
        return fallback
