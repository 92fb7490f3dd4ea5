import re
from urllib.parse import urlsplit, urlunsplit

from .constants import START_PATH
from .errors import InvalidStartURLError

# hostnames, IPv4 and (unbracketed) IPv6 literals
_HOST_RE = re.compile(r"^[A-Za-z0-9._:-]+$")


def normalize_start_url(raw: str) -> str:
    """
    Canonicalize a user supplied SSO start URL.

    ``example.com`` becomes ``https://example.com/start/``; an explicit path
    only gets a trailing slash. Raises InvalidStartURLError when there is no
    usable host.
    """
    value = raw.strip()
    if not value:
        raise InvalidStartURLError(raw, "empty")

    # without "://" urlsplit reads "example.com:8443/start" as scheme "example.com"
    if value.startswith("//"):
        value = f"https:{value}"
    elif "://" not in value:
        value = f"https://{value}"

    try:
        parts = urlsplit(value)
        parts.port  # noqa: B018 - raises ValueError on a malformed port
    except ValueError as e:
        raise InvalidStartURLError(raw, str(e)) from e

    host = parts.hostname
    if not host or not _HOST_RE.match(host):
        raise InvalidStartURLError(raw, "missing host")

    path = parts.path
    if path in ("", "/"):
        path = START_PATH
    elif not path.endswith("/"):
        path += "/"

    return urlunsplit((parts.scheme or "https", parts.netloc, path, parts.query, parts.fragment))
