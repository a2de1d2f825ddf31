import re
from typing import Dict, NamedTuple, Optional, Tuple
from urllib.parse import parse_qsl, urlsplit

SCHEME_PREFIX = "bf://"

_STYLE_PATTERN = re.compile(r"^styles/([^/]+)/bf/(.*)$")
_ATTACHMENT_PATTERN = re.compile(r"^([^/]+)/at/([^/?]+)(?:/([^?]*))?(?:\?(.*))?$")
_EXTENSION_PATTERN = re.compile(r"\.(\w+)$")


class AssetUri(NamedTuple):
    brandfolder: str
    attachment_id: str
    path: str
    filename: Optional[str] = None
    extension: Optional[str] = None
    style: Optional[str] = None
    query: Dict[str, str] = {}


def strip_scheme(uri: str) -> str:
    if uri.startswith(SCHEME_PREFIX):
        return uri[len(SCHEME_PREFIX) :]
    return uri


def split_style(path: str) -> Tuple[Optional[str], str]:
    """
    Splits an image-style prefix (``styles/<id>/bf/``) off a scheme-less path.
    """
    match = _STYLE_PATTERN.match(path)
    if match is None:
        return None, path
    return match.group(1), match.group(2)


def get_extension(path: str) -> Optional[str]:
    """Returns the lower-cased extension of the last path segment, without query."""
    path = urlsplit(path).path
    match = _EXTENSION_PATTERN.search(path.rsplit("/", 1)[-1])
    if match is None:
        return None
    return match.group(1).lower()


def replace_extension(path: str, extension: str) -> str:
    """Replaces the extension of ``path`` and keeps any query string in place."""
    base, sep, query = path.partition("?")
    head, slash, name = base.rpartition("/")
    name = _EXTENSION_PATTERN.sub(f".{extension}", name)
    return f"{head}{slash}{name}{sep}{query}"


def parse_asset_uri(uri: str) -> Optional[AssetUri]:
    """
    Parses an asset URI and returns its parts.
    Supports bf://<brandfolder>/at/<attachment>/<filename>.<ext> with an optional
    styles/<style>/bf/ prefix and query string. Returns None for anything else.
    """
    if not uri or not uri.startswith(SCHEME_PREFIX):
        return None
    style, path = split_style(strip_scheme(uri))
    match = _ATTACHMENT_PATTERN.match(path)
    if match is None:
        return None

    brandfolder, attachment_id, filename, query = match.groups()
    filename = filename or None
    return AssetUri(
        brandfolder=brandfolder,
        attachment_id=attachment_id,
        path=path,
        filename=filename,
        extension=get_extension(filename) if filename else None,
        style=style,
        query=dict(parse_qsl(query or "", keep_blank_values=True)),
    )
