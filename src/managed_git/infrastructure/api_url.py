"""URL templates for provider REST API paths.

``:name`` placeholders in a path template are replaced by the matching
parameter, percent-encoded as one path segment (slashes included).  Query
parameters are not part of the template; they travel on the
:class:`EndpointContext` and are encoded by httpx.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from urllib.parse import quote

_PLACEHOLDER_RE = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")

ParamValue = str | int


def encode_segment(value: str) -> str:
    """Percent-encode *value* so it occupies exactly one path segment."""
    return quote(value, safe="")


def api_url(
    base_url: str,
    path_template: str,
    segments: Mapping[str, ParamValue] | None = None,
) -> str:
    """Join *base_url* and *path_template* with its placeholders expanded."""
    values = segments or {}

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in values:
            raise KeyError(f"Missing URL parameter '{name}' for template '{path_template}'")
        return encode_segment(str(values[name]))

    path = _PLACEHOLDER_RE.sub(_substitute, path_template.lstrip("/"))
    return f"{base_url.rstrip('/')}/{path}"
