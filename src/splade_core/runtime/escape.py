"""Escaping helpers for embedding data in server-rendered markup."""

import json
from typing import Any

_JSON_HTML_ESCAPES = {
    "<": "\\u003C",
    ">": "\\u003E",
    "&": "\\u0026",
    "'": "\\u0027",
}


def escape_html(value: Any) -> str:
    """Escape a value for use inside a double-quoted HTML attribute."""
    return (
        str(value)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def js_from(value: Any) -> str:
    """Encode a value as a JavaScript literal that is safe inside a <script>.

    Characters that could close the script tag or an attribute are emitted
    as unicode escapes, which JSON string syntax allows.
    """
    encoded = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    for char, escaped in _JSON_HTML_ESCAPES.items():
        encoded = encoded.replace(char, escaped)
    return encoded
