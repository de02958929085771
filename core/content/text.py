import html
from typing import Optional


def decode_html(text: Optional[str]) -> str:
    """Turn HTML-entity-encoded text (``&quot;``, ``&#039;``...) into plain text."""
    if text is None:
        return ""
    return html.unescape(text)
