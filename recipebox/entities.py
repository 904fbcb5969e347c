import re
from html import unescape
from html.entities import html5

# Only semicolon-terminated references are decoded; bare ampersands are text.
_REFERENCE = re.compile(r"&(?:#[0-9]+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);")


def _decode(match: "re.Match[str]") -> str:
    reference = match.group(0)
    if reference[1] == "#":
        return unescape(reference)
    # exact table lookup; unescape would also rewrite "&notit;" via its "&not" prefix
    return html5.get(reference[1:], reference)


def decode_entities(text: str) -> str:
    """Decode numeric and named character references such as ``&#8217;``,
    ``&#x2019;``, ``&frac14;`` or ``&mdash;``.

    Unknown names are kept as written. Text without references comes back
    unchanged.
    """
    if not text or "&" not in text:
        return text
    return _REFERENCE.sub(_decode, text)
