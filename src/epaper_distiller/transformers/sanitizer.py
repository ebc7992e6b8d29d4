"""Clean-up of article body markup.

The ePaper API delivers article bodies as HTML fragments that are close to,
but not quite, XHTML. The rewrites below run in a fixed order; the location
mark rewrite relies on link targets and line breaks already being fixed.
"""

import re
from collections.abc import Callable

# <a href="..." target="_blank"> -> <a href="...">
LINK_TARGET = re.compile(r'(<a\b[^>]*?)\s+target="[^"]*"', re.IGNORECASE)

# <br> -> <br />
BARE_BREAK = re.compile(r"<br\s*>", re.IGNORECASE)

# <p><b class="ortsmarke">Aachen</b> Text...</p>
#   -> <p>Text... <b class="ortsmarke">(Aachen)</b></p>
LOCATION_MARK = re.compile(
    r'^((?:<p\b[^>]*>)?)\s*<b\s+class="ortsmarke">(.*?)</b>\s*(.*?)\s*(?=</p>|$)',
    re.DOTALL,
)


def _move_location(match: re.Match) -> str:
    opening, place, rest = match.groups()
    separator = " " if rest else ""
    return f'{opening}{rest}{separator}<b class="ortsmarke">({place})</b>'


REWRITES: list[tuple[re.Pattern, str | Callable[[re.Match], str]]] = [
    (LINK_TARGET, r"\1"),
    (BARE_BREAK, "<br />"),
    (LOCATION_MARK, _move_location),
]


def sanitize_body(text: str) -> str:
    """Apply all body rewrites in order.

    Args:
        text: Raw article body markup

    Returns:
        Cleaned markup

    Examples:
        >>> sanitize_body('<p><b class="ortsmarke">Aachen</b> Der Rat tagte.<br></p>')
        '<p>Der Rat tagte.<br /> <b class="ortsmarke">(Aachen)</b></p>'
    """
    if not text:
        return ""
    for pattern, replacement in REWRITES:
        text = pattern.sub(replacement, text)
    return text
