"""Display titles for articles.

Many ePaper articles have no headline of their own: photo stories, info
boxes, weather maps, puzzles. Those still need an entry in the table of
contents, so a title is derived from whatever the article does have. The
fallbacks are tried top to bottom; the first rule that applies and yields a
non-empty title wins.
"""

import html
import logging
import re
from collections.abc import Callable

from schemas.article import Article

logger = logging.getLogger(__name__)

EMPTY_ARTICLE_TITLE = "Leerer Artikel"
MAX_TITLE_LENGTH = 40
ELLIPSIS = "…"

# Unnamed pictures of these sizes are recurring page furniture.
PICTURE_NAMES: dict[tuple[int, int], str] = {
    (296, 591): "Festgeld",
    (1024, 460): "DAX",
    (1024, 360): "Rätsel Ecke",
    (1024, 361): "Rätsel Ecke",
    (1024, 388): "Popel",
    (1024, 788): "Wetter",
    (361, 818): "Kinder-Sudoku",
    (1024, 411): "Finde die Unterschiede",
}

FIRST_TAG = re.compile(r"^<(\w+)\b[^>]*>")
PARAGRAPH_TAIL = re.compile(r"</p>.*$", re.DOTALL)
LOCATION_MARK = re.compile(r'^<b\s+class="ortsmarke">.*?</b>\s*', re.DOTALL)
TAGS = re.compile(r"<[^>]+>")
PARTIAL_WORD = re.compile(r"\s+\S*$")
FIRST_WORD = re.compile(r"\S*")

Rule = tuple[Callable[[Article], bool], Callable[[Article], str]]


def strip_tags(markup: str) -> str:
    """Remove all tags from ``markup``."""
    return TAGS.sub("", markup or "")


def shorten(text: str, limit: int = MAX_TITLE_LENGTH) -> str:
    """Cut ``text`` to at most ``limit`` characters on a word boundary.

    Words are never split; a first word longer than ``limit`` is kept whole.

    Examples:
        >>> shorten("Kurz")
        'Kurz'
        >>> shorten("Der Stadtrat beschließt den neuen Haushalt", 30)
        'Der Stadtrat beschließt den…'
    """
    if len(text) <= limit:
        return text

    head = text[:limit]
    if not text[limit].isspace():
        if PARTIAL_WORD.search(head):
            head = PARTIAL_WORD.sub("", head)
        else:
            # A first word longer than the limit is kept whole
            head = FIRST_WORD.match(text).group()
            if head == text:
                return text
    return head.rstrip() + ELLIPSIS


def excerpt(markup: str) -> str:
    """Plain-text headline from the start of an article body.

    Drops the first tag, everything from the first ``</p>`` on, a leading
    location mark, and all remaining tags, then shortens the rest.
    """
    text = FIRST_TAG.sub("", markup)
    text = PARAGRAPH_TAIL.sub("", text)
    text = LOCATION_MARK.sub("", text)
    text = strip_tags(text)
    text = " ".join(html.unescape(text).split())
    return shorten(text)


def picture_name(width: int, height: int) -> str:
    """Name for an undescribed picture, based on its dimensions."""
    return PICTURE_NAMES.get((width, height), f"Bild {width} × {height}")


def _has_title(article: Article) -> bool:
    return bool(article.title)


def _is_empty(article: Article) -> bool:
    return not article.text and not article.pictures


def _is_picture_story(article: Article) -> bool:
    return not article.text and bool(article.pictures)


def _has_picture_description(article: Article) -> bool:
    return _is_picture_story(article) and bool(article.pictures[0].description)


def _has_text(article: Article) -> bool:
    return bool(article.text)


def _always(article: Article) -> bool:
    return True


def _first_picture_description(article: Article) -> str:
    return excerpt(article.pictures[0].description)


def _first_picture_name(article: Article) -> str:
    picture = article.pictures[0]
    return picture_name(picture.width, picture.height)


TITLE_RULES: list[Rule] = [
    (_has_title, lambda article: article.title),
    (_is_empty, lambda article: EMPTY_ARTICLE_TITLE),
    (_has_picture_description, _first_picture_description),
    (_is_picture_story, _first_picture_name),
    (_has_text, lambda article: excerpt(article.text)),
    (_always, lambda article: EMPTY_ARTICLE_TITLE),
]


def derive_title(article: Article, rules: list[Rule] | None = None) -> str:
    """Return the display title for ``article``.

    An explicit title is returned unchanged. Otherwise the title comes from
    the body text, the first picture's description or the first picture's
    dimensions, in the order given by ``rules``.

    Args:
        article: Article as fetched, before its body is sanitized
        rules: Ordered (predicate, resolver) pairs (default: TITLE_RULES)

    Returns:
        A non-empty display title
    """
    for applies, resolve in rules or TITLE_RULES:
        if not applies(article):
            continue
        title = resolve(article)
        if title.strip():
            return title
    logger.debug(f"No rule produced a title for article {article.id}")
    return EMPTY_ARTICLE_TITLE
