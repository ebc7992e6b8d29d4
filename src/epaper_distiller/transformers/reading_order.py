"""Reading order of the articles on a page.

Every article only knows its predecessor and successor (``prev``/``next``),
and those links may point to another page, to nothing, or back into the
chain. The page's reading order is rebuilt from explicit lookup tables:

- ``positions``: article id -> position in the page's article list
- ``successors``: position -> id of the next article

The head of the chain is the first article, in API order, whose predecessor
is missing or lives on an earlier page. From there the walk follows
``successors`` until the chain ends, leaves the page, or returns to an
article already visited.
"""

import logging

from schemas.element import Element

logger = logging.getLogger(__name__)


def _page_articles(elements: list[Element]) -> list[Element]:
    return [element for element in elements if element.is_article and element.id]


def opens_chain(element: Element) -> bool:
    """Whether ``element`` may start the reading order of its page."""
    return element.prev.is_empty or element.prev.page_index < element.page_index


def find_head(articles: list[Element]) -> int | None:
    """Position of the first article that opens the chain, if any."""
    for position, element in enumerate(articles):
        if opens_chain(element):
            return position
    return None


def resolve_reading_order(elements: list[Element]) -> list[Element | None]:
    """Reconstruct the reading order of one page.

    Args:
        elements: The page's elements in API order. Elements that are not
            articles, or have no id, are ignored.

    Returns:
        One slot per distinct article id. Slots are filled from the head of
        the chain onwards; slots the walk does not reach stay ``None``. When
        no article opens a chain, every slot is ``None``.
    """
    articles = _page_articles(elements)

    positions: dict[str, int] = {}
    successors: list[str] = []
    for position, element in enumerate(articles):
        positions[element.id] = position
        successors.append(element.next.id)

    sequence: list[Element | None] = [None] * len(positions)

    head = find_head(articles)
    if head is None:
        if articles:
            logger.debug(
                f"No article opens the chain among {len(articles)} articles"
            )
        return sequence

    visited: set[str] = set()
    position: int | None = head
    slot = 0
    while position is not None:
        element = articles[position]
        if element.id in visited:
            logger.warning(
                f"Reading order returns to article {element.id}; chain cut here"
            )
            break
        visited.add(element.id)
        sequence[slot] = element
        slot += 1

        next_id = successors[position]
        if not next_id:
            break
        position = positions.get(next_id)

    return sequence
