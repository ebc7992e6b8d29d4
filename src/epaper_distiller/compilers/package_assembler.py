"""Package assembler for the manifest, spine and navigation of an issue.

Pages are added in issue order once their reading order has been resolved.
Only articles reached by the reading order are listed; articles that were
fetched but not reached stay in the archive without an index entry.

Navigation positions are handed out by a :class:`NavCounter` that is passed
through the traversal, one position per opened entry in depth-first order.
"""

import logging

from schemas.element import Element
from schemas.issue import Issue
from schemas.package import (
    ManifestItem,
    NavPoint,
    PackageConsistencyError,
    PackageDocument,
    SpineItem,
)
from schemas.page import Page

from ..transformers.filters import german_date

logger = logging.getLogger(__name__)

XHTML_TYPE = "application/xhtml+xml"
JPEG_TYPE = "image/jpeg"
NCX_TYPE = "application/x-dtbncx+xml"
CSS_TYPE = "text/css"

CREATOR = "ZVA Digital GmbH"
PUBLISHER = "Zeitungsverlag Aachen GmbH"

COVER_LABEL = "Startseite"
CONTENTS_LABEL = "Inhalt"
IMPRINT_LABEL = "Impressum"

TITLE_DOCUMENT = "title.xhtml"
INDEX_DOCUMENT = "index.xhtml"
IMPRINT_DOCUMENT = "impressum.xhtml"
NAV_DOCUMENT = "navigation.xhtml"
NCX_DOCUMENT = "toc.ncx"
TITLE_IMAGE = "images/title.jpg"
STYLESHEET = "epub.css"

TITLE_IMAGE_ID = "titleImage"


class NavCounter:
    """Hands out navigation positions, starting at 1."""

    def __init__(self, start: int = 1):
        self._next = start

    def take(self) -> int:
        position = self._next
        self._next += 1
        return position


def nav_id(value: str) -> str:
    """Navigation entry id with dashes replaced, e.g. ``article_4_a-1`` -> ``article_4_a_1``."""
    return value.replace("-", "_")


def article_item_id(page: Page, element: Element) -> str:
    return f"article_{page.index}_{element.id}"


def picture_item_id(picture_id: str) -> str:
    return f"image_{picture_id}"


def package_title(issue: Issue) -> str:
    """Book title, e.g. "Dürener Zeitung - 21. Aug. 2020"."""
    return f"{issue.title} - {german_date(issue.issue_date, '%d. %b. %Y')}"


class PackageAssembler:
    """Collect manifest, spine and navigation entries for one issue.

    Attributes:
        issue: The issue being packaged
        cover_available: Whether the title image was retrieved and belongs
            in the manifest
    """

    def __init__(self, issue: Issue, cover_available: bool = True):
        self.issue = issue
        self.cover_available = cover_available
        self._pages: list[Page] = []

    @property
    def pages(self) -> list[Page]:
        return list(self._pages)

    def add_page(self, page: Page) -> None:
        """Record a resolved page.

        Raises:
            PackageConsistencyError: If the page is unresolved or out of order
        """
        if not page.is_resolved:
            raise PackageConsistencyError(
                f"Page {page.index} was added before its reading order was resolved"
            )
        if self._pages and page.index <= self._pages[-1].index:
            raise PackageConsistencyError(
                f"Page {page.index} added after page {self._pages[-1].index}"
            )
        self._pages.append(page)
        logger.debug(
            f"Recorded page {page.index} with {len(page.reading_order)} linked articles"
        )

    def assemble(self) -> PackageDocument:
        """Build and verify the package record of all recorded pages."""
        title = package_title(self.issue)
        package = PackageDocument(
            identifier=title,
            title=title,
            date=self.issue.issue_date.isoformat(),
            creator=CREATOR,
            publisher=PUBLISHER,
            cover_id=TITLE_IMAGE_ID if self.cover_available else None,
            manifest=self._build_manifest(),
            spine=self._build_spine(),
            nav_map=self._build_nav_map(NavCounter()),
        )
        package.verify()
        logger.info(
            f"Assembled package for {title}: {len(package.manifest)} items, "
            f"{len(package.spine)} spine entries, "
            f"{len(package.nav_points())} navigation entries"
        )
        return package

    def _build_manifest(self) -> list[ManifestItem]:
        items = [
            ManifestItem(id="ncx", href=NCX_DOCUMENT, media_type=NCX_TYPE),
            ManifestItem(id="title", href=TITLE_DOCUMENT, media_type=XHTML_TYPE),
            ManifestItem(id="index", href=INDEX_DOCUMENT, media_type=XHTML_TYPE),
        ]

        pictures_listed: set[str] = set()
        for page in self._pages:
            items.append(
                ManifestItem(
                    id=f"seite_{page.index}",
                    href=page.document_name,
                    media_type=XHTML_TYPE,
                )
            )
            for element in page.reading_order:
                items.append(
                    ManifestItem(
                        id=article_item_id(page, element),
                        href=element.document_name,
                        media_type=XHTML_TYPE,
                    )
                )
                for picture in element.pictures:
                    if not picture.is_available:
                        continue
                    if picture.id in pictures_listed:
                        continue
                    pictures_listed.add(picture.id)
                    items.append(
                        ManifestItem(
                            id=picture_item_id(picture.id),
                            href=picture.href,
                            media_type=JPEG_TYPE,
                        )
                    )

        items.append(
            ManifestItem(
                id="navigation",
                href=NAV_DOCUMENT,
                media_type=XHTML_TYPE,
                properties="nav",
            )
        )
        items.append(
            ManifestItem(id="imprint", href=IMPRINT_DOCUMENT, media_type=XHTML_TYPE)
        )
        if self.cover_available:
            items.append(
                ManifestItem(id=TITLE_IMAGE_ID, href=TITLE_IMAGE, media_type=JPEG_TYPE)
            )
        items.append(
            ManifestItem(id="epub-stylesheet", href=STYLESHEET, media_type=CSS_TYPE)
        )
        return items

    def _build_spine(self) -> list[SpineItem]:
        spine = [SpineItem(idref="title"), SpineItem(idref="index")]
        for page in self._pages:
            spine.append(SpineItem(idref=f"seite_{page.index}"))
            for element in page.reading_order:
                spine.append(SpineItem(idref=article_item_id(page, element)))
        spine.append(SpineItem(idref="imprint"))
        return spine

    def _build_nav_map(self, counter: NavCounter) -> list[NavPoint]:
        nav_map = [
            NavPoint(
                id="startseite",
                play_order=counter.take(),
                label=COVER_LABEL,
                src=TITLE_DOCUMENT,
            ),
            NavPoint(
                id="inhalt",
                play_order=counter.take(),
                label=CONTENTS_LABEL,
                src=INDEX_DOCUMENT,
            ),
        ]
        for page in self._pages:
            nav_map.append(self._page_nav_point(page, counter))
        nav_map.append(
            NavPoint(
                id="impressum",
                play_order=counter.take(),
                label=IMPRINT_LABEL,
                src=IMPRINT_DOCUMENT,
            )
        )
        return nav_map

    def _page_nav_point(self, page: Page, counter: NavCounter) -> NavPoint:
        """Navigation entry of a page with one child per linked article."""
        point = NavPoint(
            id=nav_id(f"seite_{page.index}"),
            play_order=counter.take(),
            label=page.title,
            src=page.document_name,
        )
        for element in page.reading_order:
            point.children.append(
                NavPoint(
                    id=nav_id(article_item_id(page, element)),
                    play_order=counter.take(),
                    label=element.alt_title,
                    src=element.document_name,
                )
            )
        return point
