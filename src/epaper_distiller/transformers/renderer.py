"""XHTML renderer for the content documents of an issue.

Renders the title page, the issue index, one table of contents per page,
one document per article and the imprint through Jinja2 templates.
"""

import logging
from pathlib import Path
from typing import NamedTuple

from jinja2 import Environment, FileSystemLoader

from schemas.article import Article
from schemas.issue import Issue
from schemas.page import Page

from .filters import FILTERS

logger = logging.getLogger(__name__)

# Resolve the project root (4 levels up from this file):
#   renderer.py → transformers/ → epaper_distiller/ → src/ → project root
# If this file is ever moved, the chain of .parent calls must be updated.
PACKAGE_ROOT = Path(__file__).parent.parent.parent.parent
TEMPLATES_DIR = PACKAGE_ROOT / "resources" / "templates"
STYLESHEETS_DIR = PACKAGE_ROOT / "resources" / "stylesheets"

TITLE_TEMPLATE = "title.xhtml.j2"
INDEX_TEMPLATE = "index.xhtml.j2"
PAGE_TEMPLATE = "page.xhtml.j2"
ARTICLE_TEMPLATE = "article.xhtml.j2"
IMPRINT_TEMPLATE = "imprint.xhtml.j2"


class PageLink(NamedTuple):
    """Previous/next page reference in a page's table of contents."""

    index: int
    title: str


class XHTMLRenderer:
    """Render content documents for an EPUB through Jinja2 templates.

    Attributes:
        base_url: Root of the online edition, used for source links
        stylesheet_name: File name of the stylesheet inside ``OEBPS/``
    """

    def __init__(
        self,
        base_url: str,
        stylesheet_name: str = "epub.css",
        templates_dir: Path | None = None,
        stylesheets_dir: Path | None = None,
    ):
        """Initialize the renderer.

        Args:
            base_url: Root of the online edition
            stylesheet_name: Name of the CSS stylesheet file
            templates_dir: Directory containing templates (default: resources/templates)
            stylesheets_dir: Directory containing stylesheets (default: resources/stylesheets)
        """
        self.base_url = base_url.rstrip("/")
        self.stylesheet_name = stylesheet_name
        self.templates_dir = templates_dir or TEMPLATES_DIR
        self.stylesheets_dir = stylesheets_dir or STYLESHEETS_DIR

        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            keep_trailing_newline=True,
        )
        for name, func in FILTERS.items():
            self._env.filters[name] = func

    def render(self, template_name: str, **context) -> bytes:
        """Render a template to UTF-8 bytes.

        The base URL and stylesheet name are always part of the context.
        """
        template = self._env.get_template(template_name)
        text = template.render(
            base_url=self.base_url,
            stylesheet=self.stylesheet_name,
            **context,
        )
        return text.encode("utf-8")

    def stylesheet(self) -> bytes:
        """Contents of the stylesheet."""
        return (self.stylesheets_dir / self.stylesheet_name).read_bytes()

    def render_title_page(self, issue: Issue, cover_available: bool = True) -> bytes:
        """Cover page; shows the issue title when there is no cover image."""
        return self.render(
            TITLE_TEMPLATE,
            issue=issue,
            issue_date=issue.issue_date,
            cover_available=cover_available,
        )

    def render_index(self, issue: Issue) -> bytes:
        """Issue-level table of contents listing every page."""
        return self.render(INDEX_TEMPLATE, issue=issue, issue_date=issue.issue_date)

    def render_page(self, issue: Issue, page: Page) -> bytes:
        """Table of contents of one page.

        Lists the page's reading order. Without one, the page points to the
        online edition instead.
        """
        position = page.index
        previous_page = None
        if position > 0:
            previous_page = PageLink(position - 1, issue.page_titles[position - 1])
        next_page = None
        if position + 1 < issue.number_of_pages:
            next_page = PageLink(position + 1, issue.page_titles[position + 1])

        return self.render(
            PAGE_TEMPLATE,
            issue=issue,
            issue_date=issue.issue_date,
            page=page,
            entries=page.reading_order,
            previous_page=previous_page,
            next_page=next_page,
        )

    def render_article(self, article: Article) -> bytes:
        return self.render(
            ARTICLE_TEMPLATE,
            article=article,
            article_date=article.publication_date,
        )

    def render_imprint(self, text: str) -> bytes:
        return self.render(IMPRINT_TEMPLATE, text=text)
