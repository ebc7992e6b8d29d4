"""Element (sub-region) of a newspaper page."""

from pydantic import Field, field_validator

from .article import Article
from .link import Link
from .picture import Picture
from .region import Region

ARTICLE_TYPE = "article"


class Element(Region):
    """An entry of a page's element list.

    Only ``type == "article"`` elements take part in reading order; ads and
    loose pictures are skipped by everything downstream.

    The fields after ``location`` are not part of the page record. They are
    copied from the fetched article by :meth:`link_article`.
    """

    id: str = ""
    type: str = ""
    title: str = ""
    author: str = ""
    underline: str = ""
    headline: str = ""
    location: str = ""

    alt_title: str = ""
    pictures: list[Picture] = Field(default_factory=list)
    prev: Link = Field(default_factory=Link)
    next: Link = Field(default_factory=Link)
    page_index: int = 0

    @field_validator(
        "id", "type", "title", "author", "underline", "headline", "location",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @property
    def is_article(self) -> bool:
        return self.type == ARTICLE_TYPE

    @property
    def document_name(self) -> str:
        return f"article_{self.id}.xhtml"

    def link_article(self, article: Article) -> None:
        """Take over display title, pictures and neighbours from ``article``."""
        self.alt_title = article.alt_title
        self.pictures = article.pictures
        self.prev = article.prev
        self.next = article.next
        self.page_index = article.page_index
