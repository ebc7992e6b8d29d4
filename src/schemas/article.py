"""Article record as delivered by the ePaper API."""

from datetime import date, datetime

from pydantic import Field, field_validator

from .link import Link, PaperRef
from .picture import Picture
from .region import Region


class Article(Region):
    """A single article of an issue.

    Articles are fetched one by one while walking a page's elements and are
    kept in an issue-wide registry keyed by ``id``. After fetching, only
    ``alt_title`` (the derived display title) and ``text`` (the sanitized
    body) are changed, plus the observed ``size`` of each picture.
    """

    id: str
    type: str = "article"
    title: str = ""
    author: str = ""
    underline: str = ""
    headline: str = ""
    location: str = ""
    pictures: list[Picture] = Field(default_factory=list)
    paper: PaperRef = Field(default_factory=PaperRef)
    text: str = ""
    sociallink: str = ""
    print: str = ""
    wordcount: int = 0
    prev: Link = Field(default_factory=Link)
    next: Link = Field(default_factory=Link)

    alt_title: str = ""

    @field_validator(
        "title", "author", "underline", "headline", "location", "text",
        "sociallink", "print",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("pictures", mode="before")
    @classmethod
    def _none_to_list(cls, value):
        return [] if value is None else value

    @field_validator("paper", "prev", "next", mode="before")
    @classmethod
    def _none_to_record(cls, value):
        return {} if value is None else value

    @property
    def page_index(self) -> int:
        return self.paper.page.index

    @property
    def publication_date(self) -> date | None:
        if not self.paper.date:
            return None
        try:
            return datetime.strptime(self.paper.date, "%Y%m%d").date()
        except ValueError:
            return None

    @property
    def document_name(self) -> str:
        return f"article_{self.id}.xhtml"
