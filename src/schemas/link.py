"""Cross-references between articles of an issue."""

from pydantic import BaseModel, Field, field_validator


class PageRef(BaseModel):
    """The page an article lives on."""

    id: str = ""
    index: int = 0
    number: int = 0
    title: str = ""

    @field_validator("id", "title", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value


class PaperRef(BaseModel):
    """Edition, date and page of an article.

    Attributes:
        paper: Edition code (e.g. "az-d")
        date: Issue date as "YYYYMMDD"
        title: Edition title (e.g. "Dürener Zeitung")
        page: Page the article is printed on
    """

    paper: str = ""
    date: str = ""
    title: str = ""
    page: PageRef = Field(default_factory=PageRef)

    @field_validator("paper", "date", "title", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("page", mode="before")
    @classmethod
    def _none_to_page(cls, value):
        return {} if value is None else value


class Link(BaseModel):
    """Pointer to a neighbouring article.

    An empty ``id`` means there is no such neighbour. The page index tells
    whether the neighbour is on the same page or across a page boundary.
    """

    id: str = ""
    paper: PaperRef = Field(default_factory=PaperRef)

    @field_validator("id", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("paper", mode="before")
    @classmethod
    def _none_to_paper(cls, value):
        return {} if value is None else value

    @property
    def is_empty(self) -> bool:
        return not self.id

    @property
    def page_index(self) -> int:
        return self.paper.page.index
