"""Issue record as delivered by the ePaper API."""

from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator


class Issue(BaseModel):
    """One dated edition of a newspaper.

    Attributes:
        paper: Edition code (e.g. "az-d")
        title: Edition title (e.g. "Dürener Zeitung")
        date: Publication date as an integer, e.g. 20200821
        brand: Publisher brand (e.g. "az")
        number_of_pages: Total page count
        page_titles: Section title per page, index-aligned with the pages
        subscription: Whether the user has a subscription for this edition
        bought: Whether the user bought this single issue
        version: Publisher's revision stamp
    """

    paper: str
    title: str
    date: int
    brand: str = ""
    number_of_pages: int = Field(alias="numberOfPages")
    page_titles: list[str] = Field(default_factory=list, alias="pageTitles")
    subscription: bool = False
    bought: bool = False
    version: int = 0

    model_config = {"extra": "allow", "populate_by_name": True}

    @model_validator(mode="after")
    def _check_page_titles(self) -> "Issue":
        if len(self.page_titles) != self.number_of_pages:
            raise ValueError(
                f"Issue {self.title} lists {len(self.page_titles)} page titles "
                f"for {self.number_of_pages} pages"
            )
        return self

    @property
    def date_string(self) -> str:
        return str(self.date)

    @property
    def issue_date(self) -> date:
        return datetime.strptime(self.date_string, "%Y%m%d").date()

    @property
    def is_accessible(self) -> bool:
        return self.subscription or self.bought
