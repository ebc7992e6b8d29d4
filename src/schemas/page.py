"""Page of an issue."""

from pydantic import BaseModel, Field, field_validator

from .element import Element


class Page(BaseModel):
    """One physical page of an issue.

    Attributes:
        id: Page identifier (e.g. "20200820-47208377")
        title: Section title printed on the page
        number: Printed page number
        index: 0-based position of the page within the issue
        elements: Unordered page elements as delivered by the API
        free: Whether the page is readable without a subscription
        sequence: Reconstructed reading order. ``None`` until the page has
            been resolved; afterwards a list with one slot per distinct
            article id, unfilled slots left as ``None``.
    """

    id: str = ""
    title: str = ""
    number: int = 0
    index: int = 0
    width: int = 0
    height: int = 0
    elements: list[Element] = Field(default_factory=list)
    free: bool = False
    sequence: list[Element | None] | None = None

    model_config = {"extra": "allow"}

    @field_validator("elements", mode="before")
    @classmethod
    def _none_to_list(cls, value):
        return [] if value is None else value

    @field_validator("title", "id", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @property
    def articles(self) -> list[Element]:
        return [element for element in self.elements if element.is_article]

    @property
    def is_resolved(self) -> bool:
        return self.sequence is not None

    @property
    def reading_order(self) -> list[Element]:
        """The resolved sequence without its unfilled slots."""
        if self.sequence is None:
            return []
        return [element for element in self.sequence if element is not None]

    @property
    def document_name(self) -> str:
        return f"seite_{self.index}.xhtml"

    def resolve(self, sequence: list[Element | None]) -> None:
        """Store the reading order. A page is resolved exactly once."""
        if self.sequence is not None:
            raise ValueError(f"Page {self.index} has already been resolved")
        self.sequence = sequence
