"""Picture attached to an article."""

from pydantic import field_validator

from .region import Region


class Picture(Region):
    """A picture belonging to exactly one article.

    Attributes:
        id: Picture identifier, also used as the image file name
        type: Element type reported by the API (always "picture")
        description: Optional caption markup
        size: Bytes actually retrieved for this picture. Zero until a
            download was attempted, and zero afterwards when the asset was
            unavailable.
    """

    id: str
    type: str = "picture"
    description: str = ""
    size: int = 0

    @field_validator("description", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @property
    def is_available(self) -> bool:
        return self.size > 0

    @property
    def href(self) -> str:
        """Location of the image relative to the content documents."""
        return f"images/{self.id}.jpg"
