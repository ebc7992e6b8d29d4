"""Shared geometry for elements placed on a newspaper page."""

from pydantic import BaseModel, Field


class Region(BaseModel):
    """A rectangular area on a page scan.

    The ePaper API reports the bounding box of every element, article and
    picture. The values are carried through unchanged; nothing downstream
    depends on them except the picture name lookup, which uses
    ``width``/``height``.
    """

    x_start: int = Field(default=0, alias="xStart")
    x_end: int = Field(default=0, alias="xEnd")
    y_start: int = Field(default=0, alias="yStart")
    y_end: int = Field(default=0, alias="yEnd")
    area: int = 0
    width: int = 0
    height: int = 0

    model_config = {"extra": "allow", "populate_by_name": True}
