"""Records exchanged with the ePaper site outside the issue API."""

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    """Login request body."""

    login: str
    password: str


class Authorization(BaseModel):
    """Login response.

    Attributes:
        authorization: Value for the ``Authorization`` request header
        error: Error message; empty when the login succeeded
    """

    authorization: str = Field(default="", alias="authorizationHeader")
    error: str | None = ""

    model_config = {"extra": "allow", "populate_by_name": True}


class SiteInfo(BaseModel):
    """Static information scraped from the ePaper web application.

    Attributes:
        imprint: Imprint markup shown at the end of every book
        editions: Edition code → edition title
    """

    imprint: str = ""
    editions: dict[str, str] = Field(default_factory=dict)

    @property
    def editions_by_title(self) -> dict[str, str]:
        return {title: code for code, title in self.editions.items()}
