"""ePaper API client for fetching newspaper issues."""

import logging
import re

from schemas.article import Article
from schemas.issue import Issue
from schemas.page import Page
from schemas.site import Authorization, Credentials, SiteInfo

from .client import Client
from .exceptions import AuthenticationError, UnknownEditionError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://epaper.zeitungsverlag-aachen.de/2.0"

IMPRINT_START = "<h1>Impressum</h1>"
IMPRINT_END = "')"
EDITION_PATTERN = re.compile(r'paper:"([^"]+)",title:"([^"]+)",')


def parse_site_script(script: str) -> SiteInfo:
    """Extract the imprint and the edition table from the web app script.

    The ePaper web application ships the imprint as an HTML string literal
    and lists every edition as ``paper:"<code>",title:"<title>",``.

    Args:
        script: Source of the web application's JavaScript bundle

    Returns:
        SiteInfo with the imprint markup and the edition table

    Examples:
        >>> parse_site_script('x={paper:"az-d",title:"Dürener Zeitung",}').editions
        {'az-d': 'Dürener Zeitung'}
    """
    imprint = ""
    start = script.find(IMPRINT_START)
    if start == -1:
        logger.warning("No imprint found in the site script")
    else:
        start += len(IMPRINT_START)
        end = script.find(IMPRINT_END, start)
        if end == -1:
            end = len(script)
        imprint = script[start:end].replace("<br>", "<br />").replace("\\n", "\n")

    editions = {code: title for code, title in EDITION_PATTERN.findall(script)}
    return SiteInfo(imprint=imprint, editions=editions)


class EPaperClient(Client):
    """Client for the ePaper issue API.

    Resources are addressed relative to the edition root
    ``/api/<edition>``:

    - ``<date>``: the issue record
    - ``<date>/<page>``: a page with its elements
    - ``<date>/<page>/<element>``: an article
    - ``<date>/<page>/<picture>/jpg``: a picture
    - ``<date>/0/big``: the cover image

    ``<date>`` is either ``latest`` or ``YYYYMMDD``.

    Example:
        config = {"base_url": DEFAULT_BASE_URL}
        with EPaperClient(config) as client:
            client.login("az-d", user, password)
            issue = client.fetch_issue("latest")
    """

    SITE_SCRIPT_PATH = "/js/app-b4b5468874.js"
    LOGIN_PATH = "/api/user/login"
    API_PATH = "/api"

    def __init__(self, config: dict):
        super().__init__(config)
        self._site_info: SiteInfo | None = None
        self.edition: str | None = None
        self.edition_title: str | None = None

    @property
    def site_info(self) -> SiteInfo:
        """Imprint and edition table, loaded on first access."""
        if self._site_info is None:
            self._site_info = self.load_site_info()
        return self._site_info

    def load_site_info(self) -> SiteInfo:
        """Download the web app script and parse imprint and editions."""
        response = self.get(self.SITE_SCRIPT_PATH)
        site_info = parse_site_script(response.text)
        logger.debug(f"Found {len(site_info.editions)} editions")
        return site_info

    def resolve_edition(self, name: str) -> tuple[str, str]:
        """Look up an edition by code or by title.

        Args:
            name: Edition code (e.g. "az-d") or title (e.g. "Dürener Zeitung")

        Returns:
            Tuple of (edition code, edition title)

        Raises:
            UnknownEditionError: If ``name`` is neither
        """
        editions = self.site_info.editions
        if name in editions:
            return name, editions[name]

        by_title = self.site_info.editions_by_title
        if name in by_title:
            return by_title[name], name

        raise UnknownEditionError(name)

    def login(self, edition: str, username: str, password: str) -> str:
        """Log in and select the edition for all following requests.

        Args:
            edition: Edition code or title
            username: Account login
            password: Account password

        Returns:
            The edition code

        Raises:
            UnknownEditionError: If the edition is unknown
            AuthenticationError: If the login is rejected
        """
        code, title = self.resolve_edition(edition)

        credentials = Credentials(login=username, password=password)
        authorization = self.decode(
            Authorization,
            self.post_json(self.LOGIN_PATH, credentials),
            "login response",
        )
        if authorization.error:
            raise AuthenticationError(authorization.error)
        if not authorization.authorization:
            raise AuthenticationError("Login response carried no authorization")

        self.authorize(authorization.authorization)
        self.edition = code
        self.edition_title = title
        logger.info(f"Logged in for {title} ({code})")
        return code

    def fetch(self, wanted_date: str = "latest") -> Issue:
        """Fetch the issue record for ``wanted_date``."""
        return self.fetch_issue(wanted_date)

    def fetch_issue(self, wanted_date: str) -> Issue:
        """Fetch an issue record.

        Args:
            wanted_date: "latest" or a date as "YYYYMMDD"

        Returns:
            The Issue record

        Raises:
            ValidationError: If the response cannot be decoded
            APIError: If the API returns a non-2xx response
            ConnectionError: If the network connection fails
        """
        return self.get_record(Issue, self._edition_path(wanted_date), f"issue {wanted_date}")

    def fetch_page(self, issue_date: str, index: int) -> Page:
        """Fetch a page with its element list."""
        return self.get_record(Page, self._edition_path(f"{issue_date}/{index}"), f"page {index}")

    def fetch_article(self, issue_date: str, page_index: int, element_id: str) -> Article:
        """Fetch the article behind a page element."""
        return self.get_record(
            Article,
            self._edition_path(f"{issue_date}/{page_index}/{element_id}"),
            f"article {element_id} on page {page_index}",
        )

    def fetch_picture(self, issue_date: str, page_index: int, picture_id: str) -> bytes:
        """Fetch a picture as JPEG bytes; empty when unavailable."""
        return self.get_bytes(self._edition_path(f"{issue_date}/{page_index}/{picture_id}/jpg"))

    def fetch_title_image(self, issue_date: str) -> bytes:
        """Fetch the cover image as JPEG bytes; empty when unavailable."""
        return self.get_bytes(self._edition_path(f"{issue_date}/0/big"))

    def _edition_path(self, relative_path: str) -> str:
        if self.edition is None:
            raise RuntimeError("No edition selected; call login() first")
        return f"{self.API_PATH}/{self.edition}/{relative_path}"
