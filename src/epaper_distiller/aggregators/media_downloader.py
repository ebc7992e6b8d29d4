"""Media downloader for article pictures and the cover image."""

import logging

from epaper_distiller.clients import EPaperClient
from epaper_distiller.compilers.epub_archive import EpubArchive
from schemas.article import Article

logger = logging.getLogger(__name__)

IMAGES_DIR = "OEBPS/images"
TITLE_IMAGE_PATH = f"{IMAGES_DIR}/title.jpg"


class MediaDownloader:
    """Downloads pictures through the ePaper API into the archive.

    A picture that cannot be retrieved is not an error: its ``size`` stays
    zero, nothing is written, and the rendered article shows a placeholder.

    Example:
        downloader = MediaDownloader(client, archive)
        missing = downloader.download_article_pictures("20200821", 3, article)
    """

    def __init__(self, client: EPaperClient, archive: EpubArchive):
        """Initialize the media downloader.

        Args:
            client: Logged-in ePaper client
            archive: Open archive receiving the images
        """
        self.client = client
        self.archive = archive
        self._sizes: dict[str, int] = {}

    def download_article_pictures(
        self,
        issue_date: str,
        page_index: int,
        article: Article,
    ) -> list[str]:
        """Download every picture of ``article`` and record its size.

        Pictures already downloaded for another article keep the size
        recorded the first time and are not fetched again.

        Args:
            issue_date: Issue date as "YYYYMMDD"
            page_index: Index of the page the article was found on
            article: Article whose pictures are fetched

        Returns:
            Ids of the pictures that could not be retrieved
        """
        missing: list[str] = []
        for picture in article.pictures:
            if picture.id in self._sizes:
                picture.size = self._sizes[picture.id]
            else:
                content = self.client.fetch_picture(issue_date, page_index, picture.id)
                if content:
                    self.archive.put(f"OEBPS/{picture.href}", content)
                picture.size = len(content)
                self._sizes[picture.id] = picture.size

            if not picture.is_available:
                missing.append(picture.id)
        return missing

    def download_title_image(self, issue_date: str) -> int:
        """Download the cover image.

        Returns:
            Number of bytes written; zero when the cover is unavailable
        """
        content = self.client.fetch_title_image(issue_date)
        if not content:
            logger.warning(f"No title image for issue {issue_date}")
            return 0
        self.archive.put(TITLE_IMAGE_PATH, content)
        logger.debug(f"Saved title image ({len(content)} bytes)")
        return len(content)
