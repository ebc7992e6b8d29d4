"""Issue aggregator turning one ePaper issue into an EPUB archive."""

import logging
from pathlib import Path

from epaper_distiller.aggregators.media_downloader import MediaDownloader
from epaper_distiller.clients import ClientError, EPaperClient, IssueUnavailableError
from epaper_distiller.compilers import EpubArchive, EpubCompiler, PackageAssembler
from epaper_distiller.compilers.compiler import Compiler
from epaper_distiller.compilers.epub_compiler import CONTAINER_PATH, build_container
from epaper_distiller.transformers import (
    XHTMLRenderer,
    derive_title,
    resolve_reading_order,
    sanitize_body,
)
from schemas.article import Article
from schemas.issue import Issue
from schemas.package import EpubBuild
from schemas.page import Page

logger = logging.getLogger(__name__)


def archive_name(edition: str, issue: Issue) -> str:
    """File name of the archive, e.g. "az-d-2020-08-21.epub"."""
    return f"{edition}-{issue.issue_date.isoformat()}.epub"


class IssueAggregator:
    """Builds an EPUB for one issue of the logged-in edition.

    Pages are processed strictly in issue order. For each page the
    aggregator fetches the page and its articles, derives display titles,
    cleans the article bodies, downloads pictures and writes one document
    per article. Once a page's reading order is resolved, its table of
    contents is written and the page is handed to the package assembler.
    The control documents are written last.

    Any fetch failure aborts the build and removes the partial archive.

    Example:
        with EPaperClient({"base_url": DEFAULT_BASE_URL}) as client:
            client.login("az-d", user, password)
            aggregator = IssueAggregator(Path("."), client)
            build = aggregator.create_epub("20200821")
    """

    def __init__(
        self,
        output_dir: Path,
        client: EPaperClient,
        renderer: XHTMLRenderer | None = None,
        compiler: Compiler | None = None,
    ):
        """Initialize the issue aggregator.

        Args:
            output_dir: Directory receiving the archives
            client: Logged-in ePaper client
            renderer: Optional renderer for dependency injection
            compiler: Optional control-document compiler for dependency injection
        """
        self.output_dir = Path(output_dir)
        self.client = client
        self.renderer = renderer or XHTMLRenderer(client.base_url)
        self.compiler = compiler or EpubCompiler()

    def create_epub(self, wanted_date: str = "latest") -> EpubBuild:
        """Build the archive for one issue.

        Args:
            wanted_date: "latest" or a date as "YYYYMMDD"

        Returns:
            EpubBuild describing the written archive

        Raises:
            IssueUnavailableError: If the issue is neither subscribed nor bought
            ClientError: If any resource cannot be fetched or decoded
        """
        issue = self.client.fetch(wanted_date)
        if not issue.is_accessible:
            raise IssueUnavailableError(issue.title)

        edition = self.client.edition or issue.paper
        path = self.output_dir / archive_name(edition, issue)
        logger.info(
            f"Building {path.name} from {issue.title} "
            f"({issue.number_of_pages} pages)"
        )

        with EpubArchive(path) as archive:
            downloader = MediaDownloader(self.client, archive)
            cover_size = downloader.download_title_image(issue.date_string)
            self._write_front_matter(archive, issue, cover_available=cover_size > 0)

            assembler = PackageAssembler(issue, cover_available=cover_size > 0)
            articles: dict[str, Article] = {}
            missing_pictures: list[str] = []

            for index in range(issue.number_of_pages):
                try:
                    page = self._process_page(
                        archive, downloader, issue, index, articles, missing_pictures
                    )
                except ClientError as e:
                    logger.error(f"Failed on page {index} of {issue.title}: {e.message}")
                    raise
                assembler.add_page(page)

            package = assembler.assemble()
            self.compiler.compile(package, archive)

        linked = {
            element.id for page in assembler.pages for element in page.reading_order
        }
        unlinked = [article_id for article_id in articles if article_id not in linked]
        for article_id in unlinked:
            logger.info(
                f"Article {articles[article_id].alt_title!r} ({article_id}) "
                f"is not reached by any reading order"
            )

        logger.info(
            f"Wrote {path} with {len(articles)} articles, "
            f"{len(missing_pictures)} missing pictures"
        )
        return EpubBuild(
            path=str(path),
            package=package,
            missing_pictures=missing_pictures,
            unlinked_articles=unlinked,
        )

    def _write_front_matter(
        self, archive: EpubArchive, issue: Issue, cover_available: bool
    ) -> None:
        """Write title page, stylesheet, container, imprint and issue index."""
        archive.put(
            "OEBPS/title.xhtml", self.renderer.render_title_page(issue, cover_available)
        )
        archive.put(
            f"OEBPS/{self.renderer.stylesheet_name}", self.renderer.stylesheet()
        )
        archive.put(CONTAINER_PATH, build_container())

        imprint = self.client.site_info.imprint
        archive.put("OEBPS/impressum.xhtml", self.renderer.render_imprint(imprint))
        archive.put("OEBPS/index.xhtml", self.renderer.render_index(issue))

    def _process_page(
        self,
        archive: EpubArchive,
        downloader: MediaDownloader,
        issue: Issue,
        index: int,
        articles: dict[str, Article],
        missing_pictures: list[str],
    ) -> Page:
        """Fetch, resolve and write one page with its articles."""
        page = self.client.fetch_page(issue.date_string, index)
        page.index = index
        logger.info(f"Page {index + 1}/{issue.number_of_pages}: {page.title}")

        for element in page.articles:
            if not element.id:
                continue
            article = articles.get(element.id)
            if article is None:
                article = self._process_article(
                    archive, downloader, issue, page, element.id, missing_pictures
                )
                articles[element.id] = article
            element.link_article(article)

        page.resolve(resolve_reading_order(page.elements))
        archive.put(f"OEBPS/{page.document_name}", self.renderer.render_page(issue, page))
        return page

    def _process_article(
        self,
        archive: EpubArchive,
        downloader: MediaDownloader,
        issue: Issue,
        page: Page,
        element_id: str,
        missing_pictures: list[str],
    ) -> Article:
        article = self.client.fetch_article(issue.date_string, page.index, element_id)

        # Derived from the raw body, before cleaning
        article.alt_title = derive_title(article)
        article.text = sanitize_body(article.text)

        missing = downloader.download_article_pictures(
            issue.date_string, page.index, article
        )
        for picture_id in missing:
            logger.warning(
                f"Missing picture {picture_id} on page {page.number}: "
                f"{article.alt_title}"
            )
        missing_pictures.extend(missing)

        archive.put(f"OEBPS/{article.document_name}", self.renderer.render_article(article))
        return article
