"""Tests for the IssueAggregator class."""

import zipfile
from unittest.mock import MagicMock

import pytest
from lxml import etree

from epaper_distiller.aggregators import IssueAggregator
from epaper_distiller.clients import EPaperClient, IssueUnavailableError, NotFoundError
from schemas import Article, Issue, Page, SiteInfo

OPF = "{http://www.idpf.org/2007/opf}"


def link_record(article_id, page_index):
    if not article_id:
        return None
    return {"id": article_id, "paper": {"page": {"index": page_index}}}


def article_record(article_id, page_index, prev="", next="", prev_page=None, **fields):
    """Article record on ``page_index`` with same-page links by default."""
    record = {
        "id": article_id,
        "type": "article",
        "paper": {
            "paper": "az-d",
            "date": "20200821",
            "title": "Dürener Zeitung",
            "page": {"index": page_index, "number": page_index + 1},
        },
        "prev": link_record(prev, page_index if prev_page is None else prev_page),
        "next": link_record(next, page_index),
        "pictures": [],
        "text": "",
        "title": "",
    }
    record.update(fields)
    return record


ARTICLES = {
    "a-1": article_record(
        "a-1", 0, next="a-2",
        title="Neuer Marktplatz",
        text='<p><b class="ortsmarke">Düren</b> Fertig.<br></p>',
        pictures=[{"id": "pic-1"}, {"id": "pic-2"}],
    ),
    "a-2": article_record(
        "a-2", 0, prev="a-1",
        pictures=[{"id": "pic-3", "width": 1024, "height": 788}],
    ),
    "a-3": article_record(
        "a-3", 1, prev="a-2", prev_page=0,
        text="<p>Alemannia gewinnt das Derby deutlich und bleibt oben</p>",
    ),
    "a-4": article_record("a-4", 1, prev="a-9", text="<p>Kurzmeldung</p>"),
}

PAGES = [
    {
        "id": "20200821-0",
        "title": "Titelseite",
        "number": 1,
        "index": 0,
        "elements": [
            {"id": "a-2", "type": "article"},
            {"id": "ad-1", "type": "ad"},
            {"id": "a-1", "type": "article"},
        ],
    },
    {
        "id": "20200821-1",
        "title": "Lokales",
        "number": 2,
        "index": 1,
        "elements": [
            {"id": "a-4", "type": "article"},
            {"id": "a-3", "type": "article"},
        ],
    },
]


@pytest.fixture
def issue_record(sample_issue_record):
    sample_issue_record["numberOfPages"] = 2
    sample_issue_record["pageTitles"] = ["Titelseite", "Lokales"]
    return sample_issue_record


@pytest.fixture
def mock_client(issue_record):
    """Mock ePaper client serving a two-page issue."""
    client = MagicMock(spec=EPaperClient)
    client.base_url = "https://epaper.example.com/2.0"
    client.edition = "az-d"
    client.site_info = SiteInfo(imprint="<p>Zeitungsverlag Aachen GmbH</p>")
    client.fetch.return_value = Issue.model_validate(issue_record)
    client.fetch_page.side_effect = lambda date, index: Page.model_validate(PAGES[index])
    client.fetch_article.side_effect = (
        lambda date, page_index, element_id: Article.model_validate(ARTICLES[element_id])
    )
    client.fetch_picture.side_effect = (
        lambda date, page_index, picture_id: b"" if picture_id == "pic-2" else b"jpeg"
    )
    client.fetch_title_image.return_value = b"cover"
    return client


@pytest.fixture
def build(mock_client, tmp_path):
    return IssueAggregator(tmp_path, mock_client).create_epub("20200821")


class TestCreateEpub:
    """Tests for IssueAggregator.create_epub()."""

    def test_archive_name(self, build, tmp_path):
        """The archive is named after edition and date."""
        assert build.path == str(tmp_path / "az-d-2020-08-21.epub")

    def test_archive_contents(self, build):
        """Every document, image and control file is written."""
        with zipfile.ZipFile(build.path) as z:
            names = z.namelist()

        assert names[0] == "mimetype"
        assert set(names) == {
            "mimetype",
            "OEBPS/images/title.jpg",
            "OEBPS/title.xhtml",
            "OEBPS/epub.css",
            "META-INF/container.xml",
            "OEBPS/impressum.xhtml",
            "OEBPS/index.xhtml",
            "OEBPS/images/pic-1.jpg",
            "OEBPS/images/pic-3.jpg",
            "OEBPS/article_a-1.xhtml",
            "OEBPS/article_a-2.xhtml",
            "OEBPS/seite_0.xhtml",
            "OEBPS/article_a-3.xhtml",
            "OEBPS/article_a-4.xhtml",
            "OEBPS/seite_1.xhtml",
            "OEBPS/content.opf",
            "OEBPS/toc.ncx",
            "OEBPS/navigation.xhtml",
        }
        assert names[-3:] == ["OEBPS/content.opf", "OEBPS/toc.ncx", "OEBPS/navigation.xhtml"]

    def test_reading_order_in_spine(self, build):
        """Articles follow their page in reading order."""
        assert [entry.idref for entry in build.package.spine] == [
            "title",
            "index",
            "seite_0",
            "article_0_a-1",
            "article_0_a-2",
            "seite_1",
            "article_1_a-3",
            "imprint",
        ]

    def test_derived_titles_in_navigation(self, build):
        """Untitled articles are listed with derived titles."""
        labels = [point.label for point in build.package.nav_points()]

        assert labels == [
            "Startseite",
            "Inhalt",
            "Titelseite",
            "Neuer Marktplatz",
            "Wetter",
            "Lokales",
            "Alemannia gewinnt das Derby deutlich und…",
            "Impressum",
        ]

    def test_missing_picture_reported(self, build):
        """A picture that could not be retrieved is reported and not listed."""
        assert build.missing_pictures == ["pic-2"]
        assert build.package.manifest_item("image_pic-1") is not None
        assert build.package.manifest_item("image_pic-2") is None

        with zipfile.ZipFile(build.path) as z:
            article = z.read("OEBPS/article_a-1.xhtml").decode("utf-8")
        assert "Dieses Bild konnte nicht geladen werden" in article

    def test_unlinked_article_written_but_not_listed(self, build):
        """An article outside the reading order stays in the archive only."""
        assert build.unlinked_articles == ["a-4"]
        assert build.package.manifest_item("article_1_a-4") is None

        with zipfile.ZipFile(build.path) as z:
            assert "OEBPS/article_a-4.xhtml" in z.namelist()

    def test_body_sanitized(self, build):
        """Article bodies are cleaned before rendering."""
        with zipfile.ZipFile(build.path) as z:
            article = z.read("OEBPS/article_a-1.xhtml").decode("utf-8")

        assert 'Fertig.<br /> <b class="ortsmarke">(Düren)</b>' in article

    def test_opf_matches_package(self, build):
        """The written OPF lists the package's manifest."""
        with zipfile.ZipFile(build.path) as z:
            root = etree.fromstring(z.read("OEBPS/content.opf"))

        ids = [item.get("id") for item in root.iter(f"{OPF}item")]
        assert ids == [item.id for item in build.package.manifest]

    def test_pictures_fetched_from_their_page(self, build, mock_client):
        """Pictures are requested below the page the article was found on."""
        mock_client.fetch_picture.assert_any_call("20200821", 0, "pic-1")
        mock_client.fetch_picture.assert_any_call("20200821", 0, "pic-3")


class TestCreateEpubFailures:
    """Tests for aborted builds."""

    def test_inaccessible_issue(self, mock_client, issue_record, tmp_path):
        """An issue neither subscribed nor bought is refused."""
        issue_record["subscription"] = False
        mock_client.fetch.return_value = Issue.model_validate(issue_record)

        with pytest.raises(IssueUnavailableError, match="Dürener Zeitung"):
            IssueAggregator(tmp_path, mock_client).create_epub()

        assert list(tmp_path.iterdir()) == []

    def test_fetch_failure_removes_archive(self, mock_client, tmp_path):
        """A failed fetch aborts the build and removes the partial file."""
        def fetch_page(date, index):
            if index == 1:
                raise NotFoundError("https://epaper.example.com/2.0/api/az-d/20200821/1")
            return Page.model_validate(PAGES[index])

        mock_client.fetch_page.side_effect = fetch_page

        with pytest.raises(NotFoundError):
            IssueAggregator(tmp_path, mock_client).create_epub("20200821")

        assert not (tmp_path / "az-d-2020-08-21.epub").exists()

    def test_missing_cover(self, mock_client, tmp_path):
        """Without cover image the package has no cover item."""
        mock_client.fetch_title_image.return_value = b""

        build = IssueAggregator(tmp_path, mock_client).create_epub("20200821")

        assert build.package.cover_id is None
        assert build.package.manifest_item("titleImage") is None

        with zipfile.ZipFile(build.path) as z:
            title_page = z.read("OEBPS/title.xhtml").decode("utf-8")
            assert "OEBPS/images/title.jpg" not in z.namelist()
        assert "images/title.jpg" not in title_page
        assert "Dürener Zeitung" in title_page
