"""Tests for the CLI module."""

from unittest.mock import MagicMock, PropertyMock, patch

import pytest

from epaper_distiller.cli import main
from epaper_distiller.clients import AuthenticationError, DEFAULT_BASE_URL
from schemas import EpubBuild, PackageDocument, SiteInfo


@pytest.fixture
def credentials(monkeypatch):
    """Login credentials in the environment."""
    monkeypatch.setenv("AZAN_USER", "leser@example.com")
    monkeypatch.setenv("AZAN_PASS", "geheim")
    monkeypatch.delenv("AZAN_AUSGABE", raising=False)


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.__enter__ = MagicMock(return_value=client)
    client.__exit__ = MagicMock(return_value=False)
    return client


def make_build(path):
    package = PackageDocument(
        identifier="Dürener Zeitung - 21. Aug. 2020",
        title="Dürener Zeitung - 21. Aug. 2020",
        date="2020-08-21",
    )
    return EpubBuild(path=str(path), package=package, missing_pictures=["pic-2"])


class TestCLIBuild:
    """Tests for the build command."""

    def test_requires_edition(self, credentials, caplog):
        """build fails without --edition or AZAN_AUSGABE."""
        result = main(["build"])

        assert result == 1
        assert "No edition given" in caplog.text

    def test_requires_credentials(self, monkeypatch, caplog):
        """build fails without credentials."""
        monkeypatch.delenv("AZAN_USER", raising=False)
        monkeypatch.delenv("AZAN_PASS", raising=False)

        result = main(["build", "--edition", "az-d"])

        assert result == 1
        assert "Credentials missing" in caplog.text

    def test_rejects_malformed_date(self, credentials, capsys):
        """Dates other than 'latest' and YYYYMMDD are rejected."""
        with pytest.raises(SystemExit) as exc_info:
            main(["build", "--edition", "az-d", "2020-08-21"])

        assert exc_info.value.code == 2
        assert "expected 'latest' or YYYYMMDD" in capsys.readouterr().err

    @patch("epaper_distiller.cli.IssueAggregator")
    @patch("epaper_distiller.cli.EPaperClient")
    def test_builds_latest_by_default(
        self, mock_client_class, mock_aggregator_class, credentials, mock_client, tmp_path
    ):
        """Without dates the latest issue is built."""
        mock_client_class.return_value = mock_client
        aggregator = mock_aggregator_class.return_value
        aggregator.create_epub.return_value = make_build(tmp_path / "az-d-2020-08-21.epub")

        result = main(["build", "--edition", "az-d", "--output", str(tmp_path)])

        assert result == 0
        mock_client.login.assert_called_once_with("az-d", "leser@example.com", "geheim")
        aggregator.create_epub.assert_called_once_with("latest")
        config = mock_client_class.call_args.args[0]
        assert config["base_url"] == DEFAULT_BASE_URL
        assert config["headers"]["Accept"] == "application/json"

    @patch("epaper_distiller.cli.IssueAggregator")
    @patch("epaper_distiller.cli.EPaperClient")
    def test_edition_from_environment(
        self, mock_client_class, mock_aggregator_class, credentials, mock_client,
        monkeypatch, tmp_path,
    ):
        """The edition falls back to AZAN_AUSGABE."""
        monkeypatch.setenv("AZAN_AUSGABE", "Dürener Zeitung")
        mock_client_class.return_value = mock_client
        mock_aggregator_class.return_value.create_epub.return_value = make_build(
            tmp_path / "az-d-2020-08-21.epub"
        )

        result = main(["build", "--output", str(tmp_path)])

        assert result == 0
        mock_client.login.assert_called_once_with(
            "Dürener Zeitung", "leser@example.com", "geheim"
        )

    @patch("epaper_distiller.cli.IssueAggregator")
    @patch("epaper_distiller.cli.EPaperClient")
    def test_builds_each_date(
        self, mock_client_class, mock_aggregator_class, credentials, mock_client, tmp_path
    ):
        """Every given date is built into its own archive."""
        mock_client_class.return_value = mock_client
        aggregator = mock_aggregator_class.return_value
        aggregator.create_epub.return_value = make_build(tmp_path / "book.epub")

        result = main([
            "build", "--edition", "az-d", "--output", str(tmp_path),
            "20200820", "20200821",
        ])

        assert result == 0
        assert [c.args for c in aggregator.create_epub.call_args_list] == [
            ("20200820",),
            ("20200821",),
        ]

    @patch("epaper_distiller.cli.EPaperClient")
    def test_login_failure(self, mock_client_class, credentials, mock_client, caplog):
        """A rejected login ends with exit code 1."""
        mock_client.login.side_effect = AuthenticationError("Falsches Passwort")
        mock_client_class.return_value = mock_client

        result = main(["build", "--edition", "az-d"])

        assert result == 1
        assert "Falsches Passwort" in caplog.text


class TestCLIEditions:
    """Tests for the editions command."""

    @patch("epaper_distiller.cli.EPaperClient")
    def test_lists_editions_by_title(self, mock_client_class, mock_client, capsys):
        """Editions are printed sorted by title."""
        mock_client.site_info = SiteInfo(editions={
            "az-d": "Dürener Zeitung",
            "an-a": "Aachener Nachrichten",
        })
        mock_client_class.return_value = mock_client

        result = main(["editions"])

        assert result == 0
        assert capsys.readouterr().out.splitlines() == [
            "an-a  : Aachener Nachrichten",
            "az-d  : Dürener Zeitung",
        ]

    @patch("epaper_distiller.cli.EPaperClient")
    def test_site_unreachable(self, mock_client_class, mock_client, caplog):
        """A failed download ends with exit code 1."""
        type(mock_client).site_info = PropertyMock(
            side_effect=ConnectionError("Failed to connect: unreachable")
        )
        mock_client_class.return_value = mock_client

        result = main(["editions"])

        assert result == 1
        assert "Failed to load editions" in caplog.text


class TestCLIMain:
    """Tests for the top-level parser."""

    def test_no_command_prints_help(self, capsys):
        """Without a command the help is shown."""
        assert main([]) == 0
        assert "epaper-distiller" in capsys.readouterr().out
