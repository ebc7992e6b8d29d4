"""Aggregators that collect an issue's content into an EPUB archive."""

from .issue_aggregator import IssueAggregator
from .media_downloader import MediaDownloader

__all__ = ["IssueAggregator", "MediaDownloader"]
