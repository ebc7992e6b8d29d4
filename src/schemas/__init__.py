"""Schema definitions for ePaper Distiller."""

from .article import Article
from .element import Element
from .issue import Issue
from .link import Link, PageRef, PaperRef
from .package import (
    EpubBuild,
    ManifestItem,
    NavPoint,
    PackageConsistencyError,
    PackageDocument,
    SpineItem,
)
from .page import Page
from .picture import Picture
from .region import Region
from .site import Authorization, Credentials, SiteInfo

__all__ = [
    "Article",
    "Authorization",
    "Credentials",
    "Element",
    "EpubBuild",
    "Issue",
    "Link",
    "ManifestItem",
    "NavPoint",
    "PackageConsistencyError",
    "PackageDocument",
    "Page",
    "PageRef",
    "PaperRef",
    "Picture",
    "Region",
    "SiteInfo",
    "SpineItem",
]
