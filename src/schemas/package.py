"""EPUB package records.

The package of one issue is described by three cross-referencing indices:

- the manifest, listing every addressable item of the book
- the spine, the linear reading order of top-level documents
- the navigation map, a tree of labelled entries with strictly increasing
  play-order positions

These records are produced by the package assembler and serialized into
``content.opf``, ``toc.ncx`` and ``navigation.xhtml``.
"""

from pydantic import BaseModel, Field


class PackageConsistencyError(ValueError):
    """Raised when manifest, spine and navigation disagree."""


class ManifestItem(BaseModel):
    """An item of the OPF manifest.

    Attributes:
        id: Manifest id referenced from the spine
        href: Location relative to ``OEBPS/``
        media_type: MIME type of the item
        properties: Optional OPF properties (e.g. "nav")
    """

    id: str
    href: str
    media_type: str
    properties: str | None = None


class SpineItem(BaseModel):
    """An entry of the OPF spine."""

    idref: str


class NavPoint(BaseModel):
    """An entry of the navigation tree.

    Attributes:
        id: Entry id, safe for use as an XML id
        play_order: Position marker of this entry in depth-first order
        label: Human-readable label
        src: Target document relative to ``OEBPS/``
        children: Nested entries
    """

    id: str
    play_order: int
    label: str
    src: str
    children: list["NavPoint"] = Field(default_factory=list)

    def walk(self):
        """Yield this entry and all descendants in depth-first order."""
        yield self
        for child in self.children:
            yield from child.walk()


class PackageDocument(BaseModel):
    """Manifest, spine and navigation of one issue.

    :meth:`verify` checks that every spine entry and every navigation target
    refers to a manifest item, and that the play-order positions are exactly
    ``1..N``.
    """

    identifier: str
    title: str
    date: str
    language: str = "de"
    creator: str = ""
    publisher: str = ""
    cover_id: str | None = None
    manifest: list[ManifestItem] = Field(default_factory=list)
    spine: list[SpineItem] = Field(default_factory=list)
    nav_map: list[NavPoint] = Field(default_factory=list)

    def verify(self) -> None:
        """Raise PackageConsistencyError if the indices disagree."""
        ids = [item.id for item in self.manifest]
        duplicates = sorted({item_id for item_id in ids if ids.count(item_id) > 1})
        if duplicates:
            raise PackageConsistencyError(
                f"Duplicate manifest ids: {', '.join(duplicates)}"
            )

        known_ids = set(ids)
        for entry in self.spine:
            if entry.idref not in known_ids:
                raise PackageConsistencyError(
                    f"Spine entry {entry.idref} has no manifest item"
                )

        if self.cover_id is not None and self.cover_id not in known_ids:
            raise PackageConsistencyError(
                f"Cover {self.cover_id} has no manifest item"
            )

        hrefs = {item.href for item in self.manifest}
        positions = []
        for point in self.nav_points():
            if point.src not in hrefs:
                raise PackageConsistencyError(
                    f"Navigation entry {point.id} points to {point.src}, "
                    f"which is not in the manifest"
                )
            positions.append(point.play_order)

        if positions != list(range(1, len(positions) + 1)):
            raise PackageConsistencyError(
                f"Navigation positions are not contiguous: {positions}"
            )

    def nav_points(self) -> list[NavPoint]:
        """All navigation entries in depth-first order."""
        return [point for root in self.nav_map for point in root.walk()]

    def manifest_item(self, item_id: str) -> ManifestItem | None:
        for item in self.manifest:
            if item.id == item_id:
                return item
        return None


class EpubBuild(BaseModel):
    """Outcome of converting one issue.

    Attributes:
        path: Location of the written archive
        package: Package record written into the archive
        missing_pictures: Ids of pictures that could not be retrieved
        unlinked_articles: Ids of articles written to the archive but not
            reached by any page's reading order
    """

    path: str
    package: PackageDocument
    missing_pictures: list[str] = Field(default_factory=list)
    unlinked_articles: list[str] = Field(default_factory=list)
