"""EPUB compiler for the package, NCX and navigation documents.

Serializes a verified package record into:

- ``OEBPS/content.opf``: metadata, manifest, spine and guide
- ``OEBPS/toc.ncx``: the navigation map with play-order positions
- ``OEBPS/navigation.xhtml``: the EPUB 3 navigation document

The container descriptor ``META-INF/container.xml`` only points at the
package document and is built by :func:`build_container`.
"""

import logging
from datetime import datetime, timezone

from lxml import etree

from schemas.package import NavPoint, PackageDocument

from .compiler import Compiler
from .epub_archive import EpubArchive
from .package_assembler import INDEX_DOCUMENT, NAV_DOCUMENT, NCX_DOCUMENT, TITLE_DOCUMENT

logger = logging.getLogger(__name__)

OPF_NS = "http://www.idpf.org/2007/opf"
DC_NS = "http://purl.org/dc/elements/1.1/"
NCX_NS = "http://www.daisy.org/z3986/2005/ncx/"
XHTML_NS = "http://www.w3.org/1999/xhtml"
EPUB_NS = "http://www.idpf.org/2007/ops"
CONTAINER_NS = "urn:oasis:names:tc:opendocument:xmlns:container"

CONTENT_ROOT = "OEBPS"
PACKAGE_PATH = f"{CONTENT_ROOT}/content.opf"
CONTAINER_PATH = "META-INF/container.xml"


def _serialize(root: etree._Element) -> bytes:
    return etree.tostring(
        root,
        xml_declaration=True,
        encoding="UTF-8",
        pretty_print=True,
    )


def build_container() -> bytes:
    """The container descriptor pointing at ``OEBPS/content.opf``."""
    root = etree.Element(
        f"{{{CONTAINER_NS}}}container", nsmap={None: CONTAINER_NS}
    )
    root.set("version", "1.0")
    rootfiles = etree.SubElement(root, f"{{{CONTAINER_NS}}}rootfiles")
    rootfile = etree.SubElement(rootfiles, f"{{{CONTAINER_NS}}}rootfile")
    rootfile.set("full-path", PACKAGE_PATH)
    rootfile.set("media-type", "application/oebps-package+xml")
    return _serialize(root)


def build_opf(package: PackageDocument, modified: datetime | None = None) -> bytes:
    """Build the OPF package document.

    Args:
        package: Verified package record
        modified: Modification timestamp (default: now, UTC)
    """
    modified = modified or datetime.now(timezone.utc)

    root = etree.Element(f"{{{OPF_NS}}}package", nsmap={None: OPF_NS})
    root.set("unique-identifier", "BookId")
    root.set("version", "3.0")

    metadata = etree.SubElement(
        root, f"{{{OPF_NS}}}metadata", nsmap={"dc": DC_NS, "opf": OPF_NS}
    )
    identifier = etree.SubElement(metadata, f"{{{DC_NS}}}identifier")
    identifier.set("id", "BookId")
    identifier.text = package.identifier
    etree.SubElement(metadata, f"{{{DC_NS}}}title").text = package.title
    creator = etree.SubElement(metadata, f"{{{DC_NS}}}creator")
    creator.set("id", "author")
    creator.text = package.creator
    etree.SubElement(metadata, f"{{{DC_NS}}}publisher").text = package.publisher
    etree.SubElement(metadata, f"{{{DC_NS}}}date").text = package.date
    etree.SubElement(metadata, f"{{{DC_NS}}}language").text = package.language
    if package.cover_id:
        cover = etree.SubElement(metadata, f"{{{OPF_NS}}}meta")
        cover.set("name", "cover")
        cover.set("content", package.cover_id)
    stamp = etree.SubElement(metadata, f"{{{OPF_NS}}}meta")
    stamp.set("property", "dcterms:modified")
    stamp.text = modified.strftime("%Y-%m-%dT%H:%M:%SZ")

    manifest = etree.SubElement(root, f"{{{OPF_NS}}}manifest")
    for item in package.manifest:
        item_el = etree.SubElement(manifest, f"{{{OPF_NS}}}item")
        item_el.set("href", item.href)
        item_el.set("id", item.id)
        item_el.set("media-type", item.media_type)
        if item.properties:
            item_el.set("properties", item.properties)

    spine = etree.SubElement(root, f"{{{OPF_NS}}}spine")
    spine.set("toc", "ncx")
    for entry in package.spine:
        etree.SubElement(spine, f"{{{OPF_NS}}}itemref").set("idref", entry.idref)

    guide = etree.SubElement(root, f"{{{OPF_NS}}}guide")
    for href, title, kind in (
        (TITLE_DOCUMENT, "Cover", "cover"),
        (INDEX_DOCUMENT, "Inhaltsverzeichnis", "toc"),
    ):
        reference = etree.SubElement(guide, f"{{{OPF_NS}}}reference")
        reference.set("href", href)
        reference.set("title", title)
        reference.set("type", kind)

    return _serialize(root)


def _ncx_nav_point(point: NavPoint) -> etree._Element:
    element = etree.Element(f"{{{NCX_NS}}}navPoint")
    element.set("id", point.id)
    element.set("playOrder", str(point.play_order))
    label = etree.SubElement(element, f"{{{NCX_NS}}}navLabel")
    etree.SubElement(label, f"{{{NCX_NS}}}text").text = point.label
    etree.SubElement(element, f"{{{NCX_NS}}}content").set("src", point.src)
    for child in point.children:
        element.append(_ncx_nav_point(child))
    return element


def build_ncx(package: PackageDocument) -> bytes:
    """Build the NCX navigation map."""
    root = etree.Element(f"{{{NCX_NS}}}ncx", nsmap={None: NCX_NS})
    root.set("version", "2005-1")

    head = etree.SubElement(root, f"{{{NCX_NS}}}head")
    for name, content in (("dc:Title", package.title), ("dtb:uid", package.identifier)):
        meta = etree.SubElement(head, f"{{{NCX_NS}}}meta")
        meta.set("name", name)
        meta.set("content", content)

    doc_title = etree.SubElement(root, f"{{{NCX_NS}}}docTitle")
    etree.SubElement(doc_title, f"{{{NCX_NS}}}text").text = package.title

    nav_map = etree.SubElement(root, f"{{{NCX_NS}}}navMap")
    for point in package.nav_map:
        nav_map.append(_ncx_nav_point(point))

    return _serialize(root)


def _nav_list_item(point: NavPoint) -> etree._Element:
    item = etree.Element(f"{{{XHTML_NS}}}li")
    link = etree.SubElement(item, f"{{{XHTML_NS}}}a")
    link.set("href", point.src)
    link.text = point.label
    if point.children:
        children = etree.SubElement(item, f"{{{XHTML_NS}}}ol")
        for child in point.children:
            children.append(_nav_list_item(child))
    return item


def build_nav(package: PackageDocument) -> bytes:
    """Build the EPUB 3 navigation document."""
    root = etree.Element(
        f"{{{XHTML_NS}}}html", nsmap={None: XHTML_NS, "epub": EPUB_NS}
    )
    head = etree.SubElement(root, f"{{{XHTML_NS}}}head")
    etree.SubElement(head, f"{{{XHTML_NS}}}title").text = package.title

    body = etree.SubElement(root, f"{{{XHTML_NS}}}body")
    nav = etree.SubElement(body, f"{{{XHTML_NS}}}nav")
    nav.set(f"{{{EPUB_NS}}}type", "toc")
    etree.SubElement(nav, f"{{{XHTML_NS}}}h1").text = package.title
    entries = etree.SubElement(nav, f"{{{XHTML_NS}}}ol")
    for point in package.nav_map:
        entries.append(_nav_list_item(point))

    return _serialize(root)


class EpubCompiler(Compiler):
    """Write the OPF, NCX and navigation documents of a package."""

    def compile(self, package: PackageDocument, archive: EpubArchive) -> None:
        """Write the control documents of ``package`` into ``archive``.

        Args:
            package: Verified package record of the issue
            archive: Open archive to write into
        """
        logger.info(f"Compiling control documents for {package.title}")
        archive.put(PACKAGE_PATH, build_opf(package))
        archive.put(f"{CONTENT_ROOT}/{NCX_DOCUMENT}", build_ncx(package))
        archive.put(f"{CONTENT_ROOT}/{NAV_DOCUMENT}", build_nav(package))
