"""Compilers that assemble and serialize the EPUB package."""

from .compiler import Compiler
from .epub_archive import EpubArchive
from .epub_compiler import EpubCompiler, build_container, build_nav, build_ncx, build_opf
from .package_assembler import NavCounter, PackageAssembler

__all__ = [
    "Compiler",
    "EpubArchive",
    "EpubCompiler",
    "NavCounter",
    "PackageAssembler",
    "build_container",
    "build_nav",
    "build_ncx",
    "build_opf",
]
