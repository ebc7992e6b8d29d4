"""Base class for EPUB control-document compilers."""

from abc import ABC, abstractmethod

from schemas.package import PackageDocument

from .epub_archive import EpubArchive


class Compiler(ABC):
    """Abstract base class for control-document compilers.

    Compilers serialize an assembled package record into the documents that
    tie the archive together and write them into the archive.
    """

    @abstractmethod
    def compile(self, package: PackageDocument, archive: EpubArchive) -> None:
        """Write the control documents of ``package`` into ``archive``.

        Args:
            package: Verified package record of the issue
            archive: Open archive to write into
        """
        pass
