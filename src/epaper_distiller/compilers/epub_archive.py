"""Zip sink for the EPUB container.

Entries are written once each and never read back. The ``mimetype`` entry
is written first and stored uncompressed, as EPUB readers require.
"""

import logging
import zipfile
from pathlib import Path

logger = logging.getLogger(__name__)

MIMETYPE = "application/epub+zip"


class EpubArchive:
    """Write-once archive of an EPUB.

    Use as a context manager. When the block exits with an exception, the
    partially written file is removed.

    Attributes:
        path: Location of the archive file
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._zip: zipfile.ZipFile | None = None
        self._names: list[str] = []

    def __enter__(self) -> "EpubArchive":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
        if exc_type is not None:
            logger.debug(f"Removing incomplete archive {self.path}")
            self.path.unlink(missing_ok=True)

    @property
    def names(self) -> list[str]:
        """Paths written so far, in order."""
        return list(self._names)

    def open(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._zip = zipfile.ZipFile(self.path, "w")
        self._zip.writestr("mimetype", MIMETYPE, zipfile.ZIP_STORED)
        self._names.append("mimetype")
        logger.debug(f"Opened archive {self.path}")

    def close(self) -> None:
        if self._zip is not None:
            self._zip.close()
            self._zip = None

    def put(self, path: str, content: bytes | str) -> None:
        """Add an entry.

        Args:
            path: Path inside the archive, e.g. "OEBPS/seite_0.xhtml"
            content: Entry content; strings are encoded as UTF-8

        Raises:
            ValueError: If ``path`` was already written
            RuntimeError: If the archive is not open
        """
        if self._zip is None:
            raise RuntimeError(f"Archive {self.path} is not open")
        if path in self._names:
            raise ValueError(f"Archive entry {path} was already written")
        if isinstance(content, str):
            content = content.encode("utf-8")
        self._zip.writestr(path, content, zipfile.ZIP_DEFLATED)
        self._names.append(path)
        logger.debug(f"Wrote {path} ({len(content)} bytes)")
