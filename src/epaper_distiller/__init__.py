"""Convert ePaper newspaper issues into EPUB books."""

__version__ = "0.1.0"
