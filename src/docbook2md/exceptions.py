"""Custom exceptions for docbook2md."""


class Docbook2mdError(Exception):
    """Base exception for docbook2md operations."""


class TransformError(Docbook2mdError):
    """The DocBook to HTML transformation failed."""


class ParseError(Docbook2mdError):
    """Error during content parsing."""


class ConversionError(Docbook2mdError):
    """Error during format conversion."""
