"""Error types raised while turning an uploaded workbook into product records."""


class ParseError(Exception):
    """Base class for every failure that aborts a parse."""


class StructuralError(ParseError):
    """The sheet does not have the shape the dashboard needs (too few rows, no month columns)."""


class EmptyDatasetError(StructuralError):
    """The sheet parsed cleanly but produced no product rows."""


class WorkbookReadError(ParseError):
    """The workbook bytes could not be read (corrupt file, wrong format, I/O error)."""
