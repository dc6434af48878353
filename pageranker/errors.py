# errors.py
#
# Project: Link-file PageRank
#
# Description:
#   Error hierarchy shared by every stage.  All failures are terminal for
#   the current run; only main.py catches them.


class PageRankError(Exception):
    """Base class for every pipeline failure."""


class InputNotFoundError(PageRankError):
    """The link file is missing or cannot be read."""

    def __init__(self, path, reason=None):
        self.path = path
        self.reason = reason
        message = f"Link file not found or unreadable: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class LinkParseError(PageRankError):
    """A link record contains a token that is not an integer page id."""

    def __init__(self, line_no, token, line):
        self.line_no = line_no
        self.token = token
        self.line = line
        super().__init__(f"Line {line_no}: invalid page id {token!r} in {line.strip()!r}")


class OutputWriteError(PageRankError):
    """A result file could not be written.  In-memory results stay valid."""

    def __init__(self, path, reason=None):
        self.path = path
        self.reason = reason
        message = f"Cannot write output file: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class EmptyGraphError(PageRankError):
    """PageRank was requested on a graph with no pages."""
