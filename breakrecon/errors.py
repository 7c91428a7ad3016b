from __future__ import annotations


class SourceFormatError(ValueError):
    """A source file could not be read as tabular CSV data."""

    def __init__(self, source: str, detail: str) -> None:
        super().__init__(f"Failed to parse {source}: {detail}")
        self.source = source
        self.detail = detail
