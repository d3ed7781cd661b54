"""Ports for reading and writing spreadsheet workbooks."""

from typing import Any, Protocol

from src.domain.models import ParsedWorkbook


class WorkbookReaderPort(Protocol):
    """Port decoding uploaded workbook bytes."""

    def read(self, payload: bytes) -> ParsedWorkbook:
        """Return the data sheet grid and the optional rates sheet.

        Raises:
            ParseError: If the payload is not a readable workbook.
        """


class WorkbookWriterPort(Protocol):
    """Port encoding sheet grids into workbook bytes."""

    def write(
        self,
        data_rows: list[list[Any]],
        rate_rows: list[list[Any]],
    ) -> bytes:
        """Return a workbook with the data, rates and guide sheets."""


__all__ = ["WorkbookReaderPort", "WorkbookWriterPort"]
