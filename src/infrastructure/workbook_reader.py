"""Workbook reader backed by openpyxl."""

from io import BytesIO
from xml.etree.ElementTree import ParseError as XmlParseError
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from src.application.ports.workbook import WorkbookReaderPort
from src.domain.errors import ParseError
from src.domain.models import ParsedWorkbook
from src.infrastructure.logging.logger import get_app_logger


class OpenpyxlWorkbookReader(WorkbookReaderPort):
    """Decode ``.xlsx`` bytes into the data and rates sheet grids."""

    def __init__(self, logger=None) -> None:
        self._logger = logger or get_app_logger()

    def read(self, payload: bytes) -> ParsedWorkbook:
        """Read sheet 1 as data and sheet 2, when present, as rates.

        Args:
            payload: Raw workbook bytes.

        Returns:
            ParsedWorkbook: Header row, data rows and optional rates rows.

        Raises:
            ParseError: If the payload is empty or not a readable workbook.
        """
        if not payload:
            raise ParseError("empty workbook")
        try:
            workbook = load_workbook(
                filename=BytesIO(payload),
                data_only=True,
                read_only=True,
            )
        except (
            InvalidFileException,
            BadZipFile,
            SyntaxError,
            KeyError,
            ValueError,
            OSError,
        ) as exc:
            raise ParseError(f"unreadable workbook: {exc}") from exc

        try:
            sheets = workbook.worksheets
            if not sheets:
                raise ParseError("workbook has no sheets")
            data = _sheet_rows(sheets[0])
            rates = _sheet_rows(sheets[1]) if len(sheets) > 1 else None
        finally:
            workbook.close()

        self._logger.debug(
            f"Read workbook with {len(data)} data rows and "
            f"{len(rates) if rates is not None else 0} rate rows"
        )
        return ParsedWorkbook(
            header_row=data[0] if data else [],
            data_rows=data[1:],
            rates_sheet_rows=rates,
        )


def _sheet_rows(sheet) -> list[list]:
    """Materialize a read-only sheet; its XML is only parsed here."""
    # lxml raises its own SyntaxError subclass instead of XmlParseError.
    try:
        return [list(row) for row in sheet.iter_rows(values_only=True)]
    except (XmlParseError, SyntaxError, KeyError, ValueError, OSError) as exc:
        raise ParseError(f"corrupt sheet {sheet.title!r}: {exc}") from exc


__all__ = ["OpenpyxlWorkbookReader"]
