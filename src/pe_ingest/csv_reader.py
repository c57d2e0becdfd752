"""Lazy CSV → instruction reader.

Yields one item per data row: a typed Instruction, or a RecordParseError the
batch driver reports without stopping. Fields are whitespace-trimmed and rows
may be short (missing amount) or long (trailing delimiters).
"""

import csv
import logging
from collections.abc import Iterator
from typing import Any, TextIO

from pydantic import ValidationError

from src.pe_common.errors import InputSourceError, RecordParseError
from src.pe_ingest.schemas import InstructionRow, describe_validation_error
from src.pe_ledger.domain.models import Instruction

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("type", "client", "tx")


def _rows(reader: Any) -> Iterator[list[str]]:
    try:
        yield from reader
    except (UnicodeDecodeError, csv.Error) as e:
        raise InputSourceError(f"line {reader.line_num}: {e}") from e


def read_instructions(stream: TextIO, delimiter: str = ",") -> Iterator[Instruction | RecordParseError]:
    reader = csv.reader(stream, delimiter=delimiter)
    rows = _rows(reader)

    header_row = next(rows, None)
    if header_row is None:
        logger.info("Instruction source is empty")
        return
    header = [name.strip().lower() for name in header_row]
    missing = [col for col in REQUIRED_COLUMNS if col not in header]
    if missing:
        logger.warning("Header %s lacks columns %s; every record will fail", header, missing)

    record = 0
    for row in rows:
        if not any(cell.strip() for cell in row):
            continue
        record += 1
        fields = {name: cell.strip() for name, cell in zip(header, row) if name and cell.strip()}
        try:
            yield InstructionRow.model_validate(fields).to_instruction()
        except ValidationError as e:
            yield RecordParseError(record, reader.line_num, describe_validation_error(e))
