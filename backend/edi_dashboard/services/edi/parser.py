"""Fixed-column parser for the vendor's tab-delimited EDI export.

Everything in this module is a pure function of the decoded text: no I/O and
no database access, so it can be exercised directly from tests and the CLI.
"""

import re
from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum

import structlog

from edi_dashboard.services.edi.exceptions import EdiFormatError
from edi_dashboard.services.edi.layout import (
    DEFAULT_LAYOUT,
    DEFAULT_PRODUCT_CATALOG,
    EdiColumnLayout,
    ProductCatalog,
)

logger = structlog.get_logger(__name__)

_LINE_SPLIT = re.compile(r"\r?\n")
_LEADING_INT = re.compile(r"^([+-]?\d+)")

# (pattern, group order) - tried in this order, first real calendar date wins
_DATE_PATTERNS: list[tuple[re.Pattern[str], tuple[str, str, str]]] = [
    (re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$"), ("year", "month", "day")),  # YYYY-MM-DD
    (re.compile(r"^(\d{4})/(\d{1,2})/(\d{1,2})$"), ("year", "month", "day")),  # YYYY/MM/DD
    (re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$"), ("month", "day", "year")),  # MM/DD/YYYY
    (re.compile(r"^(\d{4})(\d{2})(\d{2})$"), ("year", "month", "day")),  # YYYYMMDD
]

DEFAULT_QUANTITY = 1


class SkipReason(StrEnum):
    """Why a data row was left out of the extracted records."""

    TOO_FEW_COLUMNS = "too_few_columns"
    MISSING_ORDER_NUMBER = "missing_order_number"


@dataclass(frozen=True)
class EdiOrderRecord:
    """One order extracted from a data row."""

    line_number: int
    order_number: str
    product_code: str | None
    product_name: str | None
    product_spec: str | None
    order_quantity: int
    delivery_date: str | None


@dataclass(frozen=True)
class SkippedRow:
    """A data row that was not extracted."""

    line_number: int
    reason: SkipReason
    column_count: int


@dataclass
class EdiParseResult:
    """Parser output: extracted records plus row accounting."""

    records: list[EdiOrderRecord] = field(default_factory=list)
    skipped: list[SkippedRow] = field(default_factory=list)
    total_rows: int = 0

    @property
    def extracted_rows(self) -> int:
        return len(self.records)

    @property
    def skipped_rows(self) -> int:
        return len(self.skipped)


def clean_field(value: str) -> str:
    """Trim whitespace and surrounding double quotes from a cell."""
    return value.strip().strip('"').strip()


def parse_quantity(value: str) -> int:
    """Parse an order quantity from its leading digits.

    Trailing units or decimals are ignored ("12個" is 12, "2.5" is 2). Values
    without leading digits, or negative ones, become 1.
    """
    match = _LEADING_INT.match(value.replace(",", "").strip())
    if not match:
        return DEFAULT_QUANTITY
    quantity = int(match.group(1))
    return quantity if quantity >= 0 else DEFAULT_QUANTITY


def normalize_date(value: str) -> str | None:
    """Normalize a delivery date to YYYY-MM-DD.

    Returns None for an empty value and the trimmed input unchanged when no
    known format produces a real calendar date.
    """
    text = value.strip()
    if not text:
        return None

    for pattern, order in _DATE_PATTERNS:
        match = pattern.match(text)
        if not match:
            continue
        parts = dict(zip(order, (int(g) for g in match.groups()), strict=True))
        try:
            return date(parts["year"], parts["month"], parts["day"]).isoformat()
        except ValueError:
            continue

    return text


def split_columns(line: str) -> list[str]:
    return line.split("\t")


def parse_edi_text(
    text: str,
    layout: EdiColumnLayout = DEFAULT_LAYOUT,
    catalog: ProductCatalog = DEFAULT_PRODUCT_CATALOG,
) -> EdiParseResult:
    """Parse a decoded EDI document into order records.

    The first non-blank line is the header. It is not data, but it must have
    enough columns for the layout, otherwise the file is not in the expected
    format and EdiFormatError is raised. Data rows that are too short or have
    no order number are skipped and reported in the result.
    """
    numbered_lines = [
        (number, line) for number, line in enumerate(_LINE_SPLIT.split(text), start=1) if line.strip()
    ]
    if not numbered_lines:
        raise EdiFormatError("File contains no data")

    _, header = numbered_lines[0]
    header_columns = len(split_columns(header))
    if header_columns < layout.required_columns:
        raise EdiFormatError(f"Header has {header_columns} columns, expected at least {layout.required_columns}")

    result = EdiParseResult()
    for line_number, line in numbered_lines[1:]:
        result.total_rows += 1
        columns = split_columns(line)

        if len(columns) < layout.required_columns:
            logger.debug("Skipping row with too few columns", line=line_number, columns=len(columns))
            result.skipped.append(SkippedRow(line_number, SkipReason.TOO_FEW_COLUMNS, len(columns)))
            continue

        order_number = clean_field(columns[layout.order_number])
        if not order_number:
            logger.debug("Skipping row without order number", line=line_number)
            result.skipped.append(SkippedRow(line_number, SkipReason.MISSING_ORDER_NUMBER, len(columns)))
            continue

        product_code = clean_field(columns[layout.product_code]) or None
        product_spec = clean_field(columns[layout.product_name]) or None
        delivery_date = normalize_date(clean_field(columns[layout.delivery_date]))

        result.records.append(
            EdiOrderRecord(
                line_number=line_number,
                order_number=order_number,
                product_code=product_code,
                product_name=catalog.display_name(product_code) if product_code else None,
                product_spec=product_spec,
                order_quantity=parse_quantity(clean_field(columns[layout.order_quantity])),
                delivery_date=delivery_date,
            )
        )

    logger.info(
        "Parsed EDI document",
        total_rows=result.total_rows,
        extracted_rows=result.extracted_rows,
        skipped_rows=result.skipped_rows,
    )
    return result
