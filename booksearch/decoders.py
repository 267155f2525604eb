from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional
from .errors import FormatError

PUBLISHED_FORMAT = "%B %Y"

ISBN_SLOTS = {10: "isbn10", 13: "isbn13"}


def isbn_slot(value: str) -> Optional[str]:
    """Name of the record slot an identifier belongs in, by exact length."""
    return ISBN_SLOTS.get(len(value))


def split_names(value: str) -> List[str]:
    if not value.strip():
        return []
    return [name.strip() for name in value.split(";")]


def parse_published(value: str) -> date:
    try:
        return datetime.strptime(value.strip(), PUBLISHED_FORMAT).date()
    except ValueError as e:
        raise FormatError("publication date", value, str(e)) from e


def format_published(value: date) -> str:
    return value.strftime(PUBLISHED_FORMAT)


def _price_text(value: str) -> str:
    s = value.strip()
    if s.startswith("$"):
        s = s[1:]
    return s.strip().replace(",", "")


def parse_price(value: str, field: str = "list price") -> Decimal:
    s = _price_text(value)
    try:
        price = Decimal(s)
    except InvalidOperation as e:
        raise FormatError(field, value) from e
    if not price.is_finite():
        raise FormatError(field, value, "not a finite number")
    return price


def parse_quote_price(value: str) -> Optional[Decimal]:
    """Like parse_price, but a blank table cell means no quote."""
    if not _price_text(value):
        return None
    return parse_price(value, field="quoted price")
