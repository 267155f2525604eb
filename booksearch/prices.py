import os
from datetime import datetime, timedelta, timezone
from typing import Iterator, Optional
from dotenv import load_dotenv
from . import decoders
from .models import QuoteTable, Vendor
from .tokens import Token, TokenKind
from utils.logger import logger

load_dotenv()
QUOTE_TTL = timedelta(hours=float(os.getenv("QUOTE_TTL_HOURS", str(5 * 8766))))

# alt text substrings, checked in order
VENDOR_MARKERS = (
    ("Amazon", Vendor.AMAZON),
    ("Book Renter", Vendor.BOOK_RENTER),
    ("Chegg", Vendor.CHEGG),
    ("Barnes", Vendor.BARNES),
)

COLUMNS = {1: "new", 2: "used", 3: "rental"}


def vendor_for_alt(alt: str) -> Optional[Vendor]:
    for marker, vendor in VENDOR_MARKERS:
        if marker in alt:
            return vendor
    return None


class PriceTableExtractor:
    """Reads the vendor comparison table that follows the info panel.

    Every ``<th>`` moves one column right. A vendor logo arms that vendor,
    and the next non-blank text is its price for the current column. A
    ``<th>`` re-arms the vendor of the current row, so one logo covers the
    new, used and rental cells after it. The ``div#footer`` ends the table.
    """

    def __init__(self):
        self.table = QuoteTable()
        self.column = 0
        self.row_vendor: Optional[Vendor] = None
        self.armed: Optional[Vendor] = None
        self.done = False

    def feed(self, token: Token) -> bool:
        if token.kind is TokenKind.START_TAG:
            if token.name == "div" and token.attr("id") == "footer":
                self.done = True
            elif token.name == "th":
                self.column += 1
                if self.column in COLUMNS:
                    self.armed = self.row_vendor
                else:
                    # past rental: the row is over
                    self.row_vendor = None
        elif token.kind is TokenKind.SELF_CLOSING_TAG and token.name == "img":
            vendor = vendor_for_alt(token.attr("alt") or "")
            if vendor is not None:
                logger.debug("Reading quotes for %s", vendor.value)
                self.row_vendor = self.armed = vendor
        elif token.kind is TokenKind.TEXT and self.armed is not None:
            self._consume(token.text)
        return self.done

    def _consume(self, value: str):
        price = decoders.parse_quote_price(value)
        if price is None:
            # blank cells keep the vendor armed
            return
        column = COLUMNS.get(self.column)
        if column is not None:
            setattr(self.table[self.armed], column, price)
        self.armed = None

    def run(self, tokens: Iterator[Token], now: Optional[datetime] = None) -> QuoteTable:
        for token in tokens:
            if self.feed(token):
                break
        else:
            logger.debug("Document ended before the page footer")
        self.table.expiration = (now or datetime.now(timezone.utc)) + QUOTE_TTL
        return self.table
