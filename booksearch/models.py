from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional, Tuple, Union
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from PIL import Image


class Vendor(str, Enum):
    AMAZON = "Amazon"
    BARNES = "Barnes&Noble"
    BOOK_RENTER = "BookRenter"
    CHEGG = "Chegg"


class VendorQuote(BaseModel):
    # None means the page offered no price for that column
    new: Optional[Decimal] = None
    used: Optional[Decimal] = None
    rental: Optional[Decimal] = None


class QuoteTable(BaseModel):
    quotes: Dict[Vendor, VendorQuote] = Field(
        default_factory=lambda: {v: VendorQuote() for v in Vendor})
    expiration: Optional[datetime] = None

    def __getitem__(self, vendor: Union[Vendor, str]) -> VendorQuote:
        return self.quotes[Vendor(vendor)]

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expiration is None:
            return False
        return (now or datetime.now(timezone.utc)) >= self.expiration


class BookRecord(BaseModel):
    source_url: Optional[str] = None
    title: Optional[str] = None
    isbn10: Optional[str] = None
    isbn13: Optional[str] = None
    authors: List[str] = []
    publishers: List[str] = []
    edition: Optional[str] = None
    binding: Optional[str] = None
    cover: Optional[Image.Image] = None
    cover_url: Optional[str] = None
    cover_error: Optional[str] = None
    published: Optional[date] = None
    list_price: Optional[Decimal] = None
    quotes: Optional[QuoteTable] = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def isbns(self) -> Tuple[Optional[str], Optional[str]]:
        return (self.isbn10, self.isbn13)
