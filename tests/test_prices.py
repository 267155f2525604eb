import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from booksearch.errors import FormatError
from booksearch.models import Vendor
from booksearch.prices import QUOTE_TTL, PriceTableExtractor, vendor_for_alt
from booksearch.tokens import start, end, void, text


def run(tokens, now=None):
    return PriceTableExtractor().run(iter(tokens), now=now)


def test_vendor_row_with_blank_cell():
    table = run([
        void("img", alt="Amazon Logo"),
        start("th"), text("$10.00"), end("th"),
        start("th"), text(""), end("th"),
        start("th"), text("$5.00"), end("th"),
    ])
    amazon = table[Vendor.AMAZON]
    assert amazon.new == Decimal("10.00")
    assert amazon.used is None
    assert amazon.rental == Decimal("5.00")
    assert table["Chegg"].new is None


def test_footer_ends_table():
    stream = iter([
        void("img", alt="Chegg Textbooks"),
        start("th"), text("$7.25"),
        start("div", id="footer"),
        void("img", alt="Amazon"), start("th"), text("$1.00"),
    ])
    table = PriceTableExtractor().run(stream)
    assert table[Vendor.CHEGG].new == Decimal("7.25")
    assert table[Vendor.AMAZON].used is None
    # nothing past the footer was read
    assert next(stream) == void("img", alt="Amazon")


def test_price_consumes_vendor_arm():
    table = run([void("img", alt="Barnes & Noble"), start("th"), text("$20"), text("$99")])
    assert table[Vendor.BARNES].new == Decimal("20")
    assert table[Vendor.BARNES].used is None


def test_text_without_vendor_is_ignored():
    table = run([start("th"), text("New"), start("th"), text("$4.00")])
    assert all(q.new is None and q.used is None and q.rental is None for q in table.quotes.values())


def test_header_column_carries_no_price():
    table = run([void("img", alt="Book Renter"), text("$3.00"), start("th"), text("$4.00")])
    quote = table[Vendor.BOOK_RENTER]
    assert quote.new == Decimal("4.00")
    assert quote.used is None
    assert quote.rental is None


def test_unparsable_price_is_error():
    with pytest.raises(FormatError):
        run([void("img", alt="Amazon"), start("th"), text("call for price")])


@pytest.mark.parametrize("alt,vendor", [
    ("Amazon Logo", Vendor.AMAZON),
    ("Book Renter", Vendor.BOOK_RENTER),
    ("Chegg.com", Vendor.CHEGG),
    ("Barnes & Noble", Vendor.BARNES),
    ("amazon", None),
    ("eBay", None),
])
def test_vendor_for_alt(alt, vendor):
    assert vendor_for_alt(alt) is vendor


def test_expiration():
    now = datetime(2024, 3, 1, tzinfo=timezone.utc)
    table = run([], now=now)
    assert table.expiration == now + QUOTE_TTL
    assert not table.is_expired(now)
    assert table.is_expired(now + QUOTE_TTL + timedelta(seconds=1))


def test_header_after_row_is_ignored():
    table = run([
        void("img", alt="Amazon Logo"),
        start("th"), text("$10.00"),
        start("th"), text("$8.00"),
        start("th"), text("$5.00"),
        start("th"), text("Shipping"),
        start("div", id="footer"),
    ])
    amazon = table[Vendor.AMAZON]
    assert (amazon.new, amazon.used, amazon.rental) == (Decimal("10.00"), Decimal("8.00"), Decimal("5.00"))
