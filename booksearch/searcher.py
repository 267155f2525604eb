import os
import re
import sys
from datetime import datetime
from typing import Iterable, Optional
from urllib.parse import quote, urljoin
import httpx
from dotenv import load_dotenv
from .covers import load_cover
from .errors import BookSearchError, InvalidISBN
from .info import CoverLoader, InfoExtractor
from .models import BookRecord
from .prices import PriceTableExtractor
from .tokens import Token, tokenize
from .transport import fetch, new_client
from utils.logger import logger

load_dotenv()
BOOK_URL_TEMPLATE = os.getenv("BOOK_URL_TEMPLATE", "http://www.isbnsearch.org/isbn/{isbn}")


def book_url(isbn: str) -> str:
    normalized = re.sub(r"[\s-]", "", isbn)
    if not normalized:
        raise InvalidISBN("isbn must not be empty")
    return BOOK_URL_TEMPLATE.format(isbn=quote(normalized, safe=""))


def extract_book(tokens: Iterable[Token], cover_loader: Optional[CoverLoader] = None,
                 with_quotes: bool = True, now: Optional[datetime] = None,
                 base_url: Optional[str] = None) -> BookRecord:
    """Run the info panel extractor, then the quote table extractor, over one stream."""
    stream = iter(tokens)
    fields = InfoExtractor(cover_loader).run(stream)
    if with_quotes:
        fields["quotes"] = PriceTableExtractor().run(stream, now=now)
    if base_url:
        fields["source_url"] = base_url
        if fields.get("cover_url"):
            fields["cover_url"] = urljoin(base_url, fields["cover_url"])
    return BookRecord(**fields)


def get_book(isbn: str, client: Optional[httpx.Client] = None,
             with_quotes: bool = True, now: Optional[datetime] = None) -> BookRecord:
    """Look a book up by ISBN.

    Raises TransportError, FormatError or StructureNotFound; a cover that
    fails to load only leaves ``cover`` empty and sets ``cover_error``.
    """
    if client is None:
        with new_client() as c:
            return get_book(isbn, c, with_quotes=with_quotes, now=now)

    url = book_url(isbn)
    html = fetch(client, url)
    book = extract_book(
        tokenize(html),
        cover_loader=lambda src: load_cover(client, urljoin(url, src)),
        with_quotes=with_quotes,
        now=now,
        base_url=url,
    )
    logger.info("Found %r (%s)", book.title, url)
    return book


if __name__ == "__main__":
    if len(sys.argv) != 2:
        sys.exit("usage: python -m booksearch.searcher ISBN")
    try:
        book = get_book(sys.argv[1])
    except BookSearchError as e:
        logger.error("Lookup failed for %s: %s", sys.argv[1], e)
        sys.exit(1)
    print(book.model_dump_json(exclude={"cover"}, indent=2))
