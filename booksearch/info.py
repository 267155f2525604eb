"""Book info panel extraction.

The panel is a ``div.bookinfo`` whose fields appear in a fixed order, one per
unattributed ``<p>``::

    <div class="bookinfo">
      <h2>Title</h2>
      <p><strong>ISBN-13:</strong> <a href="...">9780134190440</a></p>
      <p><strong>ISBN-10:</strong> <a href="...">0134190440</a></p>
      <p><strong>Authors:</strong> Donovan, Alan; Kernighan, Brian</p>
      ...
      <p class="pricelink">...</p>

The scanner never builds a tree. It keeps a field position and an ``armed``
flag: opening tags arm the next text token, a bare ``<p>`` moves on to the
next field, and the first ``<p>`` carrying attributes closes the panel.
Which token does what is listed in TRANSITIONS.
"""
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, Dict, Iterator, NamedTuple, Optional
from PIL import Image
from . import decoders
from .errors import BookSearchError, StructureNotFound
from .tokens import Token, TokenKind
from utils.logger import logger


class Phase(Enum):
    SEEKING = "seeking"
    READING = "reading"
    CLOSED = "closed"


class InfoField(IntEnum):
    TITLE = 0
    FIRST_ISBN = 1
    SECOND_ISBN = 2
    AUTHORS = 3
    EDITION = 4
    BINDING = 5
    PUBLISHERS = 6
    PUBLISHED = 7
    LIST_PRICE = 8


@dataclass
class InfoState:
    phase: Phase = Phase.SEEKING
    position: int = InfoField.TITLE
    armed: bool = False

    @property
    def field(self) -> Optional[InfoField]:
        if self.position > InfoField.LIST_PRICE:
            return None
        return InfoField(self.position)


# guards

def _is_info_panel(state: InfoState, token: Token) -> bool:
    return "bookinfo" in (token.attr("class") or "").split()

def _inside(state: InfoState, token: Token) -> bool:
    return state.phase is Phase.READING

def _attributed_paragraph(state: InfoState, token: Token) -> bool:
    return _inside(state, token) and len(token.attrs) > 0

def _bare_paragraph(state: InfoState, token: Token) -> bool:
    return _inside(state, token) and not token.attrs

def _identifier_link(state: InfoState, token: Token) -> bool:
    # identifiers are the only linked values
    return _inside(state, token) and state.position < InfoField.AUTHORS

def _label_close(state: InfoState, token: Token) -> bool:
    return _inside(state, token) and state.position > InfoField.SECOND_ISBN

def _cover_image(state: InfoState, token: Token) -> bool:
    return _inside(state, token) and token.attr("src") is not None

def _armed_text(state: InfoState, token: Token) -> bool:
    return _inside(state, token) and state.armed


class Transition(NamedTuple):
    kind: TokenKind
    tag: Optional[str]
    guard: Callable[[InfoState, Token], bool]
    action: str


# first matching row wins
TRANSITIONS = (
    Transition(TokenKind.START_TAG, "div", _is_info_panel, "enter"),
    Transition(TokenKind.START_TAG, "h2", _inside, "arm"),
    Transition(TokenKind.START_TAG, "p", _attributed_paragraph, "close"),
    Transition(TokenKind.START_TAG, "p", _bare_paragraph, "advance"),
    Transition(TokenKind.START_TAG, "a", _identifier_link, "arm"),
    Transition(TokenKind.END_TAG, "strong", _label_close, "arm"),
    Transition(TokenKind.SELF_CLOSING_TAG, "img", _cover_image, "cover"),
    Transition(TokenKind.TEXT, None, _armed_text, "consume"),
)


def match_transition(state: InfoState, token: Token) -> Optional[Transition]:
    for t in TRANSITIONS:
        if t.kind is token.kind and (t.tag is None or t.tag == token.name) and t.guard(state, token):
            return t
    return None


# field writers: fields dict, raw text

def _write_title(fields, value):
    fields.setdefault("title", value)

def _write_isbn(fields, value):
    slot = decoders.isbn_slot(value)
    if slot:
        fields[slot] = value

def _writer_for_names(key):
    def write(fields, value):
        fields.setdefault(key, []).extend(decoders.split_names(value))
    return write

def _writer_for_stripped(key):
    def write(fields, value):
        fields[key] = value.strip()
    return write

def _write_published(fields, value):
    fields["published"] = decoders.parse_published(value)

def _write_list_price(fields, value):
    fields["list_price"] = decoders.parse_price(value)


FIELD_WRITERS: Dict[InfoField, Callable[[dict, str], None]] = {
    InfoField.TITLE: _write_title,
    InfoField.FIRST_ISBN: _write_isbn,
    InfoField.SECOND_ISBN: _write_isbn,
    InfoField.AUTHORS: _writer_for_names("authors"),
    InfoField.EDITION: _writer_for_stripped("edition"),
    InfoField.BINDING: _writer_for_stripped("binding"),
    InfoField.PUBLISHERS: _writer_for_names("publishers"),
    InfoField.PUBLISHED: _write_published,
    InfoField.LIST_PRICE: _write_list_price,
}

CoverLoader = Callable[[str], Optional[Image.Image]]


class InfoExtractor:
    """Scans tokens up to the end of the info panel, collecting record fields."""

    def __init__(self, cover_loader: Optional[CoverLoader] = None):
        self.cover_loader = cover_loader
        self.state = InfoState()
        self.fields = {}

    @property
    def closed(self) -> bool:
        return self.state.phase is Phase.CLOSED

    def feed(self, token: Token) -> bool:
        """Apply one token. Returns True once the panel has closed."""
        transition = match_transition(self.state, token)
        if transition is not None:
            getattr(self, "_" + transition.action)(token)
        return self.closed

    def run(self, tokens: Iterator[Token]) -> dict:
        """Consume tokens until the panel closes and return the collected fields.

        Tokens after the closing paragraph are left in the iterator.
        """
        for token in tokens:
            if self.feed(token):
                return self.fields
        if self.state.phase is Phase.SEEKING:
            raise StructureNotFound("book info panel not found")
        raise StructureNotFound("document ended inside the book info panel")

    def _enter(self, token):
        if self.state.phase is Phase.SEEKING:
            logger.debug("Entered book info panel")
        self.state.phase = Phase.READING

    def _arm(self, token):
        self.state.armed = True

    def _advance(self, token):
        self.state.position += 1
        self.state.armed = False

    def _close(self, token):
        logger.debug("Book info panel closed at field position %d", self.state.position)
        self.state.phase = Phase.CLOSED

    def _consume(self, token):
        field = self.state.field
        if field is not None:
            FIELD_WRITERS[field](self.fields, token.text)
        self.state.armed = False

    def _cover(self, token):
        if "cover" in self.fields or self.cover_loader is None:
            return
        src = token.attr("src")
        try:
            image = self.cover_loader(src)
        except BookSearchError as e:
            logger.warning("Could not load cover %s: %s", src, e)
            self.fields["cover_error"] = str(e)
            return
        if image is not None:
            self.fields["cover"] = image
            self.fields["cover_url"] = src
            self.fields.pop("cover_error", None)
