from enum import Enum
from typing import Iterator, NamedTuple, Optional, Tuple, Union
from bs4 import BeautifulSoup, NavigableString, Tag


class TokenKind(Enum):
    START_TAG = "start"
    END_TAG = "end"
    SELF_CLOSING_TAG = "self_closing"
    TEXT = "text"


class Token(NamedTuple):
    kind: TokenKind
    name: Optional[str] = None
    attrs: Tuple[Tuple[str, str], ...] = ()
    text: str = ""

    def attr(self, key: str) -> Optional[str]:
        for k, v in self.attrs:
            if k == key:
                return v
        return None


def start(name, **attrs) -> Token:
    return Token(TokenKind.START_TAG, name, tuple(attrs.items()))

def end(name) -> Token:
    return Token(TokenKind.END_TAG, name)

def void(name, **attrs) -> Token:
    return Token(TokenKind.SELF_CLOSING_TAG, name, tuple(attrs.items()))

def text(value: str) -> Token:
    return Token(TokenKind.TEXT, text=value)


def _walk(node: Tag) -> Iterator[Token]:
    for child in node.children:
        if isinstance(child, Tag):
            attrs = tuple((k, v) for k, v in child.attrs.items())
            if child.is_empty_element:
                yield Token(TokenKind.SELF_CLOSING_TAG, child.name, attrs)
                continue
            yield Token(TokenKind.START_TAG, child.name, attrs)
            yield from _walk(child)
            yield Token(TokenKind.END_TAG, child.name)
        # Comment, Doctype, Script and friends are NavigableString subclasses
        elif type(child) is NavigableString:
            yield Token(TokenKind.TEXT, text=str(child))


def tokenize(markup: Union[str, bytes]) -> Iterator[Token]:
    """Yield the document's tokens in order.

    Void elements such as ``<img>`` come out as self-closing tags whether or
    not the source wrote the trailing slash. Attribute values are plain
    strings, so ``class`` stays space separated as written.
    """
    soup = BeautifulSoup(markup, "lxml", multi_valued_attributes=None)
    yield from _walk(soup)
