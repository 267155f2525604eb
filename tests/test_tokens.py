from booksearch.tokens import Token, TokenKind, tokenize, start, end, void, text


def test_tokenize_sample_html():
    sample = """<!DOCTYPE html>
    <html><body><div class="bookinfo clearfix"><img src="/c.jpg" alt="cover"><p>hi<!-- note --></p><script>var x = 1;</script></div></body></html>
    """
    toks = list(tokenize(sample))
    first = toks.index(start("div", **{"class": "bookinfo clearfix"}))
    assert toks[first:first + 7] == [
        start("div", **{"class": "bookinfo clearfix"}),
        void("img", src="/c.jpg", alt="cover"),
        start("p"),
        text("hi"),
        end("p"),
        start("script"),
        end("script"),
    ]
    assert all(t.kind is not TokenKind.TEXT or "note" not in t.text for t in toks)


def test_tokenize_bytes_is_lazy():
    toks = tokenize(b"<p id='a'>one</p><p>two</p>")
    assert next(toks).name == "html"
    rest = list(toks)
    assert text("two") in rest
    assert Token(TokenKind.START_TAG, "p", (("id", "a"),)) in rest


def test_attr_lookup():
    tok = void("img", src="x.png", alt="Amazon")
    assert tok.attr("alt") == "Amazon"
    assert tok.attr("title") is None
