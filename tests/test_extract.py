import pytest
from bs4 import BeautifulSoup

from readability_cli import extract
from readability_cli.errors import ExtractionCrash
from readability_cli.extract import (
    extract_article,
    find_byline,
    find_direction,
    first_paragraph,
    read_metadata,
)
from readability_cli.source import LoadedDocument, StandardInput

from tests.conftest import ARTICLE_HTML, EMPTY_HTML, PARAGRAPH


def loaded(html, base_url="https://example.com/news/flood"):
    return LoadedDocument(html, base_url, StandardInput())


def soup(html):
    return BeautifulSoup(html, "html.parser")


def test_extract_article():
    article = extract_article(loaded(ARTICLE_HTML))

    assert article is not None
    assert "The Flood" in article.title
    assert article.byline == "Jane Doe"
    assert article.excerpt == "A spring nobody could remember."
    assert "The river had been rising" in article.text_content
    assert article.length == len(article.text_content)
    assert article.dir is None


def test_links_are_made_absolute():
    article = extract_article(loaded(ARTICLE_HTML))
    assert "https://example.com/archive/1998" in article.content


def test_does_not_touch_the_loaded_document():
    document = loaded(ARTICLE_HTML)
    extract_article(document)
    assert document.html == ARTICLE_HTML


@pytest.mark.parametrize("html", [EMPTY_HTML, ""])
def test_no_article(html):
    assert extract_article(loaded(html)) is None


def test_library_crash_is_not_no_article(monkeypatch):
    class Exploding:
        def __init__(self, *args, **kwargs):
            raise RuntimeError("boom")

    monkeypatch.setattr(extract, "Document", Exploding)
    with pytest.raises(ExtractionCrash, match="boom"):
        extract_article(loaded(ARTICLE_HTML))


def test_excerpt_falls_back_to_first_paragraph():
    html = ARTICLE_HTML.replace('<meta name="description" content="A spring nobody could remember.">', "")
    article = extract_article(loaded(html))
    assert article.excerpt == PARAGRAPH


def test_read_metadata_normalizes_keys():
    metadata = read_metadata(soup(
        '<meta property="og:title" content="OG Title">'
        '<meta name="DC.Title" content="Dublin Core">'
        '<meta name="description" content="">'
        '<meta name="twitter:title" content="first">'
        '<meta name="twitter:title" content="second">'
    ))
    assert metadata["og:title"] == "OG Title"
    assert metadata["dc:title"] == "Dublin Core"
    assert "description" not in metadata
    assert metadata["twitter:title"] == "first"


def test_title_prefers_metadata():
    html = ARTICLE_HTML.replace("<head>", '<head><meta property="og:title" content="Flood waters rise">')
    assert extract_article(loaded(html)).title == "Flood waters rise"


class TestByline:
    def test_meta_author(self):
        page = soup('<meta name="author" content="Jane Doe"><p class="byline">By Someone Else</p>')
        assert find_byline(page, read_metadata(page)) == "Jane Doe"

    def test_url_author_is_ignored(self):
        page = soup('<meta name="author" content="https://social.example/jane"><p>text</p>')
        assert find_byline(page, read_metadata(page)) is None

    def test_byline_class(self):
        page = soup('<div><p class="byline">By Sam Smith</p><p>Body</p></div>')
        assert find_byline(page, {}) == "By Sam Smith"

    def test_rel_author(self):
        page = soup('<p>Posted by <a rel="author" href="/u/sam">Sam</a></p>')
        assert find_byline(page, {}) == "Sam"

    def test_too_long_is_not_a_byline(self):
        page = soup(f'<p class="author-bio">{PARAGRAPH}</p>')
        assert find_byline(page, {}) is None


class TestDirection:
    def test_html_dir(self):
        assert find_direction(soup('<html dir="RTL"><body><p>x</p></body></html>')) == "rtl"

    def test_body_dir(self):
        assert find_direction(soup('<html><body dir="ltr"><p>x</p></body></html>')) == "ltr"

    def test_unknown_dir(self):
        assert find_direction(soup('<html dir="auto"><body></body></html>')) is None


def test_first_paragraph_skips_empty():
    assert first_paragraph(soup("<div><p> </p><p>Second</p></div>")) == "Second"
