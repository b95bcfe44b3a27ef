import io

import pytest

from readability_cli.config import Config
from readability_cli.errors import Diagnostics
from readability_cli.extract import Article

PARAGRAPH = (
    "The river had been rising for three days before anyone in the village thought to move "
    "the grain out of the low barns, and by then the water was already lapping at the doors. "
    "Nobody could remember a spring like it."
)

ARTICLE_HTML = f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>The Flood | Village Gazette</title>
  <meta name="author" content="Jane Doe">
  <meta name="description" content="A spring nobody could remember.">
</head>
<body>
  <nav class="menu"><a href="/">Home</a> <a href="/about">About</a></nav>
  <article>
    <h1>The Flood</h1>
    <p>{PARAGRAPH}</p>
    <p>{PARAGRAPH} <a href="/archive/1998">Read the 1998 report.</a></p>
    <p>{PARAGRAPH}</p>
    <p>{PARAGRAPH}</p>
  </article>
  <script>alert("tracking")</script>
  <footer class="footer">Copyright</footer>
</body>
</html>
"""

SHORT_HTML = """<html><head><title>Links</title><script>alert(1)</script></head>
<body><ul><li><a href="/a">A</a></li><li><a href="/b">B</a></li></ul></body></html>
"""

EMPTY_HTML = "<html><head><title>Nothing</title></head><body></body></html>"


def stdin_with(data: str):
    return io.TextIOWrapper(io.BytesIO(data.encode("utf-8")), encoding="utf-8")


@pytest.fixture
def diagnostics():
    return Diagnostics()


@pytest.fixture
def quiet():
    return Diagnostics(quiet=True)


@pytest.fixture
def article():
    return Article(
        title="A Tale\nof Two Lines",
        byline="Jane <Doe>",
        excerpt="First line\n\nsecond line",
        content='<div><p>Hello <b>world</b></p><script>alert(1)</script></div>',
        text_content="Hello world\n\nMore text",
        length=22,
        dir="ltr",
    )


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def article_file(tmp_path):
    path = tmp_path / "article.html"
    path.write_text(ARTICLE_HTML, encoding="utf-8")
    return path
