"""
One run, start to finish:

    resolve source -> load -> gate -> (extract ->) render -> write

Failures propagate as ReadabilityError subclasses; the caller reports them.
"""

from typing import BinaryIO, Optional, TextIO

from . import gate, render
from .config import Config
from .errors import Diagnostics
from .extract import extract_article
from .source import load_document, resolve_source


def run(
    config: Config,
    diagnostics: Diagnostics,
    stdin: Optional[BinaryIO] = None,
    stdin_isatty: bool = False,
    stdout: Optional[TextIO] = None,
) -> None:
    source, base_url = resolve_source(
        config.source,
        is_file=config.is_file,
        is_url=config.is_url,
        base=config.base,
        stdin_isatty=stdin_isatty,
    )
    document = load_document(source, base_url, config, diagnostics, stdin=stdin)

    verdict = gate.evaluate(document.html, config, diagnostics)
    article = None
    if verdict is gate.Verdict.ATTEMPT:
        diagnostics.note("Processing...")
        article = extract_article(document)
        verdict = gate.after_extraction(article is not None, config, diagnostics)

    if verdict is gate.Verdict.PASSTHROUGH:
        output = render.render_passthrough(document.html, config)
    else:
        output = render.render_article(article, config)

    render.write_output(output, config.output, stdout=stdout)
