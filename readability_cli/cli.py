#!/usr/bin/env python3
"""
readable - Firefox Reader Mode in your terminal

Extracts the main article from an HTML page, dropping navigation, ads and
other boilerplate, and prints it as a Reader Mode style HTML page, as
selected properties one per line, or as a JSON object.

Usage:
    # A web page, rendered for Firefox's Reader Mode stylesheet
    readable https://example.com/article

    # A local file, with the URL its relative links should resolve against
    readable page.html --base https://example.com/article

    # Standard input, title and excerpt only
    curl -s https://example.com/article | readable -q -p title excerpt

    # Everything as JSON, into a file
    readable https://example.com/article --json -o article.json

    # Your own stylesheet
    readable https://example.com/article -s custom.css

Exit codes:
    0   success
    64  bad usage
    65  data error (could not or would not extract an article)
    66  input file not found
    68  host not found, or the server answered with an error
    70  the extraction library crashed
    77  permission denied

Requirements:
    - requests: HTTP client for fetching pages
    - chardet: Character encoding detection
    - beautifulsoup4: HTML parsing for metadata and the readerable check
    - readability-lxml: Article isolation
    - lxml-html-clean: HTML sanitization
    - rich: Diagnostics on stderr
"""

import argparse
import os
import platform
import sys
from typing import List, Mapping, Optional

from . import __version__
from .config import Config, ConfidencePolicy, FetchOptions, proxy_from_env
from .errors import Diagnostics, ExitCode, ReadabilityError, UsageError
from .pipeline import run
from .properties import PROPERTY_NAMES

EPILOG = """
The --low-confidence option determines what should be done for documents where
Readability can't tell what the core content is:
   keep    When unsure, don't touch the HTML, output as-is. This is incompatible
           with the --properties and --json options.
   force   Process the document even when unsure (may produce really bad output).
   exit    When unsure, exit with an error.

Default value is "keep".


The --properties option accepts a list of values, separated by spaces. Suitable
values are:
   title          The title of the article.
   html-title     The title of the article, wrapped in an <h1> tag.
   excerpt        Article description, or short excerpt from the content.
   byline         Data about the page's author.
   length         Length of the article in characters.
   dir            Text direction, is either "ltr" for left-to-right or "rtl"
                  for right-to-left.
   text-content   Output the article's main content as plain text.
   html-content   Output the article's main content as an HTML body.

Properties are printed line by line, in the order specified by the user. Only
"text-content" and "html-content" is printed as multiple lines.
"""


class ArgumentParser(argparse.ArgumentParser):
    """argparse with the sysexits usage code instead of 2."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(ExitCode.USAGE, f"{self.prog}: error: {message}\n")

    def parse_args(self, args=None, namespace=None):
        args = super().parse_args(args, namespace)
        # A SOURCE typed after -p lands in the property list; hand it back
        if args.stray_source is not None:
            if args.source is not None:
                self.error(invalid_property(args.stray_source))
            args.source = args.stray_source
        return args


def invalid_property(name: str) -> str:
    choices = ", ".join(PROPERTY_NAMES)
    return f"argument -p/--properties: invalid choice: '{name}' (choose from {choices})"


class PropertiesAction(argparse.Action):
    """Collect property names; accepts the old comma separated form too.

    A single value that is not a property name is kept aside as the SOURCE,
    so `readable -p title page.html` works.
    """

    def __call__(self, parser, namespace, values, option_string=None):
        names = list(getattr(namespace, self.dest, None) or [])
        for value in values:
            if "," not in value and value not in PROPERTY_NAMES:
                if namespace.stray_source is not None:
                    parser.error(invalid_property(value))
                namespace.stray_source = value
                continue
            for name in value.split(","):
                if not name:
                    continue
                if name not in PROPERTY_NAMES:
                    parser.error(invalid_property(name))
                names.append(name)
        setattr(namespace, self.dest, names)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="readable",
        description="Firefox Reader Mode in your terminal: extract the readable content of a web page.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument("source", nargs="?", help="A file, an http(s) URL, or '-' for standard input")
    parser.add_argument("-b", "--base",
                        help="Set the document URL when parsing standard input or a local file (this affects relative links)")
    parser.add_argument("-S", "--insane", action="store_true", help="Don't sanitize HTML")
    parser.add_argument("-K", "--insecure", action="store_true", help="Allow invalid SSL certificates")
    parser.add_argument("-f", "--is-file", action="store_true",
                        help="Interpret SOURCE as a file name rather than a URL")
    parser.add_argument("-U", "--is-url", action="store_true", help=argparse.SUPPRESS)
    parser.add_argument("-j", "--json", action="store_true", help="Output properties as a JSON payload")
    parser.add_argument("-l", "--low-confidence", metavar="MODE",
                        help="What to do if Readability is uncertain about what the core content actually is")
    parser.add_argument("-o", "--output", help="The file to which the result should be output")
    parser.add_argument("-p", "--properties", nargs="+", action=PropertiesAction, metavar="PROPERTY",
                        help="Output specific properties of the parsed article")
    parser.add_argument("-x", "--proxy",
                        help="Use specified proxy (can also use HTTPS_PROXY environment variable)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Don't output extra information to stderr")
    parser.add_argument("-s", "--style",
                        help="Specify .css file for stylesheet. If not specified, HTML will be adapted "
                             "for desktop Firefox's Reader Mode.")
    parser.add_argument("-u", "--url", help=argparse.SUPPRESS)
    parser.add_argument("-A", "--user-agent", help="Set custom user agent string")
    parser.add_argument("-V", "--version", action="store_true", help="Print version")
    parser.set_defaults(stray_source=None)
    return parser


def build_config(args: argparse.Namespace, diagnostics: Diagnostics,
                 environ: Mapping[str, str] = os.environ) -> Config:
    """Turn parsed arguments into the run's Config, printing deprecation notes."""
    policy, deprecated = ConfidencePolicy.parse(args.low_confidence)
    if deprecated:
        diagnostics.warn("Note: no-op option is deprecated, please use 'keep' instead.")
    if args.is_url:
        diagnostics.warn("Note: --is-url option is deprecated.")
    base = args.base
    if args.url:
        diagnostics.warn("Note: --url option is deprecated, please use --base instead.")
        base = args.url

    return Config(
        source=args.source,
        is_file=args.is_file,
        is_url=args.is_url,
        base=base,
        sanitize=not args.insane,
        json=args.json,
        low_confidence=policy,
        output=args.output,
        properties=tuple(args.properties) if args.properties else None,
        quiet=args.quiet,
        style=args.style,
        fetch=FetchOptions(
            proxy=args.proxy or proxy_from_env(environ),
            verify=not args.insecure,
            user_agent=args.user_agent,
        ),
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"readability-cli v{__version__}")
        print(f"Python {platform.python_version()}")
        return ExitCode.OK

    diagnostics = Diagnostics(quiet=args.quiet)
    try:
        config = build_config(args, diagnostics)
        run(
            config,
            diagnostics,
            stdin=sys.stdin.buffer,
            stdin_isatty=sys.stdin.isatty(),
            stdout=sys.stdout,
        )
    except UsageError as exc:
        diagnostics.fail(exc)
        parser.print_usage(sys.stderr)
    except ReadabilityError as exc:
        diagnostics.fail(exc)
    return int(diagnostics.exit_code)


if __name__ == "__main__":
    sys.exit(main())
