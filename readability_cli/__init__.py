"""Firefox Reader Mode in your terminal: pull the readable article out of any HTML page."""

__version__ = "1.0.0"

from .config import Config, ConfidencePolicy, FetchOptions
from .extract import Article
from .pipeline import run

__all__ = ["Article", "Config", "ConfidencePolicy", "FetchOptions", "run", "__version__"]
