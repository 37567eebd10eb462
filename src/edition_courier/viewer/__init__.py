"""Page acquisition from the page-flip viewer."""

from .fetcher import ExportFetcher
from .navigator import NavigationRetryController
from .sequencer import PageSequencer
from .session import PlaywrightSession, ViewerSession

__all__ = [
    "ExportFetcher",
    "NavigationRetryController",
    "PageSequencer",
    "PlaywrightSession",
    "ViewerSession",
]
