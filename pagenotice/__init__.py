"""
PageNotice — per-page, per-namespace and site-wide notices for wiki pages.
"""

from pagenotice._version import __version__

__all__ = ["__version__"]
