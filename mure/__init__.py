"""mure: keep a local fleet of cloned repositories in sync with upstream."""

__version__ = "0.3.0"
