"""linkfmt — convert note links between wikilink and inline markdown syntax."""

__version__ = "0.1.0"
