"""cstfmt: format Python source files through a concrete syntax tree."""

__version__ = "0.1.0"
