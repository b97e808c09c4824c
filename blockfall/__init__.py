"""A falling-block puzzle game: a display-independent engine, key handling and a pygame front end."""

__version__ = "0.1.0"