"""BlogMirror - mirror a Blogger blog into a local SQLite database."""

__version__ = "0.1.0"
