"""mailtmpl - sync email templates between a directory and a template server."""

__version__ = "0.1.0"
