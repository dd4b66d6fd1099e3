"""Remote template store client."""

from .api import ServerAuth, TemplatesClient

__all__ = ["ServerAuth", "TemplatesClient"]
