"""Exception types shared across remedy."""

from remedy.exceptions.errors import RemedyError, TemplateRegistrationError

__all__ = ["RemedyError", "TemplateRegistrationError"]
