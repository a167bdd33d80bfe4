"""Base exception hierarchy for remedy.

Expected "could not fix" outcomes are never raised; they are returned as
structured results. Exceptions are reserved for programmer errors and for
failures inside the AI layer that the fix generator converts to results.
"""

from __future__ import annotations


class RemedyError(Exception):
    """Base exception for all remedy errors."""


class TemplateRegistrationError(RemedyError):
    """A fix template was declared or registered incorrectly.

    Raised for invalid confidence values, missing strategies, duplicate
    template names within a bucket, or registration after the registry
    has been frozen.
    """
