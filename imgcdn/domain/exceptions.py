"""
Errors raised while building delivery URLs.
"""

from __future__ import annotations


class ImgCdnError(Exception):
    """Base class for all imgcdn errors."""


class ArgumentError(ImgCdnError, ValueError):
    """Invalid, missing or non-positive operation argument."""


class NotFoundError(ImgCdnError, LookupError):
    """The backing attachment could not be resolved."""


class UnsupportedOperationError(ImgCdnError, NotImplementedError):
    """The operation has no equivalent on the delivery service."""
