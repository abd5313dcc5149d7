"""Shared domain utilities.

This package is domain-accessible and should not depend on infrastructure code.
"""

from .account_client_protocol import AccountClientProtocol

__all__ = ["AccountClientProtocol"]
