"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Test accounts and common amounts
- factories: Token deployment and batch builders
- tokens: Non-standard token and receiver doubles
"""

from tests.helpers.constants import (
    FEE_COLLECTOR,
    INITIAL_NATIVE,
    OUTSIDER,
    OWNER,
    TOKEN_SUPPLY,
    USER1,
    USER2,
    USER3,
    USER_TOKENS,
    USERS,
    recipient,
)
from tests.helpers.factories import deploy_token, make_batch

__all__ = [
    # Constants
    "OWNER",
    "FEE_COLLECTOR",
    "USER1",
    "USER2",
    "USER3",
    "USERS",
    "OUTSIDER",
    "INITIAL_NATIVE",
    "TOKEN_SUPPLY",
    "USER_TOKENS",
    "recipient",
    # Factories
    "deploy_token",
    "make_batch",
]
