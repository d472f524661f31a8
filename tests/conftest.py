"""Pytest configuration and fixtures."""

import pytest

from multisender.chain.ledger import Ledger
from multisender.contracts import MultiSender, MultiSenderFactory, MultiTokenSender
from multisender.tokens.erc20 import ERC20Token
from tests.helpers import FEE_COLLECTOR, INITIAL_NATIVE, OUTSIDER, OWNER, USERS, deploy_token


@pytest.fixture
def ledger() -> Ledger:
    """Fresh ledger with native funds for the owner, collector and users."""
    ledger = Ledger()
    for account in (OWNER, FEE_COLLECTOR, OUTSIDER, *USERS):
        ledger.set_balance(account, INITIAL_NATIVE)
    return ledger


@pytest.fixture
def token(ledger: Ledger) -> ERC20Token:
    """Reference token: 1,000,000 minted to OWNER, 1,000 to each user."""
    return deploy_token(ledger)


@pytest.fixture
def multi_sender(ledger: Ledger) -> MultiSender:
    """MultiSender deployed by OWNER (owner and fee collector)."""
    return ledger.deploy(MultiSender, deployer=OWNER)


@pytest.fixture
def multi_token_sender(ledger: Ledger) -> MultiTokenSender:
    """MultiTokenSender deployed by OWNER."""
    return ledger.deploy(MultiTokenSender, deployer=OWNER)


@pytest.fixture
def factory(ledger: Ledger) -> MultiSenderFactory:
    """MultiSenderFactory deployed by OWNER."""
    return ledger.deploy(MultiSenderFactory, deployer=OWNER)
