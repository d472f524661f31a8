"""MultiSenderFactory: deterministic deployment of MultiSender instances.

An instance's address depends only on the factory address, the salt and the
MultiSender creation code. Deploy the factory from the same account at the
same nonce on every chain and each salt yields the same instance address
everywhere.

Deployment is idempotent per salt: the first call creates and records the
instance, later calls return the recorded address.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from multisender.access import Ownable
from multisender.chain.contract import Contract, Msg, external
from multisender.constants import ZERO_ADDRESS
from multisender.contracts.multi_sender import MultiSender
from multisender.create2 import create2_address
from multisender.errors import ValidationError
from multisender.models.events import MultiSenderDeployed
from multisender.models.types import normalize_salt

if TYPE_CHECKING:
    from multisender.chain.ledger import Ledger

logger = structlog.get_logger()


def compute_multi_sender_address(factory: str, salt: str | bytes) -> str:
    """Address at which `factory` deploys the MultiSender for `salt`."""
    return create2_address(factory, salt, MultiSender.init_code_hash())


class MultiSenderFactory(Ownable, Contract):
    """CREATE2 factory for MultiSender.

    Instances are handed to the factory owner: ownership and fee collection
    are transferred right after creation, so the creation code (and with it
    the address) stays independent of who triggers the deployment.
    """

    NAME = "MultiSenderFactory"
    CODE_VERSION = "1.0.0"

    def __init__(self, ledger: Ledger, address: str, *, deployer: str) -> None:
        super().__init__(ledger, address, deployer=deployer)
        self._init_ownable(deployer)
        self._deployed: dict[str, str] = {}

    def compute_multi_sender_address(self, salt: str | bytes) -> str:
        return compute_multi_sender_address(self.address, self._salt(salt))

    def get_deployed_contract(self, salt: str | bytes) -> str:
        """Recorded instance address for salt, or the zero address."""
        return self._deployed.get(self._salt(salt), ZERO_ADDRESS)

    @external
    def deploy_multi_sender(self, msg: Msg, salt: str | bytes) -> str:
        """Deploy (or return the existing) MultiSender for salt."""
        salt = self._salt(salt)
        existing = self._deployed.get(salt)
        if existing is not None:
            logger.debug("multi_sender_already_deployed", salt=salt, address=existing)
            return existing

        instance = self.ledger.deploy_create2(MultiSender, deployer=self.address, salt=salt)
        instance.set_fee_collector(self.owner, caller=self.address)
        instance.transfer_ownership(self.owner, caller=self.address)

        self._deployed[salt] = instance.address
        self.emit(MultiSenderDeployed(salt=salt, address=instance.address))
        logger.info(
            "multi_sender_deployed",
            factory=self.address,
            salt=salt,
            address=instance.address,
            owner=self.owner,
            requested_by=msg.sender,
        )
        return instance.address

    def _salt(self, salt: str | bytes) -> str:
        try:
            return normalize_salt(salt)
        except ValueError as err:
            raise ValidationError(f"{self.NAME}: {err}") from err
