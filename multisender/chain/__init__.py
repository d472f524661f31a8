"""In-memory host chain: ledger state, contracts and call semantics."""

from multisender.chain.contract import Contract, Msg, external
from multisender.chain.ledger import Ledger, LogEntry

__all__ = ["Contract", "Ledger", "LogEntry", "Msg", "external"]
