"""Ledger collaborators the registry core calls through narrow interfaces.

The core never implements these itself. It consumes:

- an authority oracle (is this principal a verified submitter?)
- a fee sink (move the upload fee from caller to the authority contract)
- a ledger clock (current ledger height, used for timestamps)

In-process implementations are provided for tests and the CLI.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Protocol

from agriledger.errors import ErrorKind, FeeTransferError, Result

logger = logging.getLogger(__name__)


class AuthorityOracle(Protocol):
    def is_verified_authority(self, principal: str) -> bool: ...


class FeeSink(Protocol):
    def transfer_fee(self, amount: int, sender: str, recipient: str) -> Result: ...


class LedgerClock(Protocol):
    def current_height(self) -> int: ...


class StaticAuthorityOracle:
    """Authority oracle backed by a fixed set of principals."""

    def __init__(self, principals: Iterable[str] = ()):
        self._principals = set(principals)

    def is_verified_authority(self, principal: str) -> bool:
        return principal in self._principals

    def grant(self, principal: str) -> None:
        self._principals.add(principal)

    def revoke(self, principal: str) -> None:
        self._principals.discard(principal)


@dataclass(frozen=True)
class FeeTransfer:
    amount: int
    sender: str
    recipient: str

    def to_dict(self) -> dict:
        return {"amount": self.amount, "sender": self.sender, "recipient": self.recipient}

    @classmethod
    def from_dict(cls, data: dict) -> "FeeTransfer":
        return cls(amount=data["amount"], sender=data["sender"], recipient=data["recipient"])


class RecordingFeeSink:
    """Fee sink that records each transfer instead of moving value.

    Set ``fail_next`` to make the following transfer fail once.
    """

    def __init__(self, transfers: Iterable[FeeTransfer] = ()):
        self.transfers: list[FeeTransfer] = list(transfers)
        self.fail_next = False

    def transfer_fee(self, amount: int, sender: str, recipient: str) -> Result:
        if self.fail_next:
            self.fail_next = False
            logger.warning("Fee transfer of %d from %s to %s refused", amount, sender, recipient)
            return Result.failure(ErrorKind.FEE_TRANSFER_FAILED)
        self.transfers.append(FeeTransfer(amount, sender, recipient))
        return Result.success()


class BlockCounter:
    """Ledger clock that only moves when told to."""

    def __init__(self, height: int = 0):
        self.height = height

    def current_height(self) -> int:
        return self.height

    def advance(self, blocks: int = 1) -> int:
        if blocks < 0:
            raise ValueError(f"Ledger height cannot move backwards (got {blocks})")
        self.height += blocks
        return self.height


def charge_fee(sink: FeeSink, amount: int, sender: str, recipient: str) -> Result:
    """Invoke a fee sink, folding raised FeeTransferError into a failed Result."""
    try:
        outcome = sink.transfer_fee(amount, sender, recipient)
    except FeeTransferError as e:
        logger.warning("Fee transfer raised: %s", e)
        return Result.failure(ErrorKind.FEE_TRANSFER_FAILED)
    if not outcome.ok:
        return Result.failure(ErrorKind.FEE_TRANSFER_FAILED)
    return outcome
