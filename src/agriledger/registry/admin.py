"""Administrative configuration: authority-contract binding and upload fee."""

from __future__ import annotations

import logging

from agriledger.catalog import BURN_ADDRESS
from agriledger.errors import ErrorKind, Result
from agriledger.registry.state import RegistryState

logger = logging.getLogger(__name__)


def bind_authority_contract(state: RegistryState, principal: str) -> Result:
    """Bind the fee recipient. Allowed exactly once, never to the burn address."""
    if not principal or principal == BURN_ADDRESS:
        return Result.failure(ErrorKind.INVALID_AUTHORITY_CONTRACT)
    if state.authority_contract is not None:
        logger.info(
            "Refused to rebind authority contract %s -> %s",
            state.authority_contract, principal,
        )
        return Result.failure(ErrorKind.INVALID_AUTHORITY_CONTRACT)
    state.authority_contract = principal
    logger.info("Bound authority contract %s", principal)
    return Result.success()


def set_upload_fee(state: RegistryState, new_fee: int) -> Result:
    """Change the per-registration fee once an authority contract is bound.

    Any caller may do this; only the binding is checked.
    """
    if state.authority_contract is None:
        return Result.failure(ErrorKind.AUTHORITY_NOT_VERIFIED)
    if not isinstance(new_fee, int) or isinstance(new_fee, bool) or new_fee < 0:
        return Result.failure(ErrorKind.INVALID_UPDATE_PARAM)
    old_fee = state.upload_fee
    state.upload_fee = new_fee
    logger.info("Upload fee: %d -> %d", old_fee, new_fee)
    return Result.success()
