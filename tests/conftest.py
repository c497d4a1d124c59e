"""Shared test fixtures for agriledger."""

import pytest

from agriledger.ledger import BlockCounter, RecordingFeeSink, StaticAuthorityOracle
from agriledger.service import DataRegistry

from sample_data import AUTHORITY, FARMER


@pytest.fixture
def oracle():
    return StaticAuthorityOracle([FARMER])


@pytest.fixture
def sink():
    return RecordingFeeSink()


@pytest.fixture
def clock():
    return BlockCounter()


@pytest.fixture
def registry(oracle, sink, clock):
    """Registry with no authority contract bound."""
    return DataRegistry(oracle=oracle, sink=sink, clock=clock)


@pytest.fixture
def bound_registry(registry):
    """Registry with AUTHORITY bound as fee recipient."""
    assert registry.bind_authority_contract(AUTHORITY).ok
    return registry
