"""Tests for authority-contract binding and fee administration."""

from agriledger.catalog import BURN_ADDRESS, DEFAULT_UPLOAD_FEE
from agriledger.errors import ErrorKind
from agriledger.registry.admin import bind_authority_contract, set_upload_fee
from agriledger.registry.state import RegistryState


class TestBindAuthorityContract:
    def test_bind_once(self):
        state = RegistryState()
        assert bind_authority_contract(state, "ST2AUTH").ok
        assert state.authority_contract == "ST2AUTH"

    def test_second_binding_fails(self):
        state = RegistryState()
        bind_authority_contract(state, "ST2AUTH")
        result = bind_authority_contract(state, "ST4OTHER")
        assert result.error == ErrorKind.INVALID_AUTHORITY_CONTRACT
        assert state.authority_contract == "ST2AUTH"

    def test_rebinding_same_principal_fails(self):
        state = RegistryState()
        bind_authority_contract(state, "ST2AUTH")
        assert not bind_authority_contract(state, "ST2AUTH").ok

    def test_burn_address_rejected(self):
        state = RegistryState()
        result = bind_authority_contract(state, BURN_ADDRESS)
        assert result.error == ErrorKind.INVALID_AUTHORITY_CONTRACT
        assert state.authority_contract is None

    def test_burn_address_rejected_after_binding(self):
        state = RegistryState(authority_contract="ST2AUTH")
        assert not bind_authority_contract(state, BURN_ADDRESS).ok
        assert state.authority_contract == "ST2AUTH"

    def test_empty_principal_rejected(self):
        assert not bind_authority_contract(RegistryState(), "").ok


class TestSetUploadFee:
    def test_requires_binding(self):
        state = RegistryState()
        result = set_upload_fee(state, 500)
        assert result.error == ErrorKind.AUTHORITY_NOT_VERIFIED
        assert state.upload_fee == DEFAULT_UPLOAD_FEE

    def test_sets_fee_once_bound(self):
        state = RegistryState(authority_contract="ST2AUTH")
        assert set_upload_fee(state, 500).ok
        assert state.upload_fee == 500

    def test_zero_fee_allowed(self):
        state = RegistryState(authority_contract="ST2AUTH")
        assert set_upload_fee(state, 0).ok

    def test_negative_fee_rejected(self):
        state = RegistryState(authority_contract="ST2AUTH")
        assert set_upload_fee(state, -1).error == ErrorKind.INVALID_UPDATE_PARAM
        assert state.upload_fee == DEFAULT_UPLOAD_FEE
