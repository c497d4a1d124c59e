"""Parse agriledger.yaml configuration."""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from agriledger.catalog import DEFAULT_MAX_DATA_ENTRIES, DEFAULT_UPLOAD_FEE
from agriledger.paths import config_path

KNOWN_KEYS = {
    "max_data_entries",
    "upload_fee",
    "authority_contract",
    "verified_authorities",
    "state_path",
}


@dataclass
class RegistryConfig:
    """Settings used to initialise a registry and its collaborators."""

    max_data_entries: int = DEFAULT_MAX_DATA_ENTRIES
    upload_fee: int = DEFAULT_UPLOAD_FEE
    authority_contract: str | None = None
    verified_authorities: list[str] = field(default_factory=list)
    state_path: str | None = None


def load_config(path: Path | str | None = None) -> RegistryConfig:
    """Read agriledger.yaml.

    A missing file at the default location yields defaults; an explicitly
    given path must exist.

    Args:
        path: Path to the config file. Defaults to the configured location.

    Returns:
        RegistryConfig populated from the file.

    Raises:
        FileNotFoundError: If an explicit path doesn't exist.
        yaml.YAMLError: If the YAML is malformed.
        ValueError: If the document or a value has the wrong shape.
    """
    cfg_path = Path(path) if path else config_path()
    if not cfg_path.is_file():
        if path:
            raise FileNotFoundError(f"Config file not found: {cfg_path}")
        return RegistryConfig()

    with open(cfg_path) as f:
        data = yaml.safe_load(f)

    if data is None:
        return RegistryConfig()
    if not isinstance(data, dict):
        raise ValueError(f"{cfg_path} is not a YAML mapping")

    unknown = set(data) - KNOWN_KEYS
    if unknown:
        warnings.warn(f"{cfg_path}: ignoring unknown keys {', '.join(sorted(unknown))}")

    config = RegistryConfig(
        max_data_entries=data.get("max_data_entries", DEFAULT_MAX_DATA_ENTRIES),
        upload_fee=data.get("upload_fee", DEFAULT_UPLOAD_FEE),
        authority_contract=data.get("authority_contract"),
        verified_authorities=data.get("verified_authorities") or [],
        state_path=data.get("state_path"),
    )

    for name in ("max_data_entries", "upload_fee"):
        value = getattr(config, name)
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise ValueError(f"{cfg_path}: {name} must be a non-negative integer, got {value!r}")

    for name in ("authority_contract", "state_path"):
        value = getattr(config, name)
        if value is not None and not isinstance(value, str):
            raise ValueError(f"{cfg_path}: {name} must be a string, got {value!r}")

    authorities = config.verified_authorities
    if not isinstance(authorities, list) or not all(isinstance(p, str) for p in authorities):
        raise ValueError(
            f"{cfg_path}: verified_authorities must be a list of principals, got {authorities!r}"
        )

    return config
