"""
Deployment configuration for the authorization verifier.

A deployment is described by a small YAML document:

    verifier: "0x..."          # account the verifier is deployed at (market hook)
    execution_engine: "0x..."  # only caller of set_config / notify_trade
    admin: "0x..."             # manages the global trusted-signer set
    native_token: "0x..."      # pairing asset of every bootstrap market
    trusted_signers:           # initial global trusted set (optional)
      - "0x..."

The path can be given explicitly or through the BOOTSTRAP_GUARD_DEPLOYMENT
environment variable.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Tuple

import yaml

from ..state.accounts import Address, canonical_address


DEPLOYMENT_ENV_VAR = "BOOTSTRAP_GUARD_DEPLOYMENT"

_REQUIRED_KEYS = ("verifier", "execution_engine", "admin", "native_token")


@dataclass(frozen=True)
class VerifierConfig:
    address: Address
    execution_engine: Address
    admin: Address
    native_token: Address
    trusted_signers: Tuple[Address, ...] = ()


def _require_mapping(obj: Any, *, name: str) -> Mapping[str, Any]:
    if not isinstance(obj, Mapping):
        raise TypeError(f"{name} must be a mapping")
    return obj


def config_from_mapping(obj: Mapping[str, Any]) -> VerifierConfig:
    """
    Validate a parsed deployment document.

    Raises:
        TypeError: If the document has the wrong shape
        ValueError: If a required key is missing or an account is malformed
    """
    root = _require_mapping(obj, name="deployment")
    unknown = sorted(set(root) - set(_REQUIRED_KEYS) - {"trusted_signers"})
    if unknown:
        raise ValueError(f"unknown deployment keys: {', '.join(unknown)}")
    for key in _REQUIRED_KEYS:
        if key not in root:
            raise ValueError(f"deployment missing required key: {key}")

    raw_signers = root.get("trusted_signers") or []
    if not isinstance(raw_signers, list):
        raise TypeError("trusted_signers must be a list")
    signers = tuple(
        canonical_address(s, name=f"trusted_signers[{i}]") for i, s in enumerate(raw_signers)
    )
    if len(set(signers)) != len(signers):
        raise ValueError("trusted_signers contains duplicates")

    return VerifierConfig(
        address=canonical_address(root["verifier"], name="verifier"),
        execution_engine=canonical_address(root["execution_engine"], name="execution_engine"),
        admin=canonical_address(root["admin"], name="admin"),
        native_token=canonical_address(root["native_token"], name="native_token"),
        trusted_signers=signers,
    )


def load_deployment(path: Path | str) -> VerifierConfig:
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    return config_from_mapping(_require_mapping(obj, name="deployment YAML"))


def deployment_from_env() -> VerifierConfig:
    raw = os.environ.get(DEPLOYMENT_ENV_VAR, "").strip()
    if not raw:
        raise RuntimeError(f"{DEPLOYMENT_ENV_VAR} is not set")
    return load_deployment(raw)


def config_to_mapping(config: VerifierConfig) -> dict[str, Any]:
    return {
        "verifier": config.address,
        "execution_engine": config.execution_engine,
        "admin": config.admin,
        "native_token": config.native_token,
        "trusted_signers": list(config.trusted_signers),
    }
