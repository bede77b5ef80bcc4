# [TESTER] v1

from __future__ import annotations

import pytest

from bootstrap_guard.integration.deployment import (
    DEPLOYMENT_ENV_VAR,
    VerifierConfig,
    config_from_mapping,
    config_to_mapping,
    deployment_from_env,
    load_deployment,
)
from bootstrap_guard.state.accounts import canonical_address


HOOK = "0x" + "55" * 20
ENGINE = "0x" + "33" * 20
ADMIN = "0x" + "44" * 20
NATIVE = "0x" + "11" * 20
SIGNER = "0x" + "ab" * 20


def _doc(**overrides) -> dict:
    doc = {
        "verifier": HOOK,
        "execution_engine": ENGINE,
        "admin": ADMIN,
        "native_token": NATIVE,
    }
    doc.update(overrides)
    return doc


def test_minimal_document() -> None:
    config = config_from_mapping(_doc())
    assert config == VerifierConfig(address=HOOK, execution_engine=ENGINE, admin=ADMIN, native_token=NATIVE)


def test_trusted_signers_are_canonicalized() -> None:
    config = config_from_mapping(_doc(trusted_signers=[SIGNER]))
    assert config.trusted_signers == (canonical_address(SIGNER),)
    assert config.trusted_signers[0] != SIGNER


def test_duplicate_signers_rejected() -> None:
    with pytest.raises(ValueError):
        config_from_mapping(_doc(trusted_signers=[SIGNER, SIGNER.upper().replace("0X", "0x")]))


@pytest.mark.parametrize("missing", ["verifier", "execution_engine", "admin", "native_token"])
def test_missing_required_key(missing: str) -> None:
    doc = _doc()
    del doc[missing]
    with pytest.raises(ValueError):
        config_from_mapping(doc)


def test_unknown_key_rejected() -> None:
    with pytest.raises(ValueError):
        config_from_mapping(_doc(fee_policy="dynamic"))


def test_malformed_account_rejected() -> None:
    with pytest.raises(ValueError):
        config_from_mapping(_doc(admin="0x1234"))
    with pytest.raises(TypeError):
        config_from_mapping(_doc(trusted_signers=SIGNER))


def test_load_yaml_round_trip(tmp_path) -> None:
    path = tmp_path / "deployment.yaml"
    path.write_text(
        "\n".join(
            [
                f'verifier: "{HOOK}"',
                f'execution_engine: "{ENGINE}"',
                f'admin: "{ADMIN}"',
                f'native_token: "{NATIVE}"',
                "trusted_signers:",
                f'  - "{SIGNER}"',
                "",
            ]
        ),
        encoding="utf-8",
    )
    config = load_deployment(path)
    assert config.address == HOOK
    assert config_from_mapping(config_to_mapping(config)) == config


def test_non_mapping_yaml_rejected(tmp_path) -> None:
    path = tmp_path / "deployment.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_deployment(path)


def test_deployment_from_env(tmp_path, monkeypatch) -> None:
    path = tmp_path / "deployment.yaml"
    path.write_text(
        f'verifier: "{HOOK}"\nexecution_engine: "{ENGINE}"\nadmin: "{ADMIN}"\nnative_token: "{NATIVE}"\n',
        encoding="utf-8",
    )
    monkeypatch.setenv(DEPLOYMENT_ENV_VAR, str(path))
    assert deployment_from_env().admin == ADMIN


def test_deployment_from_env_unset(monkeypatch) -> None:
    monkeypatch.delenv(DEPLOYMENT_ENV_VAR, raising=False)
    with pytest.raises(RuntimeError):
        deployment_from_env()
