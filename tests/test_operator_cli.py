from __future__ import annotations

import json

from bootstrap_guard.core.authorization import decode_hook_data, recover_signer, token_fingerprint
from bootstrap_guard.agents.token_signer import authorizer_address
from bootstrap_guard.state.caps import MarketCapConfig, decode_cap_config


def test_encode_config_prints_decodable_blob(capsys) -> None:
    from tools.bootstrap_guard_cli import main

    assert main(["encode-config", "--enabled", "--per-account", "100", "--per-trade", "25"]) == 0
    out = capsys.readouterr().out.strip()
    assert decode_cap_config(bytes.fromhex(out[2:])) == MarketCapConfig(
        enabled=True, per_account_cap=100, per_trade_cap=25
    )


def test_quote_clamps_to_remaining_supply(capsys) -> None:
    from tools.bootstrap_guard_cli import main

    assert main(["quote", "--tick", "0", "--spend", "80", "--remaining", "50"]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["quote"] == 80
    assert report["estimate"] == 50
    assert report["sqrt_price_x96"] == 1 << 96


def test_quote_rejects_non_positive_spend(capsys) -> None:
    from tools.bootstrap_guard_cli import main

    assert main(["quote", "--tick", "0", "--spend", "0"]) == 2


def test_sign_prints_hook_data(capsys) -> None:
    from tools.bootstrap_guard_cli import main

    key = "0x" + "01" * 32
    origin = "0x" + "77" * 20
    assert main(["sign", "--privkey", key, "--origin", origin, "--deadline", "1000"]) == 0
    token = decode_hook_data(bytes.fromhex(capsys.readouterr().out.strip()[2:]))
    assert token.deadline == 1000
    assert recover_signer(token_fingerprint(origin, 1000), token.signature) == authorizer_address(key)


def test_inspect_deployment_reports_errors(tmp_path, capsys) -> None:
    from tools.bootstrap_guard_cli import main

    path = tmp_path / "bad.yaml"
    path.write_text('verifier: "0x1234"\n', encoding="utf-8")
    assert main(["inspect-deployment", str(path)]) == 1
    assert "error:" in capsys.readouterr().err
