#!/usr/bin/env python3
"""
Operator CLI for bootstrap-guard deployments.

  sign                 sign an authorization token and print trade hook data
  quote                estimate the scarce-asset fill for an exact spend
  encode-config        print a cap-config blob for set_config
  inspect-deployment   validate and print a deployment YAML
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bootstrap_guard.agents.token_signer import authorizer_address, sign_authorization
from bootstrap_guard.core.authorization import encode_hook_data
from bootstrap_guard.core.tick_math import get_sqrt_price_at_tick, quote_at_tick
from bootstrap_guard.errors import BootstrapGuardError
from bootstrap_guard.integration.deployment import config_to_mapping, load_deployment
from bootstrap_guard.state.caps import MarketCapConfig, encode_cap_config


logger = logging.getLogger("bootstrap_guard.cli")


def _cmd_sign(args: argparse.Namespace) -> int:
    token = sign_authorization(args.privkey, args.origin, args.deadline)
    hook_data = encode_hook_data(token, referrer=args.referrer)
    logger.info("signed by %s for %s until %d", authorizer_address(args.privkey), args.origin, args.deadline)
    print("0x" + hook_data.hex())
    return 0


def _cmd_quote(args: argparse.Namespace) -> int:
    if args.spend <= 0:
        print("--spend must be positive", file=sys.stderr)
        return 2
    raw = quote_at_tick(args.tick, args.spend, args.native_first)
    estimate = raw if args.remaining is None else min(raw, args.remaining)
    print(
        json.dumps(
            {
                "tick": args.tick,
                "sqrt_price_x96": get_sqrt_price_at_tick(args.tick),
                "spend": args.spend,
                "quote": raw,
                "estimate": estimate,
            },
            sort_keys=True,
        )
    )
    return 0


def _cmd_encode_config(args: argparse.Namespace) -> int:
    blob = encode_cap_config(
        MarketCapConfig(
            enabled=args.enabled,
            per_account_cap=args.per_account,
            per_trade_cap=args.per_trade,
        )
    )
    print("0x" + blob.hex())
    return 0


def _cmd_inspect(args: argparse.Namespace) -> int:
    config = load_deployment(args.path)
    print(json.dumps(config_to_mapping(config), indent=2, sort_keys=True))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bootstrap guard operator tools")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")
    sub = parser.add_subparsers(dest="command", required=True)

    p_sign = sub.add_parser("sign", help="Sign an authorization token")
    p_sign.add_argument("--privkey", required=True, help="Authorizer secp256k1 key (32-byte hex)")
    p_sign.add_argument("--origin", required=True, help="Initiating account to authorize")
    p_sign.add_argument("--deadline", type=int, required=True, help="Unix timestamp (inclusive)")
    p_sign.add_argument("--referrer", default=None, help="Optional referrer account")
    p_sign.set_defaults(func=_cmd_sign)

    p_quote = sub.add_parser("quote", help="Estimate scarce-asset fill for an exact spend")
    p_quote.add_argument("--tick", type=int, required=True, help="Bootstrap starting tick")
    p_quote.add_argument("--spend", type=int, required=True, help="Pairing-asset amount spent")
    p_quote.add_argument("--remaining", type=int, default=None, help="Remaining bootstrap supply")
    order = p_quote.add_mutually_exclusive_group()
    order.add_argument("--native-first", dest="native_first", action="store_true", default=True)
    order.add_argument("--native-second", dest="native_first", action="store_false")
    p_quote.set_defaults(func=_cmd_quote)

    p_cfg = sub.add_parser("encode-config", help="Encode a cap-config blob")
    p_cfg.add_argument("--enabled", action="store_true")
    p_cfg.add_argument("--per-account", type=int, default=0)
    p_cfg.add_argument("--per-trade", type=int, default=0)
    p_cfg.set_defaults(func=_cmd_encode_config)

    p_dep = sub.add_parser("inspect-deployment", help="Validate a deployment YAML")
    p_dep.add_argument("path", type=Path)
    p_dep.set_defaults(func=_cmd_inspect)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.WARNING))
    try:
        return int(args.func(args))
    except (BootstrapGuardError, ValueError, TypeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
