#!/usr/bin/env python3
"""
Create an issuer keypair or sign a caller credential for the X-Credential header.

Usage:
    python scripts/issue_credential.py keygen
    python scripts/issue_credential.py sign --issuer-id ca-1 --private-key-hex <hex> \
        --attr username=doc1 --attr role=Doctor
"""
from __future__ import annotations

import argparse
import json

from carechain.app.domain.credential import encode_credential_header, issue_credential
from carechain.app.domain.sign import generate_keypair


def parse_attr(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected name=value, got {raw!r}")
    return name, value


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Issuer keys and caller credentials")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("keygen", help="Print a new Ed25519 issuer keypair as hex")

    sign = sub.add_parser("sign", help="Print an X-Credential header value")
    sign.add_argument("--issuer-id", required=True)
    sign.add_argument("--private-key-hex", required=True)
    sign.add_argument("--attr", type=parse_attr, action="append", default=[], metavar="NAME=VALUE")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    if args.command == "keygen":
        private, public = generate_keypair()
        print(json.dumps({"private_key_hex": private.hex(), "public_key_hex": public.hex()}, indent=2))
        return 0

    credential = issue_credential(bytes.fromhex(args.private_key_hex), args.issuer_id, dict(args.attr))
    print(encode_credential_header(credential))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
