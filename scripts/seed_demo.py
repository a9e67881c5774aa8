#!/usr/bin/env python3
"""Seed the world state with a demo issuer, the system entry and patient records."""
from __future__ import annotations

import argparse
import json
import os

from sqlalchemy import create_engine

from carechain.app.config import get_settings
from carechain.app.domain.sign import generate_keypair
from carechain.app.infra.db import get_session, init_db
from carechain.app.infra.stub import LedgerStub
from carechain.app.services.audit import AccessAuditor
from carechain.app.services.chaincode import PatientDoctorChaincode
from carechain.app.services.keys import KeyRegistry

DOCTORS = ["doc1", "doc2", "doc3"]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed DB with demo patient records")
    parser.add_argument("--patients", type=int, default=3)
    parser.add_argument("--config-value", default="demo")
    # issuers keep their first key, so a re-seed needs a fresh id
    parser.add_argument("--issuer-id", default="demo-issuer")
    parser.add_argument(
        "--database-url",
        default=os.getenv("DATABASE_URL", "sqlite:///./carechain.db"),
    )
    return parser.parse_args()


def demo_grants(idx: int) -> str:
    grants = [
        {
            "doctorId": DOCTORS[(idx + offset) % len(DOCTORS)],
            "testId": f"test-{idx}-{offset}",
            "startDate": "2020-01-01",
            "endDate": "2020-12-31",
        }
        for offset in range(2)
    ]
    return json.dumps(grants)


def main() -> int:
    args = parse_args()
    engine = create_engine(args.database_url, future=True)
    init_db(engine, attempts=1)

    auditor = AccessAuditor()
    chaincode = PatientDoctorChaincode.from_settings(get_settings(), auditor=auditor)
    private, public = generate_keypair()

    with get_session(engine) as db:
        KeyRegistry(db).register(args.issuer_id, public.hex())
        patient = {"username": b"demo_patient", "role": b"Patient"}
        # the allow-list deployment only looks at the username
        if get_settings().write_policy == "allowlist":
            patient["username"] = get_settings().privileged_writers[0].encode()
        stub = LedgerStub(db, patient)
        chaincode.invoke(stub, "init", [args.config_value])
        for idx in range(1, args.patients + 1):
            chaincode.invoke(stub, "write", [f"pat-{idx}", demo_grants(idx)])
        auditor.write_to(db)

    print(f"Seeded {args.patients} demo patients.")
    print(f"Issuer {args.issuer_id} private key (hex): {private.hex()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
