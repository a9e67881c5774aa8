#!/usr/bin/env python3
"""CLI for viewing the grants a doctor can see on a patient record."""
from __future__ import annotations

import argparse
import json
import os

from sqlalchemy import create_engine

from carechain.app.config import get_settings
from carechain.app.domain.errors import ChaincodeError
from carechain.app.infra.db import get_session
from carechain.app.infra.stub import LedgerStub
from carechain.app.services.chaincode import PatientDoctorChaincode


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show a patient record as a doctor sees it")
    parser.add_argument("patient_id")
    parser.add_argument("doctor_id")
    parser.add_argument(
        "--database-url",
        default=os.getenv("DATABASE_URL", "sqlite:///./carechain.db"),
    )
    parser.add_argument("--json", action="store_true")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    engine = create_engine(args.database_url, future=True)
    chaincode = PatientDoctorChaincode.from_settings(get_settings())
    try:
        with get_session(engine) as db:
            payload = chaincode.query(
                LedgerStub(db, {"username": args.doctor_id.encode()}), "read", [args.patient_id]
            )
    except ChaincodeError as exc:
        print(f"{type(exc).__name__}: {exc.message}")
        return 1

    grants = json.loads(payload)
    if args.json:
        print(json.dumps(grants, indent=2, ensure_ascii=False))
    else:
        print(f"Patient: {args.patient_id} | Doctor: {args.doctor_id}")
        for grant in grants:
            print(f"  {grant['testId']}: {grant['startDate']} .. {grant['endDate']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
