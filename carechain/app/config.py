"""Runtime configuration read from the environment (and an optional .env file)."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

WRITE_POLICIES = ("role", "allowlist")


def _split_csv(raw: str) -> Tuple[str, ...]:
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///./carechain.db"
    system_key: str = "patientDoctorApp"
    write_policy: str = "role"
    patient_role: str = "Patient"
    privileged_writers: Tuple[str, ...] = ("user_type1_0", "user_type1_1")
    log_level: str = "INFO"
    # issuer registration is closed while unset
    admin_token: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        write_policy = os.getenv("CARECHAIN_WRITE_POLICY", defaults.write_policy).strip().lower()
        if write_policy not in WRITE_POLICIES:
            raise ValueError(
                f"CARECHAIN_WRITE_POLICY must be one of {', '.join(WRITE_POLICIES)}, got {write_policy!r}"
            )
        writers = os.getenv("CARECHAIN_PRIVILEGED_WRITERS")
        return cls(
            database_url=os.getenv("DATABASE_URL", defaults.database_url),
            system_key=os.getenv("CARECHAIN_SYSTEM_KEY", defaults.system_key),
            write_policy=write_policy,
            patient_role=os.getenv("CARECHAIN_PATIENT_ROLE", defaults.patient_role),
            privileged_writers=_split_csv(writers) if writers is not None else defaults.privileged_writers,
            log_level=os.getenv("CARECHAIN_LOG_LEVEL", defaults.log_level).upper(),
            admin_token=os.getenv("CARECHAIN_ADMIN_TOKEN") or None,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
