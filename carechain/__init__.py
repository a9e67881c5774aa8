"""
carechain: a permissioned record-sharing gate over a key-value ledger.

Patients store, under their own id, the list of grants that let a doctor
view one test result over a date range. Doctors read a patient's record
and see only the grants addressed to them.
"""

__all__ = [
    "AccessGrant",
    "PatientRecord",
    "PatientDoctorChaincode",
]

from .app.domain.models import AccessGrant, PatientRecord
from .app.services.chaincode import PatientDoctorChaincode

__version__ = "0.1.0"
