"""
Program reference data: programs, statuses, genders and barangays
"""
from enum import Enum
from typing import Dict, List, Tuple


class Program(str, Enum):
    GIP = "GIP"
    TUPAD = "TUPAD"


class Status(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    DEPLOYED = "DEPLOYED"
    COMPLETED = "COMPLETED"
    REJECTED = "REJECTED"
    RESIGNED = "RESIGNED"


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


# Display order used by every report
STATUSES: List[str] = [s.value for s in Status]
GENDERS: List[str] = [g.value for g in Gender]

BARANGAYS: List[str] = [
    "APLAYA",
    "BALIBAGO",
    "CAINGIN",
    "DILA",
    "DITA",
    "DON JOSE",
    "IBABA",
    "KANLURAN",
    "LABAS",
    "MACABLING",
    "MALITLIT",
    "MALUSAK",
    "MARKET AREA",
    "POOC",
    "PULONG SANTA CRUZ",
    "SANTO DOMINGO",
    "SINALHAN",
    "TAGAPO",
]

# Badge classes consumed by the dashboard
STATUS_COLORS: Dict[str, str] = {
    Status.PENDING.value: "bg-yellow-100 text-yellow-800",
    Status.APPROVED.value: "bg-blue-100 text-blue-800",
    Status.DEPLOYED.value: "bg-green-100 text-green-800",
    Status.COMPLETED.value: "bg-pink-100 text-pink-800",
    Status.REJECTED.value: "bg-orange-100 text-orange-800",
    Status.RESIGNED.value: "bg-gray-100 text-gray-800",
}

CODE_PREFIXES: Dict[str, str] = {
    Program.GIP.value: "GIP",
    Program.TUPAD.value: "TPD",
}

# Inclusive age bounds
AGE_LIMITS: Dict[str, Tuple[int, int]] = {
    Program.GIP.value: (18, 29),
    Program.TUPAD.value: (25, 58),
}

PROGRAM_NAMES: Dict[str, str] = {
    Program.GIP.value: "Government Internship Program (GIP)",
    Program.TUPAD.value: "Tulong Panghanapbuhay sa Ating Disadvantaged/Displaced Workers (TUPAD)",
}

TERTIARY_ATTAINMENTS: List[str] = [
    "ALS SECONDARY GRADUATE",
    "TECHNICAL/VOCATIONAL COURSE GRADUATE",
    "COLLEGE UNDERGRADUATE",
    "COLLEGE GRADUATE",
]

DEFAULT_ENCODER = "Administrator"
