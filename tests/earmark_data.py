"""Sample earmark rows and a throwaway SQLite database for tests."""

import os
import tempfile
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from src.database.connection import DatabaseConnection
from src.database.models import Base, Earmark

SAMPLE_EARMARKS: List[Dict[str, Any]] = [
    {
        "year": 2022,
        "member": "Menendez",
        "recipient": "Newark Community Health Center",
        "amount": 1_500_000,
        "agency": "Health and Human Services",
        "subcommittee": "Labor, Health and Human Services, Education",
        "account": "Health Resources and Services Administration",
        "budget_function": "Health",
        "location": "Newark, NJ",
    },
    {
        "year": 2022,
        "member": "Booker",
        "recipient": "Camden County College Workforce Training",
        "amount": 750_000,
        "agency": "Labor",
        "subcommittee": "Labor, Health and Human Services, Education",
        "account": "Employment and Training Administration",
        "budget_function": "Education, Training, Employment",
        "location": "Camden, NJ",
    },
    {
        "year": 2022,
        "member": "Padilla",
        "recipient": "Fresno Unified School District STEM Program",
        "amount": 2_000_000,
        "agency": "Education",
        "subcommittee": "Labor, Health and Human Services, Education",
        "account": "Innovation and Improvement",
        "budget_function": "Education",
        "location": "Fresno, CA",
    },
    {
        "year": 2023,
        "member": "Feinstein",
        "recipient": "Los Angeles Metro Bus Electrification",
        "amount": 5_000_000,
        "agency": "Transportation",
        "subcommittee": "Transportation, Housing and Urban Development",
        "account": "Transit Infrastructure Grants",
        "budget_function": "Transportation",
        "location": "Los Angeles, CA",
    },
    {
        "year": 2023,
        "member": "Padilla",
        "recipient": "Sacramento Climate Resilience Center",
        "amount": 80_000,
        "agency": "Housing and Urban Development",
        "subcommittee": "Transportation, Housing and Urban Development",
        "account": "Economic Development Initiatives",
        "budget_function": "Community and Regional Development",
        "location": "Sacramento, CA",
    },
    {
        "year": 2023,
        "member": "Brown",
        "recipient": "Cleveland Rural Broadband Expansion",
        "amount": 300_000,
        "agency": "Agriculture",
        "subcommittee": "Agriculture",
        "account": "Distance Learning and Telemedicine",
        "budget_function": "Agriculture",
        "location": "Cleveland, OH",
    },
]


def sample_rows() -> List[Dict[str, Any]]:
    """Copies of the sample rows with ids, shaped like Earmark.to_dict()."""
    return [dict(row, id=i) for i, row in enumerate(SAMPLE_EARMARKS, start=1)]


def make_database(seed: bool = True) -> DatabaseConnection:
    """A fresh SQLite database file, optionally seeded with SAMPLE_EARMARKS."""
    fd, path = tempfile.mkstemp(suffix=".db", prefix="earmarks-")
    os.close(fd)

    db = DatabaseConnection(f"sqlite:///{path}")
    if seed:
        Base.metadata.create_all(db.engine)
        with Session(db.engine) as session:
            session.add_all([Earmark(**row) for row in SAMPLE_EARMARKS])
            session.commit()
    return db
