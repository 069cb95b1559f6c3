"""
Database Models - SQLAlchemy mapping of the earmark table.

The earmarks table lives in a hosted Postgres database and is owned by
the data-loading side of the project. This application only reads it.
"""
from typing import Any, Dict

from sqlalchemy import Column, Float, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Earmark(Base):
    """
    One Community Project Funding record.

    `amount` is in dollars. `location` is usually "City, ST".
    """
    __tablename__ = "earmarks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    year = Column(Integer, index=True)
    agency = Column(String(255))
    subunit = Column(String(255))
    subcommittee = Column(String(255))
    account = Column(String(255))
    budget_number = Column(String(64))
    budget_function = Column(String(255))
    recipient = Column(Text)
    amount = Column(Float)
    member = Column(String(255), index=True)
    location = Column(String(255))

    # Text columns searched by free keywords
    KEYWORD_COLUMNS = ("recipient", "subcommittee", "account", "location", "budget_function")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "year": self.year,
            "member": self.member,
            "recipient": self.recipient,
            "amount": float(self.amount) if self.amount is not None else None,
            "agency": self.agency,
            "subunit": self.subunit,
            "subcommittee": self.subcommittee,
            "account": self.account,
            "budget_number": self.budget_number,
            "budget_function": self.budget_function,
            "location": self.location,
        }

    def __repr__(self) -> str:
        return f"<Earmark {self.year} {self.recipient!r} ${self.amount}>"
