"""
Entity Models for Campus Access Control
=======================================

Value types for the access decision model:

- AccessLevel: Ordered rank a person holds (BASIC < ADVANCED < FULL)
- Role: Informational tag carried by every person
- Person variants: Student, Lecturer, Staff
- Facility variants: Building, Room, Laboratory

Plus the single persisted table, AuditEvent, which stores the audit
trail written by the SQL audit sink. Grants are never stored.
"""

import enum
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, Enum as SQLEnum

from .database import Base


def new_id() -> str:
    """Generate a fresh identity for a person or facility."""
    return str(uuid.uuid4())


class AccessLevel(enum.Enum):
    """
    Access levels a person can hold, compared by rank.

    BASIC is satisfied by any level, FULL only by FULL.
    """
    BASIC = 0
    ADVANCED = 1
    FULL = 2

    @property
    def rank(self) -> int:
        return self.value

    def satisfies(self, need: "AccessLevel") -> bool:
        """True if this level meets or exceeds the required level."""
        return self.rank >= need.rank


def satisfies(have: AccessLevel, need: AccessLevel) -> bool:
    return have.satisfies(need)


class Role(enum.Enum):
    """Role tag stored on a person. Not consulted by access decisions."""
    STUDENT = "STUDENT"
    LECTURER = "LECTURER"
    STAFF = "STAFF"


# ============================================================================
# People
# ============================================================================

@dataclass(frozen=True)
class Person:
    """
    Someone requesting access to a facility.

    Each variant fixes its role and access level at the class level;
    instances are immutable and carry a unique id generated at
    construction unless one is supplied. Person itself cannot be
    instantiated, only its variants.
    """
    name: str
    id: str = field(default_factory=new_id, kw_only=True)

    role: ClassVar[Role]
    access_level: ClassVar[AccessLevel]

    def __post_init__(self):
        if type(self) is Person:
            raise TypeError("Person is abstract; create a Student, Lecturer or Staff")

    def get_access_level(self) -> AccessLevel:
        return self.access_level

    def describe(self) -> str:
        return f"{self.name} ({self.role.name})"


@dataclass(frozen=True)
class Student(Person):
    student_id: str
    major: str

    role: ClassVar[Role] = Role.STUDENT
    access_level: ClassVar[AccessLevel] = AccessLevel.BASIC

    def describe(self) -> str:
        return f"Student {self.name}, major={self.major}"


@dataclass(frozen=True)
class Lecturer(Person):
    department: str

    role: ClassVar[Role] = Role.LECTURER
    access_level: ClassVar[AccessLevel] = AccessLevel.ADVANCED

    def describe(self) -> str:
        return f"Lecturer {self.name}, dept={self.department}"


@dataclass(frozen=True)
class Staff(Person):
    position: str

    role: ClassVar[Role] = Role.STAFF
    access_level: ClassVar[AccessLevel] = AccessLevel.FULL

    def describe(self) -> str:
        return f"Staff {self.name}, position={self.position}"


# ============================================================================
# Facilities
# ============================================================================

class FacilityKind(enum.Enum):
    """Facility types and the access level each one requires."""
    BUILDING = "BUILDING"
    ROOM = "ROOM"
    LABORATORY = "LABORATORY"

    @property
    def required_level(self) -> AccessLevel:
        return REQUIRED_ACCESS_LEVELS[self]


REQUIRED_ACCESS_LEVELS = {
    FacilityKind.BUILDING: AccessLevel.BASIC,
    FacilityKind.ROOM: AccessLevel.BASIC,
    FacilityKind.LABORATORY: AccessLevel.ADVANCED,
}


@dataclass(frozen=True)
class Facility:
    """
    A place guarded by a required access level.

    Variants differ only in their kind; the required level is looked up
    from the kind rather than overridden per class.
    """
    name: str
    kind: FacilityKind
    id: str = field(default_factory=new_id, kw_only=True)

    def required_level(self) -> AccessLevel:
        return self.kind.required_level

    def info(self) -> str:
        return f"Facility: {self.name}"


@dataclass(frozen=True)
class Building(Facility):
    kind: FacilityKind = field(default=FacilityKind.BUILDING, init=False)


@dataclass(frozen=True)
class Room(Facility):
    kind: FacilityKind = field(default=FacilityKind.ROOM, init=False)


@dataclass(frozen=True)
class Laboratory(Facility):
    kind: FacilityKind = field(default=FacilityKind.LABORATORY, init=False)


# ============================================================================
# Audit Trail
# ============================================================================

class AuditAction(enum.Enum):
    """Operations that produce an audit line."""
    GRANT = "GRANT"
    REVOKE = "REVOKE"
    REQUEST = "REQUEST"


class AuditEvent(Base):
    """
    One stored line of the access audit trail.

    Person and facility are kept as identity plus a denormalized label,
    never as references, so the trail outlives the objects it mentions.
    """
    __tablename__ = 'audit_events'

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp = Column(DateTime, default=datetime.now, index=True)

    # Action, person and facility are empty for free-form lines
    action = Column(SQLEnum(AuditAction))

    # Who
    person_id = Column(String(36), index=True)
    person_description = Column(String(255))

    # Where
    facility_id = Column(String(36), index=True)
    facility_name = Column(String(255))

    # Only set for REQUEST events
    result = Column(Boolean)

    message = Column(Text, nullable=False)

    def __repr__(self):
        return f"<AuditEvent(id={self.id}, action={self.action}, result={self.result})>"
