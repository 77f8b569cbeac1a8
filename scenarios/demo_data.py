"""
Demo Data
=========

The reference cast used by the CLI demo and the scenario runner:

- Aruana, a Software Engineering student (BASIC)
- Dr. Maksat, a Computer Science lecturer (ADVANCED)
- Daniyar, a security staff member (FULL)
- The main building, a seminar room and the AI Lab
"""

from dataclasses import dataclass
from typing import List

from models.entities import (
    Building, Facility, FacilityKind, Laboratory, Lecturer,
    Person, Role, Room, Staff, Student
)
from core.access_manager import AccessManager


@dataclass(frozen=True)
class DemoCast:
    student: Student
    lecturer: Lecturer
    staff: Staff
    building: Building
    room: Room
    lab: Laboratory


def build_demo_cast() -> DemoCast:
    """Create a fresh set of demo people and facilities."""
    return DemoCast(
        student=Student(name="Aruana", student_id="S123", major="Software Engineering"),
        lecturer=Lecturer(name="Dr. Maksat", department="Computer Science"),
        staff=Staff(name="Daniyar", position="Security"),
        building=Building("Main Building"),
        room=Room("Seminar Room 204"),
        lab=Laboratory("AI Lab")
    )


def make_person(role: str) -> Person:
    """
    Build the demo person for a role name (student, lecturer, staff).

    Raises:
        ValueError: If the role name is unknown
    """
    try:
        role_tag = Role[role.upper()]
    except KeyError:
        raise ValueError(f"Unknown role: {role}. Must be one of: {', '.join(r.name.lower() for r in Role)}")

    cast = build_demo_cast()
    return {
        Role.STUDENT: cast.student,
        Role.LECTURER: cast.lecturer,
        Role.STAFF: cast.staff
    }[role_tag]


def make_facility(kind: str) -> Facility:
    """
    Build the demo facility for a kind name (building, room, laboratory).

    Raises:
        ValueError: If the facility kind is unknown
    """
    try:
        kind_tag = FacilityKind[kind.upper()]
    except KeyError:
        raise ValueError(
            f"Unknown facility kind: {kind}. Must be one of: {', '.join(k.name.lower() for k in FacilityKind)}"
        )

    cast = build_demo_cast()
    return {
        FacilityKind.BUILDING: cast.building,
        FacilityKind.ROOM: cast.room,
        FacilityKind.LABORATORY: cast.lab
    }[kind_tag]


def run_demo_sequence(manager: AccessManager, cast: DemoCast) -> List[bool]:
    """
    Walk through the reference sequence of calls.

    Returns:
        Results of the request_access calls, in order
    """
    results = [
        manager.request_access(cast.student, cast.building),   # true
        manager.request_access(cast.student, cast.lab),        # false
    ]

    manager.grant_access(cast.student, cast.lab)
    results.append(manager.request_access(cast.student, cast.lab))       # true

    results.append(manager.request_access(cast.lecturer, cast.lab))      # true
    results.append(manager.request_access(cast.staff, cast.lab))         # true

    manager.revoke_access(cast.student, cast.lab)
    results.append(manager.request_access(cast.student, cast.lab))       # false

    return results
