# Campus Access Control - Models
# Person and facility value types plus the stored audit trail

from .database import Base, engine, get_session, init_db
from .entities import (
    AccessLevel,
    Role,
    Person,
    Student,
    Lecturer,
    Staff,
    FacilityKind,
    Facility,
    Building,
    Room,
    Laboratory,
    AuditAction,
    AuditEvent,
    satisfies
)

__all__ = [
    'Base',
    'engine',
    'get_session',
    'init_db',
    'AccessLevel',
    'Role',
    'Person',
    'Student',
    'Lecturer',
    'Staff',
    'FacilityKind',
    'Facility',
    'Building',
    'Room',
    'Laboratory',
    'AuditAction',
    'AuditEvent',
    'satisfies'
]
