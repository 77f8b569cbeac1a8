"""
Access Policies
===============

A policy decides the base allow/deny verdict for a person at a facility.
AccessManager only talks to the AccessPolicy interface, so alternative
rules (time-based, role-based, quota-based) can be dropped in without
touching it.
"""

from abc import ABC, abstractmethod

from models.entities import Facility, Person, satisfies


class AccessPolicy(ABC):
    """Base verdict for a (person, facility) pair."""

    @abstractmethod
    def can_access(self, person: Person, facility: Facility) -> bool:
        """
        Decide whether the person may enter the facility.

        Implementations must be pure: no side effects, same answer for
        the same inputs.
        """


class DefaultAccessPolicy(AccessPolicy):
    """Permit when the person's access level meets the facility's requirement."""

    def can_access(self, person: Person, facility: Facility) -> bool:
        return satisfies(person.get_access_level(), facility.required_level())
