"""
Access Manager
==============

Combines a base policy with explicit grants:

    allowed = policy.can_access(person, facility) OR (person.id, facility.id) in grants

Grants are additive only. There is no explicit deny: revoking a grant
removes a previously added exception and never blocks access the policy
allows on its own.

Not thread-safe. Callers sharing a manager between threads
must serialize grant_access, revoke_access and request_access themselves.
"""

from typing import FrozenSet, Set, Tuple

from models.entities import AuditAction, Facility, Person
from .audit import AccessEvent, AccessLogger
from .policy import AccessPolicy


class AccessManager:
    """
    Orchestrates access decisions for people and facilities.

    Holds only (person_id, facility_id) pairs, never the objects, so
    people and facilities can come and go independently of the manager.
    Every operation produces exactly one audit line.
    """

    def __init__(self, policy: AccessPolicy, logger: AccessLogger):
        """
        Initialize the manager.

        Args:
            policy: Base decision rule
            logger: Audit sink
        """
        self._policy = policy
        self._logger = logger
        self._granted: Set[Tuple[str, str]] = set()

    @property
    def policy(self) -> AccessPolicy:
        return self._policy

    @property
    def logger(self) -> AccessLogger:
        return self._logger

    @property
    def grants(self) -> FrozenSet[Tuple[str, str]]:
        """Snapshot of the current explicit grants."""
        return frozenset(self._granted)

    def has_grant(self, person: Person, facility: Facility) -> bool:
        return (person.id, facility.id) in self._granted

    def grant_access(self, person: Person, facility: Facility) -> None:
        """
        Explicitly permit a person at a facility regardless of policy.

        Granting an existing pair changes nothing but is still logged.
        """
        self._granted.add((person.id, facility.id))
        self._logger.record(AccessEvent.of(AuditAction.GRANT, person, facility))

    def revoke_access(self, person: Person, facility: Facility) -> None:
        """
        Remove an explicit grant.

        Revoking a pair that was never granted is a no-op (still logged).
        """
        self._granted.discard((person.id, facility.id))
        self._logger.record(AccessEvent.of(AuditAction.REVOKE, person, facility))

    def request_access(self, person: Person, facility: Facility) -> bool:
        """
        Decide whether a person may enter a facility.

        Args:
            person: Who is asking
            facility: Where they want to go

        Returns:
            True if the policy allows it or an explicit grant exists
        """
        allowed_by_policy = self._policy.can_access(person, facility)
        explicitly_granted = self.has_grant(person, facility)

        result = allowed_by_policy or explicitly_granted
        self._logger.record(AccessEvent.of(AuditAction.REQUEST, person, facility, result))
        return result
