# Campus Access Control - Core Modules
# Policy evaluation, grant overrides and audit sinks

from .policy import AccessPolicy, DefaultAccessPolicy
from .audit import (
    AccessEvent,
    AccessLogger,
    ConsoleAccessLogger,
    MemoryAccessLogger,
    CompositeAccessLogger,
    SqlAuditLogger,
    MonotonicClock
)
from .access_manager import AccessManager

__all__ = [
    'AccessPolicy',
    'DefaultAccessPolicy',
    'AccessEvent',
    'AccessLogger',
    'ConsoleAccessLogger',
    'MemoryAccessLogger',
    'CompositeAccessLogger',
    'SqlAuditLogger',
    'MonotonicClock',
    'AccessManager'
]
