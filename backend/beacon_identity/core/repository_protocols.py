"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - "Not found" is None, never an exception; any other failure raises
      RepositoryError / CacheError

Design Decisions:
    - Protocol over ABC: structural subtyping, in-memory test doubles need no base class
    - Async in Protocol: implementations do IO; the orchestrator awaits them
"""

from typing import Protocol

from beacon_identity.core.customer_identity import CustomerIdentity
from beacon_identity.core.entities import BeaconDevice, Customer


class CustomerRepository(Protocol):
    """Contract for customer persistence — implemented by shell."""
    async def find_by_id(self, customer_id: str) -> Customer | None: ...
    async def save(self, customer: Customer) -> None: ...


class BeaconRepository(Protocol):
    """Contract for beacon lookup — implemented by shell."""
    async def find_by_uuid(self, uuid: str) -> BeaconDevice | None: ...


class IdentityCache(Protocol):
    """Contract for the resolved-identity cache (fixed 1-hour entry lifetime)."""
    async def put(self, identity: CustomerIdentity) -> None: ...
    async def get(self, customer_id: str) -> CustomerIdentity | None: ...
