"""Customer entity.

Identity is the ``id``; name, email and address are contact details.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ordercore.domain.exceptions import EmptyAddress, InvalidEmail

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


@dataclass(eq=False)
class Customer:
    """Who an order belongs to.

    The email is validated once at construction.  The address may
    change later through ``update_address``; nothing else is mutable.
    """

    id: str
    name: str
    email: str
    address: str

    def __post_init__(self) -> None:
        if not isinstance(self.email, str) or not _EMAIL_RE.fullmatch(self.email):
            raise InvalidEmail(f"Invalid email format: {self.email!r}")

    def update_address(self, new_address: str) -> None:
        if not new_address or not new_address.strip():
            raise EmptyAddress("Address cannot be empty")
        self.address = new_address

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Customer):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
