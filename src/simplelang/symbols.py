"""
SimpleLang Symbol Table
=======================

Every variable lives in a single flat global table. A name receives its
memory address the first time it is seen, whether that is an 'int'
declaration or a plain reference, and keeps it for the rest of the
compilation. Addresses start at DEFAULT_BASE_ADDRESS and grow by one per
new name:

    int a; int b; c = a + b;   ->   a=16, b=17, c=18
"""

import logging
from typing import Iterator, Optional

from simplelang.errors import CapacityError

logger = logging.getLogger(__name__)

DEFAULT_BASE_ADDRESS = 16
DEFAULT_MAX_SYMBOLS = 100


class SymbolTable:
    """
    Maps variable names to memory addresses in first-use order.

    Attributes:
        base_address: Address given to the first variable
        max_symbols: Maximum number of variables, or None for no limit
    """

    def __init__(
        self,
        base_address: int = DEFAULT_BASE_ADDRESS,
        max_symbols: Optional[int] = DEFAULT_MAX_SYMBOLS,
    ):
        self.base_address = base_address
        self.max_symbols = max_symbols
        self._addresses: dict[str, int] = {}
        self._declared: set[str] = set()

    def address_of(self, name: str) -> int:
        """
        Return the address of a variable, allocating one on first use.

        Raises:
            CapacityError: If a new name would exceed max_symbols
        """
        address = self._addresses.get(name)
        if address is not None:
            return address

        if self.max_symbols is not None and len(self._addresses) >= self.max_symbols:
            raise CapacityError("variables", self.max_symbols)

        address = self.base_address + len(self._addresses)
        self._addresses[name] = address
        logger.debug(f"Allocated '{name}' at address {address}")
        return address

    def declare(self, name: str) -> int:
        """Record an 'int' declaration and return the variable's address."""
        self._declared.add(name)
        return self.address_of(name)

    def is_declared(self, name: str) -> bool:
        """True if the name appeared in an 'int' declaration."""
        return name in self._declared

    def lookup(self, name: str) -> Optional[int]:
        """Return the address of a known variable without allocating."""
        return self._addresses.get(name)

    def items(self) -> Iterator[tuple[str, int]]:
        """(name, address) pairs in allocation order."""
        return iter(self._addresses.items())

    def __contains__(self, name: str) -> bool:
        return name in self._addresses

    def __len__(self) -> int:
        return len(self._addresses)
