"""
In-memory lamport ledger.

Stands in for the host's native transfer capability: balances keyed by
Pubkey, single transfers, and an atomic block that restores every
balance when anything inside it fails.
"""

import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager

from loguru import logger
from solders.pubkey import Pubkey

from allocator.constants import U64_MAX
from distributor.utils.exceptions import ArithmeticOverflowError, InsufficientBalanceError
from distributor.utils.security import mask_address


class Ledger:
    """
    Lamport balances with all-or-nothing transfer blocks.

    Features:
    - Balance queries and funding
    - Transfers with insufficient-balance detection
    - Atomic blocks: snapshot on entry, restore on any exception
    """

    def __init__(self, balances: Mapping[Pubkey, int] | None = None) -> None:
        """
        Initialize ledger.

        Args:
            balances: Initial balances in lamports
        """
        self._balances: dict[Pubkey, int] = {}
        # Non-reentrant: one settlement holds the ledger at a time
        self._lock = threading.Lock()
        for key, lamports in (balances or {}).items():
            self.fund(key, lamports)

    def balance(self, key: Pubkey) -> int:
        """Current balance in lamports (0 for unknown accounts)."""
        return self._balances.get(key, 0)

    def balances(self) -> dict[Pubkey, int]:
        """Copy of all non-empty balances."""
        return {key: value for key, value in self._balances.items() if value}

    def fund(self, key: Pubkey, lamports: int) -> None:
        """
        Credit an account from outside the ledger.

        Raises:
            ValueError: If lamports is negative
            ArithmeticOverflowError: If the balance would exceed u64
        """
        if lamports < 0:
            raise ValueError(f"Cannot fund a negative amount: {lamports}")
        new_balance = self.balance(key) + lamports
        if new_balance > U64_MAX:
            raise ArithmeticOverflowError(
                f"Balance of {mask_address(key)} would exceed u64", amount=new_balance
            )
        self._balances[key] = new_balance

    def transfer(self, source: Pubkey, destination: Pubkey, lamports: int) -> None:
        """
        Move lamports between two accounts.

        A zero amount is a no-op. A transfer to the same account leaves the
        balance unchanged but still requires the source to hold the amount.

        Raises:
            ValueError: If lamports is negative
            InsufficientBalanceError: If the source cannot cover the amount
            ArithmeticOverflowError: If the destination balance would exceed u64
        """
        if lamports < 0:
            raise ValueError(f"Cannot transfer a negative amount: {lamports}")
        if lamports == 0:
            return

        available = self.balance(source)
        if lamports > available:
            raise InsufficientBalanceError(
                f"{mask_address(source)} holds {available} lamports, needs {lamports}",
                required=lamports,
                available=available,
            )
        if source == destination:
            return

        credited = self.balance(destination) + lamports
        if credited > U64_MAX:
            raise ArithmeticOverflowError(
                f"Balance of {mask_address(destination)} would exceed u64", amount=credited
            )

        self._balances[source] = available - lamports
        self._balances[destination] = credited

    @contextmanager
    def atomic(self) -> Iterator["Ledger"]:
        """
        Run a block of transfers as one unit.

        Every balance is restored if the block raises; the exception
        propagates unchanged.
        """
        with self._lock:
            snapshot = dict(self._balances)
            try:
                yield self
            except BaseException:
                self._balances = snapshot
                logger.debug("Ledger block rolled back")
                raise
