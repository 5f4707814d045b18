"""Use case to list declared accounts."""

from collections.abc import Iterable

from src.domain.models import Account, AccountType, Ledger


class GetAccountsUseCase:
    """List ledger accounts, optionally restricted to some classes."""

    def __init__(self, ledger: Ledger) -> None:
        self._ledger = ledger

    def execute(
        self,
        account_types: Iterable[AccountType] | None = None,
    ) -> list[Account]:
        """Return accounts in declaration order."""
        return self._ledger.accounts_of_type(account_types)


__all__ = ["GetAccountsUseCase", "Account"]
