"""Port for the cash flow ledger."""

from typing import Protocol

from src.domain.models import CashFlow


class CashFlowRepositoryPort(Protocol):
    """Port exposing the append-only cash flow ledger."""

    def list_cash_flows(self) -> list[CashFlow]:
        """Return cash flows, newest first."""

    def add_cash_flow(self, cash_flow: CashFlow) -> int:
        """Insert a cash flow (its id is ignored) and return the new id."""

    def delete_cash_flow(self, cash_flow_id: int) -> bool:
        """Delete a cash flow, returning False when it does not exist."""


__all__ = ["CashFlowRepositoryPort"]
