from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import PayRequestType, RequestStatus
from .model import PayRequest


class PayRequestRepository(Protocol):
    def create(
        self,
        *,
        employee_id: int,
        employee_name: str,
        amount: float,
        purpose: str,
        description: Optional[str],
        request_type: PayRequestType,
    ) -> int:
        raise NotImplementedError

    def get(self, request_id: int) -> Optional[PayRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[PayRequest]:
        """Newest first."""

        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        processed_by: str,
        admin_notes: Optional[str] = None,
    ) -> bool:
        """Only succeeds while the request is still pending; stamps processed_at."""

        raise NotImplementedError

    def count_by_status(self, status: RequestStatus) -> int:
        raise NotImplementedError
