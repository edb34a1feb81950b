from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import PayRequestType, RequestStatus


@dataclass(frozen=True)
class PayRequest:
    request_id: int
    employee_id: int
    employee_name: str
    amount: float
    purpose: str
    request_type: PayRequestType
    status: RequestStatus
    created_at: datetime
    description: Optional[str] = None
    processed_at: Optional[datetime] = None
    processed_by: Optional[str] = None
    admin_notes: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "request_id": self.request_id,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "amount": self.amount,
            "purpose": self.purpose,
            "description": self.description,
            "request_type": self.request_type.value,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "processed_at": self.processed_at.isoformat() if self.processed_at else None,
            "processed_by": self.processed_by,
            "admin_notes": self.admin_notes,
        }
