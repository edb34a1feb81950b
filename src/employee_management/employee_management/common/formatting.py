from __future__ import annotations


def money(value: float) -> str:
    """Rupee amount as shown in notifications, e.g. ₹22,375.00."""
    return f"₹{value:,.2f}"
