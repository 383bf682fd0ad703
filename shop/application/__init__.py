"""Application layer.

Services that sit between the API and the catalog core.
"""

from shop.application.admin_service import (
    AccountAdminGate,
    AdminCredential,
    AdminGate,
    SecretAdminGate,
    ensure_admin_account,
)

__all__ = [
    "AccountAdminGate",
    "AdminCredential",
    "AdminGate",
    "SecretAdminGate",
    "ensure_admin_account",
]
