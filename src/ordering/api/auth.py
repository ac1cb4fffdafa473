"""Request principal for the Ordering API.

Token issuance and verification happen upstream; the gateway forwards the
authenticated user's id and role as headers. Every route depends on
``current_principal``; the administrative routes on ``admin_principal``.
"""

from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Principal:
    id: str
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


def current_principal(
    x_user_id: str = Header(default=""),
    x_user_role: str = Header(default="user"),
) -> Principal:
    if not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Authentication required")
    return Principal(id=x_user_id.strip(), role=(x_user_role or "user").strip().lower())


def admin_principal(principal: Principal = Depends(current_principal)) -> Principal:
    if not principal.is_admin:
        raise HTTPException(status_code=403, detail="Access denied, admin access is required")
    return principal
