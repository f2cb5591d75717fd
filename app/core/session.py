from dataclasses import dataclass
from typing import Any, MutableMapping

from fastapi import Request

from app.core.errors import LoginRequired

# Session keys
IS_LOGGED_IN = "IsLoggedIn"
ROLE = "role"
UID = "uid"
EMAIL = "email"
EMAIL_VERIFIED = "EmailVerified"
CUSTOMER_NAME = "customerName"
FLASHES = "_flashes"

CUSTOMER_ROLE = "customer"
LOGIN_PATH = "/api/v1/auth/login"


@dataclass(frozen=True)
class CustomerContext:
    """Request-scoped view of who is calling, built from the session cookie."""
    uid: str | None = None
    role: str | None = None
    email: str | None = None
    email_verified: bool = False
    customer_name: str | None = None
    is_logged_in: bool = False

    @property
    def is_authenticated_customer(self) -> bool:
        return self.is_logged_in and self.role == CUSTOMER_ROLE and bool(self.uid)

    @classmethod
    def from_session(cls, session: MutableMapping[str, Any]) -> "CustomerContext":
        return cls(
            uid=session.get(UID) or None,
            role=session.get(ROLE),
            email=session.get(EMAIL),
            email_verified=session.get(EMAIL_VERIFIED) == "True",
            customer_name=session.get(CUSTOMER_NAME) or None,
            is_logged_in=session.get(IS_LOGGED_IN) == "true",
        )


# ============== Dependencies ==============

def optional_customer(request: Request) -> CustomerContext:
    """Context for endpoints that answer unauthenticated callers themselves."""
    return CustomerContext.from_session(request.session)


def require_customer(request: Request) -> CustomerContext:
    """Guard for customer pages; unauthenticated callers are redirected to login."""
    context = CustomerContext.from_session(request.session)
    if not context.is_authenticated_customer:
        raise LoginRequired()
    return context


# ============== Session Mutation ==============

def establish(
    session: MutableMapping[str, Any],
    uid: str,
    email: str,
    email_verified: bool,
    customer_name: str,
    role: str = CUSTOMER_ROLE,
) -> None:
    session[IS_LOGGED_IN] = "true"
    session[ROLE] = role
    session[UID] = uid
    session[EMAIL] = email
    session[EMAIL_VERIFIED] = "True" if email_verified else "False"
    session[CUSTOMER_NAME] = customer_name


def set_customer_name(session: MutableMapping[str, Any], name: str) -> None:
    session[CUSTOMER_NAME] = name


def clear(session: MutableMapping[str, Any]) -> None:
    session.clear()


def flash(session: MutableMapping[str, Any], category: str, message: str) -> None:
    """Queue a one-shot message for the next rendered view."""
    flashes = list(session.get(FLASHES, []))
    flashes.append({"category": category, "message": message})
    session[FLASHES] = flashes


def pop_flashes(session: MutableMapping[str, Any]) -> list[dict]:
    return session.pop(FLASHES, [])
