from app.core.session import (
    CustomerContext,
    clear,
    establish,
    flash,
    pop_flashes,
)


def test_established_session_is_authenticated_customer():
    session = {}
    establish(session, uid="cust-001", email="jane@example.com", email_verified=True, customer_name="Jane Doe")

    context = CustomerContext.from_session(session)

    assert context.is_authenticated_customer
    assert context.uid == "cust-001"
    assert context.email_verified is True
    assert context.customer_name == "Jane Doe"


def test_empty_session_is_not_authenticated():
    assert not CustomerContext.from_session({}).is_authenticated_customer


def test_wrong_role_is_not_authenticated():
    session = {}
    establish(session, uid="c1", email="c@example.com", email_verified=False, customer_name="C", role="cleaner")

    assert not CustomerContext.from_session(session).is_authenticated_customer


def test_missing_uid_is_not_authenticated():
    session = {"IsLoggedIn": "true", "role": "customer", "uid": ""}
    assert not CustomerContext.from_session(session).is_authenticated_customer


def test_logged_in_flag_required():
    session = {"IsLoggedIn": "false", "role": "customer", "uid": "c1"}
    assert not CustomerContext.from_session(session).is_authenticated_customer


def test_clear_removes_everything():
    session = {}
    establish(session, uid="c1", email="c@example.com", email_verified=True, customer_name="C")
    flash(session, "success", "Saved")

    clear(session)

    assert session == {}


def test_flashes_are_one_shot():
    session = {}
    flash(session, "success", "Saved")
    flash(session, "error", "But also this")

    assert pop_flashes(session) == [
        {"category": "success", "message": "Saved"},
        {"category": "error", "message": "But also this"},
    ]
    assert pop_flashes(session) == []
