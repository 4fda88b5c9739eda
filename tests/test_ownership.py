import pytest

from app.core.exceptions import NotFoundOrNoop, OwnershipDenied, Unauthenticated
from app.services.ownership import Identity, authorize, owner_predicate


def test_missing_identity_is_unauthenticated():
    with pytest.raises(Unauthenticated):
        authorize(None)
    with pytest.raises(Unauthenticated):
        authorize(Identity(id=""), "u1")


def test_matching_owner_is_allowed():
    assert authorize(Identity(id="u1"), "u1") == "u1"
    assert authorize(Identity(id="u1")) == "u1"


def test_other_owner_is_denied_as_not_found():
    with pytest.raises(OwnershipDenied) as exc:
        authorize(Identity(id="u1"), "u2")
    assert isinstance(exc.value, NotFoundOrNoop)
    assert exc.value.status_code == 404
    assert exc.value.message == NotFoundOrNoop().message


def test_owner_predicate_contains_both_keys():
    assert owner_predicate("u1", "B1") == {"id": "B1", "owner_id": "u1"}
