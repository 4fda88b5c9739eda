import pytest

from app.core.exceptions import EmptyUpdate, InternalError, InvalidField, InvalidValue
from app.services.update_builder import build_update


def _build(updates, record_id="B1", owner_id="u1"):
    return build_update("business", updates, record_id=record_id, owner_id=owner_id)


def test_predicate_always_scopes_by_record_and_owner():
    stmt = _build({"tagline": "new"})
    assert stmt.predicate == {"id": "B1", "owner_id": "u1"}
    assert stmt.collection == "business"


def test_assignments_follow_request_order_and_only_supplied_fields():
    stmt = _build({"website": "https://x.example", "tagline": "new", "founded_year": 2001})
    assert stmt.assignments == ("website", "tagline", "founded_year")
    assert stmt.params == ("https://x.example", "new", 2001)
    assert stmt.to_update_document() == {
        "$set": {"website": "https://x.example", "tagline": "new", "founded_year": 2001}
    }


def test_explicit_empty_and_null_values_are_assignments():
    stmt = _build({"tagline": "", "description": None})
    assert stmt.to_update_document() == {"$set": {"tagline": "", "description": None}}


def test_values_pass_through_without_coercion():
    stmt = _build({"founded_year": "1999", "size": 12.5})
    assert stmt.params == ("1999", 12.5)


def test_empty_mapping_is_rejected():
    with pytest.raises(EmptyUpdate):
        _build({})


def test_one_invalid_name_rejects_whole_request():
    with pytest.raises(InvalidField) as exc:
        _build({"tagline": "new", "owner_id": "u2"})
    assert exc.value.field == "owner_id"


@pytest.mark.parametrize("value", [True, {"$gt": ""}, ["a"], float("nan")])
def test_non_scalar_values_are_rejected(value):
    with pytest.raises(InvalidValue) as exc:
        _build({"tagline": value})
    assert exc.value.field == "tagline"


def test_missing_owner_or_record_refuses_to_build():
    with pytest.raises(InternalError):
        _build({"tagline": "x"}, owner_id="")
    with pytest.raises(InternalError):
        _build({"tagline": "x"}, record_id="")


def test_describe_omits_values():
    ctx = _build({"contact_phone": "555-0101"}).describe()
    assert ctx == {
        "collection": "business",
        "record_id": "B1",
        "owner_id": "u1",
        "fields": ["contact_phone"],
    }
    assert "555-0101" not in str(ctx)
