from unittest.mock import MagicMock

import pytest

from app.repositories.product_repo import MongoProductRepository


def _db_with(coll):
    db = MagicMock()
    db.__getitem__.return_value = coll
    return db


def test_insert_product_stamps_id_and_created_at():
    coll = MagicMock()
    session = object()
    repo = MongoProductRepository(_db_with(coll), session=session)

    product = repo.insert_product({"name": "Pan", "business_id": "B1"})

    stored = coll.insert_one.call_args.args[0]
    assert coll.insert_one.call_args.kwargs == {"session": session}
    assert stored["business_id"] == "B1"
    assert len(product["id"]) == 32
    assert product["created_at"].endswith("Z")
    assert "_id" not in product


def test_insert_product_requires_business_id():
    coll = MagicMock()
    repo = MongoProductRepository(_db_with(coll))
    with pytest.raises(ValueError):
        repo.insert_product({"name": "Pan"})
    coll.insert_one.assert_not_called()


def test_list_products_sorts_newest_first_without_object_id():
    coll = MagicMock()
    coll.find.return_value.sort.return_value = [{"id": "P2"}, {"id": "P1"}]
    repo = MongoProductRepository(_db_with(coll))

    assert repo.list_products() == [{"id": "P2"}, {"id": "P1"}]
    coll.find.assert_called_once_with({}, {"_id": 0}, session=None)
    coll.find.return_value.sort.assert_called_once_with("_id", -1)
