"""
Unit tests for CatalogStore: querying, CRUD, id assignment
and the persist-after-mutate behaviour.
"""
import math

import pytest

from storefront.domain.errors import NotFoundError, StorageError, ValidationError
from storefront.domain.schemas import ProductFilter
from storefront.services.catalog_service import CatalogStore
from tests.conftest import FakeProductRepo


def ids(products):
    return [p.id for p in products]


class TestListProducts:

    def test_no_filter_keeps_storage_order(self, catalog):
        assert ids(catalog.list()) == [1, 2, 3, 4, 5]
        assert ids(catalog.list(ProductFilter())) == [1, 2, 3, 4, 5]

    def test_search_matches_name_or_description_case_insensitive(self, catalog):
        # "MUG" is in name of 1, "canvas" only in description of 3
        assert ids(catalog.list(ProductFilter(search="MUG"))) == [1]
        assert ids(catalog.list(ProductFilter(search="canvas"))) == [3]

    def test_category_is_exact_case_insensitive(self, catalog):
        assert ids(catalog.list(ProductFilter(category="kitchen"))) == [1, 2]
        # substring of a category does not match
        assert catalog.list(ProductFilter(category="kitch")) == []

    def test_filters_are_conjunctive(self, catalog):
        search_only = ids(catalog.list(ProductFilter(search="a")))
        category_only = ids(catalog.list(ProductFilter(category="Kitchen")))

        both = ids(catalog.list(ProductFilter(search="a", category="Kitchen")))

        assert both == [i for i in search_only if i in category_only]
        assert both == [1, 2]

    def test_price_bounds_are_inclusive_and_independent(self, catalog):
        assert ids(catalog.list(ProductFilter(min_price=15))) == [2, 3, 4]
        assert ids(catalog.list(ProductFilter(max_price=9.99))) == [1, 5]
        assert ids(catalog.list(ProductFilter(min_price=9.99, max_price=24.5))) == [1, 2, 3]

    def test_inverted_bounds_return_empty_list(self, catalog):
        assert catalog.list(ProductFilter(min_price=10, max_price=5)) == []

    def test_sort_by_price(self, catalog):
        asc = ids(catalog.list(ProductFilter(sort="price_asc")))
        desc = ids(catalog.list(ProductFilter(sort="price_desc")))

        assert asc == [5, 1, 3, 2, 4]
        assert desc == list(reversed(asc))

    def test_sort_by_name_ignores_case(self, catalog):
        # "lamp" is lower case and still sorts between Apron and Mug
        assert ids(catalog.list(ProductFilter(sort="name_asc"))) == [2, 4, 1, 5, 3]
        assert ids(catalog.list(ProductFilter(sort="name_desc"))) == [3, 5, 1, 4, 2]

    def test_sort_is_stable_for_equal_prices(self):
        repo = FakeProductRepo()
        store = CatalogStore(repo)
        for name in ("first", "second", "third"):
            store.create({"name": name, "price": 5})

        assert [p.name for p in store.list(ProductFilter(sort="price_asc"))] == ["first", "second", "third"]

    def test_unknown_sort_keeps_storage_order(self, catalog):
        assert ids(catalog.list(ProductFilter(sort="popularity"))) == [1, 2, 3, 4, 5]

    def test_sort_applies_after_filter(self, catalog):
        result = catalog.list(ProductFilter(category="kitchen", sort="price_desc"))
        assert ids(result) == [2, 1]


class TestGetProduct:

    def test_get_existing(self, catalog):
        assert catalog.get(1).name == "Mug"

    def test_get_accepts_numeric_string(self, catalog):
        assert catalog.get("3").name == "Tote"

    @pytest.mark.parametrize("product_id", [99, "abc", None, "1.5"])
    def test_get_missing_raises_not_found(self, catalog, product_id):
        with pytest.raises(NotFoundError, match="Product not found"):
            catalog.get(product_id)


class TestCreateProduct:

    def test_create_then_get_returns_same_record(self, catalog, product_repo):
        created = catalog.create({"name": "Kettle", "price": 49, "category": "Kitchen"})

        assert created.id == 6
        assert catalog.get(created.id) == created
        assert created.image == ""
        assert created.description == ""
        assert product_repo.saves == 1
        assert ids(product_repo.products)[-1] == 6

    def test_first_id_in_empty_catalog_is_one(self):
        store = CatalogStore(FakeProductRepo())
        assert store.create({"name": "Only", "price": 1}).id == 1

    def test_ids_are_unique(self, catalog):
        new_ids = [catalog.create({"name": f"p{i}", "price": i}).id for i in range(3)]
        all_ids = ids(catalog.list())
        assert len(all_ids) == len(set(all_ids))
        assert new_ids == [6, 7, 8]

    def test_next_id_is_computed_from_current_max(self, catalog):
        catalog.delete(5)
        assert catalog.create({"name": "Reused", "price": 1}).id == 5

    def test_numeric_string_price_is_accepted(self, catalog):
        assert catalog.create({"name": "Pen", "price": "2.50"}).price == 2.5

    @pytest.mark.parametrize(
        "fields",
        [
            {"price": 5},
            {"name": "", "price": 5},
            {"name": "   ", "price": 5},
            {"name": "x"},
            {"name": "x", "price": "abc"},
            {"name": "x", "price": math.nan},
            {"name": "x", "price": math.inf},
            {"name": "x", "price": -1},
        ],
    )
    def test_invalid_payload_is_rejected_without_change(self, catalog, product_repo, fields):
        with pytest.raises(ValidationError, match="Valid name and price are required"):
            catalog.create(fields)

        assert len(catalog.list()) == 5
        assert product_repo.saves == 0

    def test_storage_failure_keeps_product_in_memory(self, catalog, product_repo):
        product_repo.fail = True

        with pytest.raises(StorageError):
            catalog.create({"name": "Ghost", "price": 3})

        # no rollback
        assert catalog.get(6).name == "Ghost"


class TestUpdateProduct:

    def test_partial_update_applies_only_given_fields(self, catalog, product_repo):
        updated = catalog.update(1, {"price": 11.5, "description": "Bigger mug"})

        assert updated.price == 11.5
        assert updated.description == "Bigger mug"
        assert updated.name == "Mug"
        assert product_repo.products[0].price == 11.5

    def test_update_missing_raises_not_found(self, catalog):
        with pytest.raises(NotFoundError):
            catalog.update(42, {"name": "x"})

    def test_invalid_price_rejects_whole_update(self, catalog, product_repo):
        with pytest.raises(ValidationError, match="Invalid price"):
            catalog.update(1, {"name": "Renamed", "price": "free"})

        assert catalog.get(1).name == "Mug"
        assert product_repo.saves == 0

    def test_empty_name_is_rejected(self, catalog):
        with pytest.raises(ValidationError):
            catalog.update(1, {"name": ""})

    def test_text_fields_are_coerced_to_str(self, catalog):
        assert catalog.update(2, {"category": 7}).category == "7"

    def test_storage_failure_keeps_update(self, catalog, product_repo):
        product_repo.fail = True
        with pytest.raises(StorageError):
            catalog.update(1, {"price": 1})
        assert catalog.get(1).price == 1


class TestDeleteProduct:

    def test_delete_then_get_is_not_found(self, catalog, product_repo):
        catalog.delete(2)

        with pytest.raises(NotFoundError):
            catalog.get(2)
        assert 2 not in ids(catalog.list())
        assert 2 not in ids(product_repo.products)

    def test_delete_missing_raises_not_found(self, catalog):
        with pytest.raises(NotFoundError):
            catalog.delete(99)

    def test_storage_failure_keeps_deletion(self, catalog, product_repo):
        product_repo.fail = True
        with pytest.raises(StorageError):
            catalog.delete(1)
        assert catalog.find(1) is None
