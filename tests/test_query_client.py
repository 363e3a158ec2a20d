from __future__ import annotations

import pytest

from rental_marketplace.db.query_client import (
    Embed,
    QueryClient,
    eq,
    first_error,
    gt,
    ilike,
    in_,
    is_null,
    not_in,
    parse_embed,
)
from rental_marketplace.repositories import ProductRepo, UserRepo
from rental_marketplace.services.errors import FetchError


def test_empty_result_is_not_an_error(connection):
    result = QueryClient(connection).select("products")
    assert result.ok
    assert result.rows == []
    assert len(result) == 0


def test_unknown_column_is_a_fetch_error(seeded):
    result = QueryClient(seeded).select("products", filters=[eq("colour", "red")])
    assert not result.ok
    assert result.rows is None
    assert isinstance(result.error, FetchError)
    assert result.error.table == "products"


def test_unknown_table_is_a_fetch_error(seeded):
    result = QueryClient(seeded).select("invoices")
    assert isinstance(result.error, FetchError)


def test_first_error_picks_failed_fetch(seeded):
    client = QueryClient(seeded)
    good = client.select("users")
    bad = client.select("users", ("nope",))
    assert first_error(good) is None
    assert first_error(good, bad) is bad.error


def test_filters_and_ordering(seeded):
    client = QueryClient(seeded)
    rows = client.select(
        "products",
        ("product_id", "rental_price"),
        filters=[eq("category", "accessories"), gt("rental_price", 500)],
        order_by="-rental_price",
    ).rows
    assert [row["product_id"] for row in rows] == [3, 6, 9]
    assert [row["product_id"] for row in client.select("products", filters=[ilike("name", "DRESS")], order_by="product_id").rows] == [5, 8]
    assert client.select("products", filters=[in_("product_id", [])]).rows == []
    assert len(client.select("products", filters=[not_in("product_id", [])]).rows) == 10
    assert client.select("products", filters=[is_null("owner_id")]).rows == []


def test_limit(seeded):
    rows = QueryClient(seeded).select("users", order_by="user_id", limit=3).rows
    assert [row["user_id"] for row in rows] == [1, 2, 3]


def test_embed_one_and_many(seeded):
    rows = QueryClient(seeded).select(
        "products",
        ("product_id", "name"),
        filters=[in_("product_id", [1, 10])],
        embed=[Embed("owner", ("name",)), Embed("rentals", ("rental_id",))],
        order_by="product_id",
    ).rows
    tuxedo, scarf = rows
    assert tuxedo["owner"]["name"] == "Jane Smith"
    assert sorted(rental["rental_id"] for rental in tuxedo["rentals"]) == [1, 5]
    assert scarf["rentals"] == []


def test_inner_embed_drops_unmatched_parents(seeded):
    rows = QueryClient(seeded).select(
        "products",
        ("product_id",),
        embed=[Embed("reviews", ("rating",), inner=True)],
        order_by="product_id",
    ).rows
    assert [row["product_id"] for row in rows] == [1, 2, 3, 4, 5, 6]


def test_nested_embed_from_dotted_path(seeded):
    rows = QueryClient(seeded).select(
        "rentals",
        ("rental_id", "product_id"),
        filters=[eq("rental_id", 1)],
        embed=["product.owner", "renter"],
    ).rows
    assert rows[0]["product"]["owner"]["name"] == "Jane Smith"
    assert rows[0]["renter"]["name"] == "John Doe"


def test_embeds_deeper_than_two_levels_are_rejected(seeded):
    result = QueryClient(seeded).select("rentals", embed=["product.owner.products"])
    assert not result.ok


def test_deleted_relation_embeds_as_none(seeded):
    ProductRepo(seeded).delete(1)
    rows = QueryClient(seeded).select(
        "rentals", filters=[eq("rental_id", 1)], embed=["product"]
    ).rows
    assert rows[0]["product_id"] is None
    assert rows[0]["product"] is None


def test_parse_embed_builds_nested_embeds():
    embed = parse_embed("product.owner")
    assert embed.name == "product"
    assert embed.children == (Embed("owner"),)


@pytest.mark.parametrize("relation", ["owner", "reviews", "maintenance", "rentals"])
def test_product_relations_are_embeddable(seeded, relation):
    assert QueryClient(seeded).select("products", embed=[relation]).ok


def test_user_delete_leaves_product_without_owner(seeded):
    UserRepo(seeded).delete(2)
    rows = QueryClient(seeded).select("products", filters=[is_null("owner_id")], order_by="product_id").rows
    assert [row["product_id"] for row in rows] == [1, 2, 7]
