"""Catalog listing."""

import pytest
from sqlmodel import SQLModel


@pytest.mark.usefixtures("seeded", "auth")
class TestListProducts:
    def test_lists_user_then_products(self, client):
        response = client.get("/products")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert response.text == (
            '"alice"\n'
            '[{"product_id":1,"product_name":"Tea","product_price":1000},'
            '{"product_id":2,"product_name":"Coffee","product_price":1500}]\n'
        )

    def test_store_failure(self, client, engine):
        SQLModel.metadata.tables["order_app_api_products"].drop(engine)

        response = client.get("/products")

        assert response.status_code == 500
        assert response.text == "Failed to execute query"


def test_empty_catalog(client, auth, documents):
    response = client.get("/products")
    assert documents(response) == ["alice", []]


def test_requires_session(client):
    assert client.get("/products").status_code == 401
