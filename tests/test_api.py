"""
HTTP endpoints over an in-memory seeded store
"""
from io import BytesIO

import pandas as pd


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_stock_summary(client):
    response = client.get("/api/stock/summary")

    assert response.status_code == 200
    rows = response.json()
    assert len(rows) == 5
    assert rows[0]["product_name"] == "Laptop Dell XPS"
    assert rows[0]["current_stock"] == 13


def test_stock_summary_page(client):
    response = client.get("/api/stock/summary/page", params={"page": 2, "page_size": 2, "group_by_rack": True})

    assert response.status_code == 200
    body = response.json()
    assert body["total_count"] == 5
    assert body["total_pages"] == 3
    assert [r["product_name"] for r in body["data"]] == ['Samsung TV 55"', "Wireless Keyboard"]
    assert [g["rack"] for g in body["groups"]] == ["C3", "A2"]
    assert body["available_racks"] == ["A1", "B2", "C3", "A2", "B3"]


def test_stock_summary_page_rejects_page_zero(client):
    assert client.get("/api/stock/summary/page", params={"page": 0}).status_code == 422


def test_product_stock(client):
    assert client.get("/api/stock/products/2").json()["current_stock"] == 20
    assert client.get("/api/stock/products/999").status_code == 404


def test_product_crud(client):
    response = client.post("/api/products", json={"name": "Monitor Arm", "rack": "A1", "opening_stock": 7})
    assert response.status_code == 201
    product = response.json()
    assert product["id"] == 6

    response = client.put(f"/api/products/{product['id']}", json={"name": "Monitor Arm", "rack": "B2", "opening_stock": 9})
    assert response.status_code == 200
    assert response.json()["rack"] == "B2"

    assert client.delete(f"/api/products/{product['id']}").json() == {"deleted": True, "id": product["id"]}
    assert client.get(f"/api/products/{product['id']}").status_code == 404


def test_missing_and_invalid_records(client):
    assert client.get("/api/products/999").status_code == 404
    assert client.put("/api/racks/999", json={"number": "Q1"}).status_code == 404
    assert client.delete("/api/containers/999").status_code == 404
    assert client.post("/api/products", json={"name": ""}).status_code == 422
    assert client.post("/api/inward", json={"product_id": 999, "quantity": 1, "date": "2025-05-01"}).status_code == 422


def test_referenced_product_cannot_be_deleted(client):
    response = client.delete("/api/products/1")

    assert response.status_code == 409
    assert "in use" in response.json()["detail"]
    assert client.get("/api/products/1").status_code == 200


def test_entry_listing_with_labels(client):
    response = client.get("/api/outward", params={"search": "iphone"})

    assert response.status_code == 200
    rows = response.json()
    assert len(rows) == 1
    assert rows[0]["product_name"] == "iPhone 15 Pro"
    assert rows[0]["container_type"] == "Bag"


def test_net_weight(client):
    response = client.get("/api/stock/net-weight", params={"gross_weight": 10, "container_id": 1, "container_quantity": 4})

    assert response.status_code == 200
    assert response.json()["net_weight"] == 8.0


def test_dashboard_stats(client):
    body = client.get("/api/dashboard/stats").json()

    assert body["total_products"] == 5
    assert body["total_stock"] == 65
    assert body["low_stock_count"] == 0
    assert body["rack_count"] == 5


def test_template_download(client):
    response = client.get("/api/templates/product")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/vnd.openxmlformats")
    df = pd.read_excel(BytesIO(response.content), engine="openpyxl")
    assert "openingStock" in df.columns

    assert client.get("/api/templates/supplier").status_code == 422


def test_workbook_import(client):
    output = BytesIO()
    pd.DataFrame([
        {"type": "Drum", "weight": 12.0, "remark": "steel"},
        {"type": "", "weight": 1.0, "remark": None},
    ]).to_excel(output, index=False, engine="openpyxl")

    response = client.post(
        "/api/import/container",
        files={"file": ("containers.xlsx", output.getvalue(), "application/octet-stream")}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["imported"] == 1
    assert body["failed"] == 1
    assert [c["type"] for c in client.get("/api/containers").json()][-1] == "Drum"


def test_summary_export(client):
    response = client.get("/api/stock/summary/export")

    assert response.status_code == 200
    df = pd.read_excel(BytesIO(response.content), engine="openpyxl")
    assert list(df.columns) == ["Product", "Rack", "Opening Stock", "Inward", "Outward", "Current Stock"]
    assert df["Current Stock"].tolist() == [13, 20, 8, 12, 12]
