"""Shared test fixtures."""

import csv
from pathlib import Path

import pytest

from catalog_seed import create_service


@pytest.fixture
def db_service(tmp_path):
    """Provide a fresh SQLite DatabaseService for each test."""
    db_path = tmp_path / "test.db"
    service = create_service(f"sqlite:///{db_path}")
    service.connect()
    yield service
    service.close()


@pytest.fixture
def data_dir(tmp_path):
    path = tmp_path / "database"
    path.mkdir()
    return path


@pytest.fixture
def write_csv(data_dir):
    """Write a CSV file (header + rows) into the data directory."""

    def _write(filename: str, header: list[str], rows: list[list[str]]) -> Path:
        csv_file = data_dir / filename
        with open(csv_file, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(header)
            writer.writerows(rows)
        return csv_file

    return _write


@pytest.fixture
def seed_files(write_csv):
    """A small, referentially consistent dataset covering all six files."""
    write_csv(
        "distribution_centers.csv",
        ["id", "name", "latitude", "longitude"],
        [["1", "Memphis TN", "35.1174", "-89.9711"], ["2", "Chicago IL", "41.8369", "-87.6847"]],
    )
    write_csv(
        "products.csv",
        ["id", "cost", "category", "name", "brand", "retail_price", "department", "sku",
         "distribution_center_id"],
        [
            ["10", "12.5", "Jeans", "Slim Jeans", "Levi's", "49.99", "Men", "SKU-A", "1"],
            ["11", "3.1", "Socks", "Wool Socks", "Smartwool", "14.00", "Women", "SKU-B", "2"],
        ],
    )
    write_csv(
        "users.csv",
        ["id", "first_name", "last_name", "email", "age", "gender", "state", "street_address",
         "postal_code", "city", "country", "latitude", "longitude", "traffic_source",
         "created_at"],
        [
            ["100", "Ada", "Lovelace", "ada@example.com", "36", "F", "London", "1 St", "N1",
             "London", "UK", "51.5", "-0.12", "Search", "2022-01-03 10:00:00 UTC"],
            ["101", "Alan", "Turing", "alan@example.com", "41", "M", "Cheshire", "2 Rd", "SK9",
             "Wilmslow", "UK", "53.3", "-2.2", "Email", "2022-02-01 09:30:00 UTC"],
        ],
    )
    write_csv(
        "inventory_items.csv",
        ["id", "product_id", "created_at", "sold_at", "cost", "product_category", "product_name",
         "product_brand", "product_retail_price", "product_department", "product_sku",
         "product_distribution_center_id"],
        [
            ["1000", "10", "2022-01-01 00:00:00 UTC", "", "12.5", "Jeans", "Slim Jeans", "Levi's",
             "49.99", "Men", "SKU-A", "1"],
            ["1001", "11", "2022-01-01 00:00:00 UTC", "2022-03-01 12:00:00 UTC", "3.1", "Socks",
             "Wool Socks", "Smartwool", "14.00", "Women", "SKU-B", "2"],
        ],
    )
    write_csv(
        "orders.csv",
        ["order_id", "user_id", "status", "gender", "created_at", "returned_at", "shipped_at",
         "delivered_at", "num_of_item"],
        [
            ["500", "100", "Shipped", "F", "2022-03-01 11:00:00 UTC", "", "2022-03-02 08:00:00 UTC",
             "", "1"],
            ["501", "101", "Complete", "M", "2022-03-05 11:00:00 UTC", "", "", "", "1"],
        ],
    )
    write_csv(
        "order_items.csv",
        ["id", "order_id", "user_id", "product_id", "inventory_item_id", "status", "created_at",
         "shipped_at", "delivered_at", "returned_at", "sale_price"],
        [
            ["9000", "500", "100", "10", "1000", "Shipped", "", "", "", "", "49.99"],
            ["9001", "501", "101", "11", "1001", "Complete", "", "", "", "", "14.00"],
        ],
    )
