"""Per-entity ingestion configuration: source file, columns, cutoff, parents.

ENTITIES is listed parents-first, which is the load order.
"""

from dataclasses import dataclass
from typing import Any, Mapping

from catalog_seed.ingestion import schema
from catalog_seed.ingestion.normalize import (
    FieldSpec,
    at_least,
    column,
    non_negative,
    normalize,
    parse_float,
    parse_int,
    parse_timestamp,
    within,
)


@dataclass(frozen=True)
class EntitySpec:
    name: str
    table: str
    filename: str
    ddl: str
    fields: tuple[FieldSpec, ...]
    cutoff: int | None = None
    depends_on: tuple[str, ...] = ()
    key: str = "id"

    @property
    def columns(self) -> list[str]:
        return [f.name for f in self.fields]

    def normalize_row(self, row: Mapping[str, str | None]) -> tuple:
        """Coerce a raw CSV row into a tuple ordered like ``columns``.

        Raises RowRejected if a required field is missing or unparseable.
        """
        record = normalize(self.fields, row)
        return tuple(record[name] for name in self.columns)

    def record_key(self, record: tuple) -> Any:
        return record[self.columns.index(self.key)]


def _sku(record: Mapping[str, Any]) -> str:
    return f"SKU-{record['id']}"


def _email(record: Mapping[str, Any]) -> str:
    return f"user{record['id']}@example.com"


def _money(name: str, *alternates: str) -> FieldSpec:
    return column(name, *alternates, parser=parse_float, default=0.0, validator=non_negative)


def _timestamp(name: str) -> FieldSpec:
    return column(name, parser=parse_timestamp)


DISTRIBUTION_CENTERS = EntitySpec(
    name="distribution_centers",
    table="distribution_centers",
    filename="distribution_centers.csv",
    ddl=schema.DISTRIBUTION_CENTERS_DDL,
    fields=(
        column("id", parser=parse_int, required=True),
        column("name", default="Unknown Distribution Center"),
        column("latitude", parser=parse_float, default=0.0, validator=within(-90, 90)),
        column("longitude", parser=parse_float, default=0.0, validator=within(-180, 180)),
    ),
)

PRODUCTS = EntitySpec(
    name="products",
    table="products",
    filename="products.csv",
    ddl=schema.PRODUCTS_DDL,
    fields=(
        column("id", parser=parse_int, required=True),
        column("name", "product_name", default="Unknown Product"),
        column("description", "product_description", default=""),
        column("brand", "product_brand", default="Unknown Brand"),
        column("category", "product_category", default="General"),
        column("department", "product_department", default="General"),
        column("sku", "product_sku", default=_sku),
        _money("cost"),
        _money("retail_price", "price", "product_price"),
        column("rating", "product_rating", parser=parse_float, default=0.0, validator=within(0, 5)),
        column("stock", "product_stock", parser=parse_int, default=0, validator=non_negative),
        column("image", "product_image"),
        column("distribution_center_id", parser=parse_int, default=1),
    ),
    depends_on=("distribution_centers",),
)

USERS = EntitySpec(
    name="users",
    table="users",
    filename="users.csv",
    ddl=schema.USERS_DDL,
    fields=(
        column("id", parser=parse_int, required=True),
        column("first_name", default="Unknown"),
        column("last_name", default="User"),
        column("email", default=_email),
        column("age", parser=parse_int, default=25, validator=non_negative),
        column("gender", default="U"),
        column("state", default="Unknown"),
        column("street_address", default="Unknown Address"),
        column("postal_code", default="00000"),
        column("city", default="Unknown City"),
        column("country", default="Unknown Country"),
        column("latitude", parser=parse_float, default=0.0, validator=within(-90, 90)),
        column("longitude", parser=parse_float, default=0.0, validator=within(-180, 180)),
        column("traffic_source", default="Unknown"),
        _timestamp("created_at"),
    ),
    cutoff=1000,
)

INVENTORY_ITEMS = EntitySpec(
    name="inventory_items",
    table="inventory_items",
    filename="inventory_items.csv",
    ddl=schema.INVENTORY_ITEMS_DDL,
    fields=(
        column("id", parser=parse_int, required=True),
        column("product_id", parser=parse_int, required=True),
        _money("cost"),
        _timestamp("created_at"),
        _timestamp("sold_at"),
        column("product_category", default="General"),
        column("product_name", default="Unknown Product"),
        column("product_brand", default="Unknown Brand"),
        _money("product_retail_price"),
        column("product_department", default="General"),
        column("product_sku", default=_sku),
        column("product_distribution_center_id", parser=parse_int, default=1),
    ),
    cutoff=5000,
    depends_on=("products", "distribution_centers"),
)

ORDERS = EntitySpec(
    name="orders",
    table="orders",
    filename="orders.csv",
    ddl=schema.ORDERS_DDL,
    fields=(
        FieldSpec("id", sources=("order_id", "id"), parser=parse_int, required=True),
        column("user_id", parser=parse_int, required=True),
        column("status", default="Pending"),
        column("gender", default="U"),
        column("num_of_item", parser=parse_int, default=1, validator=at_least(1)),
        _timestamp("created_at"),
        _timestamp("returned_at"),
        _timestamp("shipped_at"),
        _timestamp("delivered_at"),
    ),
    cutoff=2000,
    depends_on=("users",),
)

ORDER_ITEMS = EntitySpec(
    name="order_items",
    table="order_items",
    filename="order_items.csv",
    ddl=schema.ORDER_ITEMS_DDL,
    fields=(
        column("id", parser=parse_int, required=True),
        column("order_id", parser=parse_int, required=True),
        column("user_id", parser=parse_int, required=True),
        column("product_id", parser=parse_int, required=True),
        column("inventory_item_id", parser=parse_int, required=True),
        column("status", default="Pending"),
        _money("sale_price"),
        _timestamp("created_at"),
        _timestamp("shipped_at"),
        _timestamp("delivered_at"),
        _timestamp("returned_at"),
    ),
    cutoff=5000,
    depends_on=("orders", "users", "products", "inventory_items"),
)

ENTITIES: tuple[EntitySpec, ...] = (
    DISTRIBUTION_CENTERS,
    PRODUCTS,
    USERS,
    INVENTORY_ITEMS,
    ORDERS,
    ORDER_ITEMS,
)

ENTITIES_BY_NAME: dict[str, EntitySpec] = {spec.name: spec for spec in ENTITIES}


def get_entity(name: str) -> EntitySpec:
    try:
        return ENTITIES_BY_NAME[name]
    except KeyError:
        known = ", ".join(ENTITIES_BY_NAME)
        raise ValueError(f"Unknown entity {name!r} (expected one of: {known})") from None
