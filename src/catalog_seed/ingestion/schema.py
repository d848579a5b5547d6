"""Catalog table schema.

The DDL is portable between SQLite and PostgreSQL. Foreign keys are declared
so the store itself decides whether a dangling reference is accepted.
"""

DISTRIBUTION_CENTERS_DDL = """
CREATE TABLE IF NOT EXISTS distribution_centers (
    id            INTEGER      PRIMARY KEY,
    name          VARCHAR(255) NOT NULL,
    latitude      DOUBLE PRECISION NOT NULL,
    longitude     DOUBLE PRECISION NOT NULL
);
"""

PRODUCTS_DDL = """
CREATE TABLE IF NOT EXISTS products (
    id            INTEGER      PRIMARY KEY,
    name          VARCHAR(255) NOT NULL,
    description   TEXT         NOT NULL,
    brand         VARCHAR(255) NOT NULL,
    category      VARCHAR(255) NOT NULL,
    department    VARCHAR(255) NOT NULL,
    sku           VARCHAR(255) NOT NULL,
    cost          DECIMAL(15,6) NOT NULL,
    retail_price  DECIMAL(15,6) NOT NULL,
    rating        DECIMAL(3,2) NOT NULL,
    stock         INTEGER      NOT NULL,
    image         TEXT,
    distribution_center_id INTEGER NOT NULL REFERENCES distribution_centers(id)
);
CREATE INDEX IF NOT EXISTS idx_products_category ON products(category);
CREATE INDEX IF NOT EXISTS idx_products_department ON products(department);
CREATE INDEX IF NOT EXISTS idx_products_brand ON products(brand);
"""

USERS_DDL = """
CREATE TABLE IF NOT EXISTS users (
    id            INTEGER      PRIMARY KEY,
    first_name    VARCHAR(255) NOT NULL,
    last_name     VARCHAR(255) NOT NULL,
    email         VARCHAR(255) NOT NULL,
    age           INTEGER      NOT NULL,
    gender        VARCHAR(16)  NOT NULL,
    state         VARCHAR(255) NOT NULL,
    street_address VARCHAR(255) NOT NULL,
    postal_code   VARCHAR(32)  NOT NULL,
    city          VARCHAR(255) NOT NULL,
    country       VARCHAR(255) NOT NULL,
    latitude      DOUBLE PRECISION NOT NULL,
    longitude     DOUBLE PRECISION NOT NULL,
    traffic_source VARCHAR(64) NOT NULL,
    created_at    TIMESTAMP
);
CREATE INDEX IF NOT EXISTS idx_users_country ON users(country);
"""

INVENTORY_ITEMS_DDL = """
CREATE TABLE IF NOT EXISTS inventory_items (
    id            INTEGER      PRIMARY KEY,
    product_id    INTEGER      NOT NULL REFERENCES products(id),
    cost          DECIMAL(15,6) NOT NULL,
    created_at    TIMESTAMP,
    sold_at       TIMESTAMP,
    product_category VARCHAR(255) NOT NULL,
    product_name  VARCHAR(255) NOT NULL,
    product_brand VARCHAR(255) NOT NULL,
    product_retail_price DECIMAL(15,6) NOT NULL,
    product_department VARCHAR(255) NOT NULL,
    product_sku   VARCHAR(255) NOT NULL,
    product_distribution_center_id INTEGER NOT NULL REFERENCES distribution_centers(id)
);
CREATE INDEX IF NOT EXISTS idx_inventory_items_product ON inventory_items(product_id);
"""

ORDERS_DDL = """
CREATE TABLE IF NOT EXISTS orders (
    id            INTEGER      PRIMARY KEY,
    user_id       INTEGER      NOT NULL REFERENCES users(id),
    status        VARCHAR(32)  NOT NULL,
    gender        VARCHAR(16)  NOT NULL,
    num_of_item   INTEGER      NOT NULL,
    created_at    TIMESTAMP,
    returned_at   TIMESTAMP,
    shipped_at    TIMESTAMP,
    delivered_at  TIMESTAMP
);
CREATE INDEX IF NOT EXISTS idx_orders_status ON orders(status);
CREATE INDEX IF NOT EXISTS idx_orders_user ON orders(user_id);
"""

ORDER_ITEMS_DDL = """
CREATE TABLE IF NOT EXISTS order_items (
    id            INTEGER      PRIMARY KEY,
    order_id      INTEGER      NOT NULL REFERENCES orders(id),
    user_id       INTEGER      NOT NULL REFERENCES users(id),
    product_id    INTEGER      NOT NULL REFERENCES products(id),
    inventory_item_id INTEGER  NOT NULL REFERENCES inventory_items(id),
    status        VARCHAR(32)  NOT NULL,
    sale_price    DECIMAL(15,6) NOT NULL,
    created_at    TIMESTAMP,
    shipped_at    TIMESTAMP,
    delivered_at  TIMESTAMP,
    returned_at   TIMESTAMP
);
CREATE INDEX IF NOT EXISTS idx_order_items_order ON order_items(order_id);
CREATE INDEX IF NOT EXISTS idx_order_items_product ON order_items(product_id);
"""
