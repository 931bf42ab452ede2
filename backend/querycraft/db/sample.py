"""
Sample sales dataset queried by the executor.

The tables live on their own MetaData so that they are created on the data
engine only, never next to the query/visualization records.
"""

import logging
from datetime import date

from sqlalchemy import (
    Column,
    Date,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    func,
    select,
)
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

sample_metadata = MetaData()

sales_data = Table(
    "sales_data",
    sample_metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("region", String, nullable=False),
    Column("customer_name", String, nullable=False),
    Column("product_name", String, nullable=False),
    Column("sales_amount", Numeric(10, 2, asdecimal=False), nullable=False),
    Column("date_created", Date, nullable=False),
    Column("transaction_count", Integer, server_default="1"),
)

products = Table(
    "products",
    sample_metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("category", String, nullable=False),
    Column("price", Numeric(10, 2, asdecimal=False), nullable=False),
)

customers = Table(
    "customers",
    sample_metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("email", String, nullable=False),
    Column("region", String, nullable=False),
    Column("signup_date", Date, nullable=False),
)

SAMPLE_SALES = [
    ("North America", "Acme Corp", "Widget A", 2500.00, date(2024, 10, 15)),
    ("North America", "Tech Solutions", "Widget B", 1800.00, date(2024, 10, 20)),
    ("Europe", "Euro Systems", "Widget A", 3200.00, date(2024, 11, 1)),
    ("Europe", "Nordic Ltd", "Widget C", 2100.00, date(2024, 11, 10)),
    ("Asia Pacific", "Pacific Trading", "Widget B", 2800.00, date(2024, 11, 15)),
    ("Asia Pacific", "Orient Corp", "Widget A", 1950.00, date(2024, 11, 20)),
    ("Latin America", "Sol Industries", "Widget C", 1650.00, date(2024, 12, 1)),
    ("Latin America", "Mercado Corp", "Widget A", 2200.00, date(2024, 12, 5)),
    ("North America", "Innovation Inc", "Widget B", 3100.00, date(2024, 12, 10)),
    ("Europe", "Alpine Group", "Widget A", 2750.00, date(2024, 12, 12)),
    ("Asia Pacific", "Dragon Enterprises", "Widget C", 2400.00, date(2024, 12, 15)),
    ("North America", "Future Tech", "Widget A", 1900.00, date(2024, 12, 18)),
]

SAMPLE_PRODUCTS = [
    ("Widget A", "Electronics", 99.99),
    ("Widget B", "Electronics", 149.99),
    ("Widget C", "Software", 199.99),
    ("Pro Widget", "Electronics", 299.99),
    ("Widget Suite", "Software", 499.99),
]

SAMPLE_CUSTOMERS = [
    ("Acme Corp", "contact@acme.com", "North America", date(2024, 1, 15)),
    ("Tech Solutions", "info@techsol.com", "North America", date(2024, 2, 20)),
    ("Euro Systems", "hello@eurosys.eu", "Europe", date(2024, 3, 10)),
    ("Pacific Trading", "sales@pacific.com", "Asia Pacific", date(2024, 4, 5)),
    ("Sol Industries", "contact@sol.com", "Latin America", date(2024, 5, 12)),
]


def seed_sample_data(bind: Engine) -> bool:
    """Create the sample tables and insert rows unless already seeded.

    Returns True when rows were inserted.
    """
    sample_metadata.create_all(bind)
    with bind.begin() as conn:
        existing = conn.execute(select(func.count()).select_from(sales_data)).scalar()
        if existing:
            logger.info("Sample data already seeded (%d sales rows)", existing)
            return False

        conn.execute(
            sales_data.insert(),
            [
                {
                    "region": region,
                    "customer_name": customer,
                    "product_name": product,
                    "sales_amount": amount,
                    "date_created": created,
                    "transaction_count": 1,
                }
                for region, customer, product, amount, created in SAMPLE_SALES
            ],
        )
        conn.execute(
            products.insert(),
            [{"name": n, "category": c, "price": p} for n, c, p in SAMPLE_PRODUCTS],
        )
        conn.execute(
            customers.insert(),
            [
                {"name": n, "email": e, "region": r, "signup_date": d}
                for n, e, r, d in SAMPLE_CUSTOMERS
            ],
        )
    logger.info(
        "Seeded %d sales rows, %d products, %d customers",
        len(SAMPLE_SALES),
        len(SAMPLE_PRODUCTS),
        len(SAMPLE_CUSTOMERS),
    )
    return True
