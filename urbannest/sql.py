from sqlalchemy import MetaData, Table, Column, Integer, String, Numeric
from sqlalchemy.engine import Engine
from sqlalchemy.sql import select

metadata = MetaData()

# ---------- Table ----------
property_table = Table(
    "property", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String, nullable=False),
    Column("location", String, nullable=False),
    Column("price", Numeric(12, 2, asdecimal=True), nullable=False),
    Column("description", String(1000)),
    Column("image_url", String),
)

# ---------- Column list reused across queries ----------

PROPERTY_COLS = [
    property_table.c.id,
    property_table.c.title,
    property_table.c.location,
    property_table.c.price,
    property_table.c.description,
    property_table.c.image_url,
]

# ---------- Public selectors ----------

def property_select():
    """
    Full row view, natural (id) order.
    """
    return select(*PROPERTY_COLS).order_by(property_table.c.id)

def init_db(engine: Engine) -> None:
    """Create the property table if it is missing. Idempotent."""
    metadata.create_all(engine, tables=[property_table])
