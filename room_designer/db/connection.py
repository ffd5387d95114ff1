import logging
from pathlib import Path
from typing import Optional

import duckdb

from room_designer.config import DESIGNER_DB

logger = logging.getLogger(__name__)

_conn = None


def _safe_connect(db_path: Path):
    """Connect to DuckDB, cleaning up corrupted WAL file if needed."""
    try:
        return duckdb.connect(str(db_path))
    except duckdb.InternalException as e:
        if "WAL file" in str(e):
            wal_path = Path(str(db_path) + ".wal")
            if wal_path.exists():
                logger.warning(f"Removing corrupted WAL file: {wal_path}")
                wal_path.unlink()
                return duckdb.connect(str(db_path))
        raise


def init_databases(db_path: Optional[Path] = None):
    global _conn

    _conn = _safe_connect(db_path or DESIGNER_DB)

    # Catalog products
    _conn.execute("""
        CREATE TABLE IF NOT EXISTS products (
            id VARCHAR PRIMARY KEY,
            name VARCHAR NOT NULL,
            description VARCHAR,
            material VARCHAR,
            category VARCHAR,
            dim_width DOUBLE,
            dim_height DOUBLE,
            dim_depth DOUBLE,
            dim_sku VARCHAR,
            weight DOUBLE,
            slug VARCHAR,
            main_image_url VARCHAR,
            variations JSON,
            model_3d_url VARCHAR,
            model_path VARCHAR,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)
    _conn.execute("CREATE INDEX IF NOT EXISTS idx_products_category ON products(category)")

    # Design projects: room, camera and furniture are stored as JSON text
    _conn.execute("""
        CREATE TABLE IF NOT EXISTS design_projects (
            id VARCHAR PRIMARY KEY,
            name VARCHAR NOT NULL,
            description VARCHAR,
            designer_id VARCHAR NOT NULL,
            customer_ids JSON,
            thumbnail_url VARCHAR,
            thumbnail_path VARCHAR,
            status VARCHAR DEFAULT 'Draft',
            room VARCHAR NOT NULL,
            camera VARCHAR NOT NULL,
            furniture VARCHAR NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)
    _conn.execute("CREATE INDEX IF NOT EXISTS idx_projects_designer ON design_projects(designer_id)")

    logger.info(f"Database ready: {db_path or DESIGNER_DB}")


def get_db():
    return _conn


def close_databases():
    global _conn
    if _conn:
        _conn.close()
        _conn = None
