"""
Portal Local Database Schema

===============================================================================
PURPOSE:
===============================================================================
Creates the local SQLite database used when no hosted data store is
configured (see config.load_store_settings).

$ python portal_schema.py            # create the tables
$ python portal_schema.py --seed     # ...and load the demo rows into empty tables

It is safe to re-run: tables are only created if they do not already exist,
and seeding skips any table that already has rows.

===============================================================================
TABLE LAYOUT:
===============================================================================
Every collection has the same two columns:

    id       TEXT PRIMARY KEY
    payload  TEXT   -- the rest of the row as JSON

Rows keep exactly the shape the hosted tables return (nested
specifications, maintenance, controls, phases), so the same models read
both backends.
-------------------------------------------------------------------------------
"""

import argparse
import logging
import sqlite3
import sys

import config
from common import demo_data
from common.data_store import SQLiteStore

logger = logging.getLogger(__name__)

CREATE_COLLECTION = """
CREATE TABLE IF NOT EXISTS {table} (
    id TEXT PRIMARY KEY,
    payload TEXT NOT NULL DEFAULT '{{}}'
);
"""

# Demo rows per table. dropdown_options is flattened from the per-category defaults.
SEED_ROWS = {
    config.TABLE_AIRCRAFT: demo_data.DEMO_AIRCRAFT,
    config.TABLE_EMPLOYEES: demo_data.DEMO_EMPLOYEES,
    config.TABLE_DEPARTMENTS: demo_data.DEMO_DEPARTMENTS,
    config.TABLE_POSITIONS: demo_data.DEMO_POSITIONS,
    config.TABLE_DROPDOWN_OPTIONS: [
        row for rows in demo_data.DEFAULT_DROPDOWN_OPTIONS.values() for row in rows
    ],
    config.TABLE_RISK_ASSESSMENTS: demo_data.DEMO_RISK_ASSESSMENTS,
    config.TABLE_OPERATIONAL_PROCESSES: demo_data.DEMO_OPERATIONS,
}


def initialize_database(db_file: str = config.DEFAULT_DB_PATH) -> None:
    """
    Creates every collection table in one transaction.
    Raises sqlite3.Error (after rolling back) if anything fails.
    """
    conn = sqlite3.connect(db_file)
    try:
        with conn:
            for table in config.ALL_TABLES:
                conn.execute(CREATE_COLLECTION.format(table=table))
        logger.info("Database '%s' initialized (%d tables)", db_file, len(config.ALL_TABLES))
    finally:
        conn.close()


def seed_demo_data(store: SQLiteStore) -> dict:
    """Inserts the demo rows into every EMPTY table. Returns {table: rows inserted}."""
    seeded = {}
    for table, rows in SEED_ROWS.items():
        existing = store.select(table, limit=1)
        if not existing.ok:
            raise sqlite3.OperationalError(existing.error)
        if existing.data:
            logger.info("Skipping seed for '%s': table already has rows", table)
            seeded[table] = 0
            continue
        result = store.insert(table, [dict(row) for row in rows])
        if not result.ok:
            raise sqlite3.OperationalError(result.error)
        seeded[table] = len(result.data)
        logger.info("Seeded %d rows into '%s'", seeded[table], table)
    return seeded


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create the portal's local SQLite database.")
    parser.add_argument("--db", default=config.DEFAULT_DB_PATH, help="database file to create")
    parser.add_argument("--files", default=config.DEFAULT_FILES_PATH, help="folder for uploaded files")
    parser.add_argument("--seed", action="store_true", help="load demo rows into empty tables")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        initialize_database(args.db)
        if args.seed:
            seed_demo_data(SQLiteStore(args.db, args.files))
    except sqlite3.Error as e:
        logger.error("Database setup failed: %s", e)
        return 1
    logger.info("Database '%s' is ready", args.db)
    return 0


if __name__ == "__main__":
    sys.exit(main())
