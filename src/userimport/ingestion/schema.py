"""Users table schema and provisioning."""

import logging

from userimport.errors import SchemaError, StoreError
from userimport.service import DatabaseService

logger = logging.getLogger(__name__)

USERS_TABLE_DDL = """
DROP TABLE IF EXISTS users;
CREATE TABLE users (
    email    VARCHAR(100) NOT NULL,
    name     VARCHAR(100) NOT NULL,
    surname  VARCHAR(100) NOT NULL,
    PRIMARY KEY (email)
);
"""

USERS_TABLE = "users"
USERS_COLUMNS = ["email", "name", "surname"]
USERS_CONFLICT_COLUMNS = ["email"]


def provision_users_table(service: DatabaseService) -> None:
    """Drop and recreate the users table.

    The end state is the same whatever the table looked like before.

    Raises:
        SchemaError: If the store rejects either statement.
    """
    try:
        service.execute_ddl(USERS_TABLE_DDL)
    except StoreError as e:
        raise SchemaError(f"Could not create table {USERS_TABLE}: {e}") from e
    logger.info("Table %s dropped and recreated", USERS_TABLE)
