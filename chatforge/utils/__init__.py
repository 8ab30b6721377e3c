from .db_setup import SCHEMA_STATEMENTS, setup_postgres, test_connection

__all__ = ["SCHEMA_STATEMENTS", "setup_postgres", "test_connection"]
