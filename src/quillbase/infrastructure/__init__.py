"""Infrastructure layer.

Database adapters (SQLAlchemy), the collections API (FastAPI) and the
collection gateways (httpx, in-memory).
"""

from quillbase.infrastructure.persistence.database import (
    Base,
    DatabaseManager,
    close_database,
    get_db_manager,
    get_db_session,
    init_database,
)

__all__ = [
    "Base",
    "DatabaseManager",
    "get_db_manager",
    "get_db_session",
    "init_database",
    "close_database",
]
