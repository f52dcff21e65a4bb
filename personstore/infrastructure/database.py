"""Document Store Manager — async MongoDB client with error mapping and health checks.

Invariants:
    - One AsyncMongoClient per process, created at startup and closed at shutdown
    - All driver exceptions surfaced as StorageError (core/errors.py) via storage_errors()
    - No retries here: retry policy belongs to the caller

Design Decisions:
    - Manager owned by the FastAPI lifespan and kept on app.state, never a module global
    - Client connects lazily; health_check() pings so readiness reflects the real server
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from pymongo import AsyncMongoClient
from pymongo.errors import (
    ConnectionFailure, DuplicateKeyError, OperationFailure, PyMongoError,
)

from personstore.core.errors import StorageError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def storage_errors(operation: str) -> AsyncGenerator[None, None]:
    """Map driver exceptions raised inside the block to StorageError."""
    try:
        yield
    except DuplicateKeyError as e:
        logger.error(f"Duplicate key on {operation}: {e}", extra={"operation": operation})
        raise StorageError("Duplicate key", operation) from e
    except ConnectionFailure as e:
        logger.error(f"Connection failure on {operation}: {e}", extra={"operation": operation})
        raise StorageError("Connection or server selection error", operation) from e
    except OperationFailure as e:
        logger.error(f"Server rejected {operation}: {e}", extra={"operation": operation})
        raise StorageError("Server rejected the operation", operation) from e
    except PyMongoError as e:
        logger.error(f"Driver error on {operation}: {e}", extra={"operation": operation})
        raise StorageError("Document store operation failed", operation) from e


class DocumentStoreManager:
    """Owns the MongoDB client and hands out the people collection."""

    def __init__(
        self,
        uri: str,
        database: str,
        collection: str,
        server_selection_timeout_ms: int = 5000,
    ):
        self.client = AsyncMongoClient(
            uri, serverSelectionTimeoutMS=server_selection_timeout_ms,
        )
        self.database_name = database
        self.collection_name = collection

    def collection(self):
        return self.client[self.database_name][self.collection_name]

    async def health_check(self) -> bool:
        """Ping the server (for readiness probes)."""
        try:
            await self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error(f"Document store health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.close()
        logger.info("Document store client closed")
