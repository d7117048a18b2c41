# -*- coding: utf-8 -*-
"""Location: ./e2e_provisioning/sql_client.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Raw SQL gateway for statements the GraphQL API has no mutation for
(batch user inserts). Statements always run with bound parameters inside a
single transaction.
"""

# Standard
import asyncio
import logging
from typing import Any, Dict, Optional

# Third-Party
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


class SQLClient:
    """Runs one parameterized statement per call against the backend database.

    SQLAlchemy's synchronous engine is driven from a worker thread so callers
    can ``await`` it like the GraphQL gateway.
    """

    def __init__(self, database_url: Optional[str] = None, engine: Optional[Engine] = None):
        if engine is None and database_url is None:
            raise ValueError("SQLClient needs a database_url or an engine")
        self.engine = engine if engine is not None else create_engine(database_url, pool_pre_ping=True)

    def _execute_sync(self, statement: str, params: Dict[str, Any]) -> Dict[str, Any]:
        with self.engine.begin() as conn:
            result = conn.execute(text(statement), params)
            return {"rowcount": result.rowcount}

    async def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Execute ``query`` with bound ``variables`` in its own transaction.

        Returns:
            ``{"rowcount": n}`` for the executed statement.

        Raises:
            sqlalchemy.exc.SQLAlchemyError: Unchanged; the transaction is rolled back.
        """
        result = await asyncio.to_thread(self._execute_sync, query, variables or {})
        logger.debug(f"SQL statement affected {result['rowcount']} row(s)")
        return result

    async def close(self):
        self.engine.dispose()
