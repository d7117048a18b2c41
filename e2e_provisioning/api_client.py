# -*- coding: utf-8 -*-
"""Location: ./e2e_provisioning/api_client.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Async GraphQL client used as the remote mutation gateway.

Each ``execute`` call is exactly one HTTP round trip. There is no retry,
pagination or caching here: a failing request fails the calling provisioner.
"""

# Standard
import logging
from typing import Any, Dict, List, Optional, Protocol

# Third-Party
import httpx
import orjson

logger = logging.getLogger(__name__)


class RemoteExecutionError(Exception):
    """The backend rejected or could not process a query or mutation.

    Attributes:
        errors: GraphQL error objects from the response, if any.
        status_code: HTTP status of the response, if one was received.
    """

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.errors = errors or []
        self.status_code = status_code


class RemoteGateway(Protocol):
    """Anything that can run a query/statement with variables and return structured data."""

    async def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]: ...


class GraphQLClient:
    """Async GraphQL-over-HTTP client with bearer auth.

    Args:
        base_url: Backend base URL.
        path: GraphQL endpoint path, relative to ``base_url``.
        token: Optional bearer token.
        timeout: Transport timeout in seconds.
        transport: Optional httpx transport, used by tests to stub the backend.
    """

    def __init__(
        self,
        base_url: str,
        path: str = "/api/graphql",
        token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.path = "/" + path.lstrip("/")
        self.token = token
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            transport=transport,
        )

        # Statistics
        self.total_requests = 0
        self.total_errors = 0

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Run a GraphQL query or mutation.

        Args:
            query: GraphQL document.
            variables: Variables referenced by the document.

        Returns:
            The ``data`` object of the response.

        Raises:
            RemoteExecutionError: On a non-2xx status or a response carrying GraphQL errors.
            httpx.HTTPError: On transport failure, unchanged.
        """
        body = orjson.dumps({"query": query, "variables": variables or {}})
        self.total_requests += 1
        response = await self._client.post(self.path, content=body, headers=self._headers())

        if response.status_code >= 400:
            self.total_errors += 1
            raise RemoteExecutionError(
                f"GraphQL request failed with status {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        payload = orjson.loads(response.content)
        errors = payload.get("errors")
        if errors:
            self.total_errors += 1
            messages = "; ".join(str(e.get("message", e)) for e in errors)
            raise RemoteExecutionError(f"GraphQL errors: {messages}", errors=errors, status_code=response.status_code)

        data = payload.get("data")
        if data is None:
            self.total_errors += 1
            raise RemoteExecutionError("GraphQL response carried no data", status_code=response.status_code)

        logger.debug(f"GraphQL {self.path} -> {list(data)}")
        return data

    async def close(self):
        await self._client.aclose()

    async def __aenter__(self) -> "GraphQLClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def get_stats(self) -> Dict[str, int]:
        return {
            "total_requests": self.total_requests,
            "total_errors": self.total_errors,
        }
