"""GraphQL transport: one POST per query, no retries, no shared state."""

import logging
from typing import Any, Dict, List, NamedTuple, Optional

import httpx

from app.config import Settings
from app.services.errors import SchemaMismatchError, TransportError

logger = logging.getLogger(__name__)

# Error fragments GraphQL emits when the query names fields or types the
# configured space does not define (usually the wrong space or environment).
_SCHEMA_MISMATCH_MARKERS = ("Cannot query field", "Unknown type")


class GraphQLResult(NamedTuple):
    data: Dict[str, Any]
    errors: List[str]


async def execute_query(
    settings: Settings,
    query: str,
    variables: Dict[str, str],
    client: Optional[httpx.AsyncClient] = None,
) -> GraphQLResult:
    """POST *query* with *variables* to the configured GraphQL endpoint.

    A fresh :class:`httpx.AsyncClient` is opened per call unless the caller
    supplies its own *client*, which is then left open.

    Raises:
        ConfigurationError: if the space ID or access token is missing.
        TransportError: on network errors, timeouts, non-2xx responses, or a
            malformed response envelope.
        SchemaMismatchError: if GraphQL rejects fields or types of the query.
    """
    endpoint = settings.endpoint
    headers = {
        "Authorization": settings.authorization,
        "Content-Type": "application/json",
        "User-Agent": settings.user_agent,
    }
    payload = {"query": query, "variables": variables}

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.request_timeout) as owned_client:
                response = await owned_client.post(endpoint, json=payload, headers=headers)
        else:
            response = await client.post(endpoint, json=payload, headers=headers)
    except httpx.TimeoutException as exc:
        raise TransportError("The content API timed out.") from exc
    except httpx.HTTPError as exc:
        raise TransportError(f"Error contacting the content API: {exc}") from exc

    return parse_envelope(response)


def parse_envelope(response: httpx.Response) -> GraphQLResult:
    """Validate an HTTP response and unwrap its ``{data, errors}`` envelope.

    GraphQL errors that arrive alongside usable ``data`` are logged and
    returned, never raised, so the decoder can salvage what was delivered.
    """
    if not response.is_success:
        raise TransportError(
            f"Content API returned HTTP {response.status_code}.",
            status_code=response.status_code,
        )

    try:
        body = response.json()
    except ValueError as exc:
        raise TransportError("Content API returned a malformed JSON body.") from exc

    if not isinstance(body, dict):
        raise TransportError("Content API returned an unexpected response envelope.")

    messages = _error_messages(body.get("errors"))
    if any(marker in message for message in messages for marker in _SCHEMA_MISMATCH_MARKERS):
        raise SchemaMismatchError(messages)

    data = body.get("data")
    if not isinstance(data, dict):
        detail = "; ".join(messages) if messages else "No data in response."
        raise TransportError(f"Content API returned no data: {detail}")

    if messages:
        logger.warning("GraphQL returned partial errors: %s", "; ".join(messages))

    return GraphQLResult(data=data, errors=messages)


def _error_messages(errors: Any) -> List[str]:
    if not isinstance(errors, list):
        return []
    messages = []
    for error in errors:
        if isinstance(error, dict) and error.get("message") is not None:
            messages.append(str(error["message"]))
    return messages
