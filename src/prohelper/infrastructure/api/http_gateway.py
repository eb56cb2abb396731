"""HTTP implementation of the invitation gateway.

Talks to the ProHelper landing API with httpx. Each request carries the
bearer token from the injected credential provider. HTTP status codes and
transport errors are mapped to ``InvitationError`` subclasses here so that
controllers never see httpx exceptions.
"""

from collections.abc import Callable
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from prohelper.core.config import Settings
from prohelper.core.logging import get_logger
from prohelper.domain.entities import (
    AcceptResult,
    Invitation,
    InvitationFilters,
    InvitationPage,
    InvitationStats,
)
from prohelper.domain.exceptions import (
    AuthenticationRequiredError,
    InvalidInvitationRequestError,
    InvitationAlreadyProcessedError,
    InvitationError,
    InvitationExpiredError,
    InvitationNotFoundError,
    InvitationStateError,
    TransportFailureError,
)
from prohelper.domain.services.invitation_gateway import InvitationGateway
from prohelper.infrastructure.api.schemas import (
    ApiErrorResponse,
    InvitationAcceptResponse,
    InvitationDeclineRequest,
    InvitationDeclineResponse,
    InvitationListResponse,
    InvitationSchema,
    InvitationStatsResponse,
)
from prohelper.infrastructure.auth import CredentialProvider

logger = get_logger(__name__)

INVITATIONS_PATH = "/contractor-invitations"
UNEXPECTED_RESPONSE_MESSAGE = "Unexpected response from the server"

STATUS_ERRORS: dict[int, type[InvitationError]] = {
    400: InvalidInvitationRequestError,
    403: InvitationAlreadyProcessedError,
    404: InvitationNotFoundError,
    410: InvitationExpiredError,
    422: InvalidInvitationRequestError,
}

SchemaT = TypeVar("SchemaT", bound=BaseModel)
EntityT = TypeVar("EntityT")


class HttpInvitationGateway(InvitationGateway):
    """Invitation gateway backed by the ProHelper REST API.

    Example:
        async with HttpInvitationGateway.from_settings(settings, credentials) as gateway:
            page = await gateway.list_incoming(InvitationFilters())
    """

    def __init__(
        self,
        base_url: str,
        credentials: CredentialProvider,
        timeout: float = 15.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            base_url: API root, e.g. ``https://api.prohelper.pro/api/v1/landing``.
            credentials: Provider of the bearer token.
            timeout: Request timeout in seconds (ignored when ``client`` is given).
            client: Optional preconfigured httpx client. The gateway does not
                close clients it did not create.
        """
        self.credentials = credentials
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, credentials: CredentialProvider
    ) -> "HttpInvitationGateway":
        return cls(
            base_url=settings.api_base_url,
            credentials=credentials,
            timeout=settings.request_timeout_seconds,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpInvitationGateway":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def list_incoming(
        self, filters: InvitationFilters, page: int = 1
    ) -> InvitationPage:
        params = filters.to_query_params()
        if page > 1:
            params["page"] = str(page)
        body = await self._request("GET", INVITATIONS_PATH, params=params)
        return self._parse(_unwrap(body), InvitationListResponse, lambda s: s.to_entity())

    async def get_by_token(self, token: str) -> Invitation:
        body = await self._request("GET", f"{INVITATIONS_PATH}/{_quote(token)}")
        return self._parse(_unwrap(body), InvitationSchema, lambda s: s.to_entity())

    async def get_by_id(self, invitation_id: int) -> Invitation:
        body = await self._request("GET", f"{INVITATIONS_PATH}/id/{int(invitation_id)}")
        return self._parse(_unwrap(body), InvitationSchema, lambda s: s.to_entity())

    async def accept(self, token: str) -> AcceptResult:
        body = await self._request("POST", f"{INVITATIONS_PATH}/{_quote(token)}/accept")
        return self._parse(_unwrap(body), InvitationAcceptResponse, lambda s: s.to_entity())

    async def decline(self, token: str, reason: str | None = None) -> str:
        # An empty reason is sent exactly like no reason
        payload = InvitationDeclineRequest(reason=reason or None).model_dump(
            exclude_none=True
        )
        body = await self._request(
            "POST", f"{INVITATIONS_PATH}/{_quote(token)}/decline", json=payload
        )
        return self._parse(body, InvitationDeclineResponse, lambda s: s.message)

    async def get_stats(self) -> InvitationStats:
        body = await self._request("GET", f"{INVITATIONS_PATH}/stats")
        return self._parse(_unwrap(body), InvitationStatsResponse, lambda s: s.to_entity())

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            InvitationError: Mapped from the HTTP status or transport failure.
        """
        headers: dict[str, str] = {}
        token = self.credentials.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.debug("Invitation API request", method=method, path=path)
        try:
            response = await self._client.request(
                method, path, params=params, json=json, headers=headers
            )
        except httpx.TimeoutException as e:
            logger.warning("Invitation API request timed out", method=method, path=path)
            raise TransportFailureError() from e
        except httpx.HTTPError as e:
            logger.warning(
                "Invitation API transport error", method=method, path=path, error=str(e)
            )
            raise TransportFailureError() from e

        if response.status_code >= 400:
            raise self._error_for(response)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise TransportFailureError(
                UNEXPECTED_RESPONSE_MESSAGE, status_code=response.status_code
            ) from e

    def _error_for(self, response: httpx.Response) -> InvitationError:
        status_code = response.status_code
        message = _error_message(response)
        logger.warning(
            "Invitation API error response",
            path=response.request.url.path,
            status_code=status_code,
            message=message,
        )
        if status_code == 401:
            self.credentials.invalidate()
            return AuthenticationRequiredError(message, status_code=status_code)
        error_cls = STATUS_ERRORS.get(status_code, TransportFailureError)
        return error_cls(message, status_code=status_code)

    @staticmethod
    def _parse(
        payload: Any,
        schema: type[SchemaT],
        convert: Callable[[SchemaT], EntityT],
    ) -> EntityT:
        try:
            return convert(schema.model_validate(payload))
        except (ValidationError, InvitationStateError) as e:
            logger.warning(
                "Invalid invitation API payload", schema=schema.__name__, error=str(e)
            )
            raise TransportFailureError(UNEXPECTED_RESPONSE_MESSAGE) from e


def _quote(token: str) -> str:
    return quote(token, safe="")


def _unwrap(body: Any) -> Any:
    """Strip the ``{"data": ...}`` envelope if present."""
    if isinstance(body, dict) and "data" in body:
        return body["data"]
    return body


def _error_message(response: httpx.Response) -> str | None:
    """Extract the backend's message from an error body, if any."""
    try:
        error = ApiErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        return None
    return error.message or None
