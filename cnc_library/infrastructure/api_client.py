"""HTTP access to the CNC library backend.

Every call resolves to an APIResponse. Transport failures and error
statuses come back as APIError values instead of exceptions; the catalog
gateway decides which of them to raise.
"""

from dataclasses import dataclass, field
from typing import Any

import httpx
import structlog

logger = structlog.get_logger()


@dataclass
class APIError:
    """Failure reported by the backend or by the transport.

    Transport failures use TIMEOUT (504), REQUEST_ERROR (500) or
    INTERNAL_ERROR (500); backend errors keep the status of the response.
    """

    error_code: str
    message: str
    status_code: int
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class APIResponse:
    """Outcome of one backend call: decoded JSON on success, else an error."""

    success: bool
    data: dict[str, Any] | list[Any] | None = None
    error: APIError | None = None


class CatalogAPIClient:
    """One method per backend endpoint used by the catalog client.

    Sends the bearer token of the logged-in user when one is set.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the API client.

        Args:
            base_url: Library API base URL.
            token: Optional bearer token of the logged-in user.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def set_token(self, token: str | None) -> None:
        """Set or clear the bearer token used for subsequent requests."""
        self.token = token

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "CatalogAPIClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> APIResponse:
        """Make an API request.

        Args:
            method: HTTP method.
            path: API endpoint path.
            json: Request body as JSON.
            params: Query parameters.

        Returns:
            APIResponse with success status and data or error.
        """
        client = await self._get_client()

        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        # Filter out None params
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            logger.debug(
                "Backend request",
                method=method,
                path=path,
                has_body=json is not None,
            )

            response = await client.request(
                method=method,
                url=path,
                json=json,
                params=params,
                headers=headers,
            )

            if response.status_code >= 400:
                return APIResponse(success=False, error=_error_from_response(response))

            # Empty bodies (204 No Content, bare 200 on delete/download)
            if response.status_code == 204 or not response.content:
                return APIResponse(success=True, data=None)

            return APIResponse(success=True, data=response.json())

        except httpx.TimeoutException as e:
            logger.error("Backend request timed out", path=path, error=str(e))
            return _failure("TIMEOUT", f"Request timed out: {path}", 504)
        except httpx.RequestError as e:
            logger.error("Backend unreachable", path=path, error=str(e))
            return _failure("REQUEST_ERROR", f"Request failed: {e}", 500)
        except Exception as e:
            logger.exception("Unexpected backend client error", path=path)
            return _failure("INTERNAL_ERROR", f"Internal error: {e}", 500)

    # =========================================================================
    # Auth Endpoints
    # =========================================================================

    async def login(self, username: str, password: str) -> APIResponse:
        """Log in and obtain a bearer token.

        Args:
            username: Account name.
            password: Account password.

        Returns:
            APIResponse with userId, username, role and token.
        """
        return await self._request(
            method="POST",
            path="/auth/login",
            json={"username": username, "password": password},
        )

    # =========================================================================
    # Product Endpoints
    # =========================================================================

    async def list_products(self) -> APIResponse:
        """List every product (admin view)."""
        return await self._request(method="GET", path="/products")

    async def list_my_products(self) -> APIResponse:
        """List products owned by the logged-in user."""
        return await self._request(method="GET", path="/products/my")

    async def get_product(self, product_id: int) -> APIResponse:
        """Get a product by ID.

        Args:
            product_id: Product identifier.

        Returns:
            APIResponse with product data.
        """
        return await self._request(method="GET", path=f"/products/{product_id}")

    async def search_products(self, request: dict[str, Any]) -> APIResponse:
        """Search products, one page at a time.

        Args:
            request: Search request body (filters, sortBy, sortDir, page, size).

        Returns:
            APIResponse with content and totalElements.
        """
        return await self._request(
            method="POST",
            path="/products/search",
            json=request,
        )

    async def create_product(self, product: dict[str, Any]) -> APIResponse:
        """Create a product.

        Args:
            product: camelCase product payload.

        Returns:
            APIResponse with the created product.
        """
        return await self._request(method="POST", path="/products", json=product)

    async def update_product(
        self,
        product_id: int,
        product: dict[str, Any],
    ) -> APIResponse:
        """Replace a product's editable fields.

        Args:
            product_id: Product identifier.
            product: camelCase product payload.

        Returns:
            APIResponse with the updated product.
        """
        return await self._request(
            method="PUT",
            path=f"/products/{product_id}",
            json=product,
        )

    async def update_product_status(
        self,
        product_id: int,
        status: str,
    ) -> APIResponse:
        """Change a product's publication status.

        Args:
            product_id: Product identifier.
            status: Target publication status.

        Returns:
            APIResponse with the updated product.
        """
        return await self._request(
            method="PATCH",
            path=f"/products/{product_id}/status",
            params={"status": status},
        )

    async def record_download(self, product_id: int) -> APIResponse:
        """Record a download of a product."""
        return await self._request(
            method="POST",
            path=f"/products/{product_id}/download",
        )

    async def delete_product(self, product_id: int) -> APIResponse:
        """Delete a product."""
        return await self._request(method="DELETE", path=f"/products/{product_id}")

    async def get_filter_options(self) -> APIResponse:
        """Get the distinct values available for each search filter."""
        return await self._request(method="GET", path="/products/filters")

    # =========================================================================
    # License Endpoints
    # =========================================================================

    async def issue_trial_license(self, user_id: int, product_id: int) -> APIResponse:
        """Issue a trial license.

        Args:
            user_id: License holder.
            product_id: Licensed product.

        Returns:
            APIResponse with the issued license.
        """
        return await self._request(
            method="POST",
            path="/licenses/trial",
            params={"userId": user_id, "productId": product_id},
        )

    async def list_user_licenses(self, user_id: int) -> APIResponse:
        """List licenses held by a user."""
        return await self._request(method="GET", path=f"/licenses/user/{user_id}")


def _error_from_response(response: httpx.Response) -> APIError:
    """Build an APIError from an error response, JSON body or not."""
    try:
        error_data = response.json()
    except ValueError:
        error_data = None
    if not isinstance(error_data, dict):
        return APIError(
            error_code=f"HTTP_{response.status_code}",
            message=response.reason_phrase or "Unknown error",
            status_code=response.status_code,
        )
    return APIError(
        error_code=error_data.get("error_code")
        or error_data.get("error")
        or f"HTTP_{response.status_code}",
        message=error_data.get("message", "Unknown error"),
        status_code=response.status_code,
        details=error_data.get("details") or {},
    )


def _failure(error_code: str, message: str, status_code: int) -> APIResponse:
    return APIResponse(
        success=False,
        error=APIError(error_code=error_code, message=message, status_code=status_code),
    )
