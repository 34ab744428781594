"""Typed gateway over the library API client.

Turns APIResponse values into domain objects and failed responses into
CatalogAPIError, which is what the application layer catches.
"""

from typing import Any, TypeVar

import pydantic
import structlog

from cnc_library.domain import (
    AuthUser,
    CatalogAPIError,
    CatalogEntry,
    FilterCriteria,
    FilterOptions,
    License,
    PublicationStatus,
    SearchPage,
)
from cnc_library.infrastructure.api_client import APIResponse, CatalogAPIClient
from cnc_library.infrastructure.schemas import (
    AuthUserSchema,
    FilterOptionsSchema,
    LicenseSchema,
    ProductSchema,
    SearchResponseSchema,
)

logger = structlog.get_logger()

M = TypeVar("M", bound=pydantic.BaseModel)


class CatalogGateway:
    """Domain-typed access to the library backend.

    Implements the CatalogSearch protocol used by the incremental loader.
    """

    def __init__(self, client: CatalogAPIClient) -> None:
        self.client = client

    # =========================================================================
    # Search
    # =========================================================================

    async def search(
        self,
        criteria: FilterCriteria,
        page: int,
        size: int,
    ) -> SearchPage:
        """Fetch one page of entries matching criteria.

        Args:
            criteria: Filters and sort order.
            page: Zero-based page index.
            size: Page size.

        Returns:
            The page and the total match count.

        Raises:
            CatalogAPIError: If the request failed or the payload is malformed.
        """
        response = await self.client.search_products(
            criteria.to_search_request(page=page, size=size)
        )
        data = _unwrap(response, "search products")
        return _parse(SearchResponseSchema, data).to_domain()

    async def filter_options(self) -> FilterOptions:
        """Fetch the distinct values available for each filter."""
        data = _unwrap(await self.client.get_filter_options(), "load filters")
        return _parse(FilterOptionsSchema, data).to_domain()

    # =========================================================================
    # Products
    # =========================================================================

    async def get_product(self, product_id: int) -> CatalogEntry:
        """Fetch a single product."""
        data = _unwrap(await self.client.get_product(product_id), "load product")
        return _parse(ProductSchema, data).to_domain()

    async def all_products(self) -> list[CatalogEntry]:
        """Fetch every product."""
        data = _unwrap(await self.client.list_products(), "load products")
        return _parse_products(data)

    async def my_products(self) -> list[CatalogEntry]:
        """Fetch the logged-in user's products."""
        data = _unwrap(await self.client.list_my_products(), "load products")
        return _parse_products(data)

    async def create_product(self, payload: dict[str, Any]) -> CatalogEntry | None:
        """Create a product; returns it when the backend echoes it back."""
        data = _unwrap(await self.client.create_product(payload), "create product")
        return _parse(ProductSchema, data).to_domain() if data else None

    async def update_product(
        self,
        product_id: int,
        payload: dict[str, Any],
    ) -> CatalogEntry | None:
        """Update a product; returns it when the backend echoes it back."""
        data = _unwrap(
            await self.client.update_product(product_id, payload),
            "update product",
        )
        return _parse(ProductSchema, data).to_domain() if data else None

    async def update_status(
        self,
        product_id: int,
        status: PublicationStatus,
    ) -> None:
        """Change a product's publication status."""
        _unwrap(
            await self.client.update_product_status(product_id, status.value),
            "update status",
        )

    async def record_download(self, product_id: int) -> None:
        """Record a download."""
        _unwrap(await self.client.record_download(product_id), "record download")

    async def delete_product(self, product_id: int) -> None:
        """Delete a product."""
        _unwrap(await self.client.delete_product(product_id), "delete product")

    # =========================================================================
    # Auth & Licenses
    # =========================================================================

    async def login(self, username: str, password: str) -> AuthUser:
        """Log in; returns the authenticated user with its token."""
        data = _unwrap(await self.client.login(username, password), "log in")
        return _parse(AuthUserSchema, data).to_domain()

    async def issue_trial(self, user_id: int, product_id: int) -> License | None:
        """Issue a trial license."""
        data = _unwrap(
            await self.client.issue_trial_license(user_id, product_id),
            "issue trial license",
        )
        return _parse(LicenseSchema, data).to_domain() if data else None

    async def user_licenses(self, user_id: int) -> list[License]:
        """List a user's licenses."""
        data = _unwrap(await self.client.list_user_licenses(user_id), "load licenses")
        if not isinstance(data, list):
            raise CatalogAPIError("Expected a list of licenses", "MALFORMED_RESPONSE")
        return [_parse(LicenseSchema, item).to_domain() for item in data]


def _unwrap(response: APIResponse, action: str) -> Any:
    """Return response data or raise CatalogAPIError."""
    if response.success:
        return response.data
    error = response.error
    if error is None:
        raise CatalogAPIError(f"Failed to {action}")
    logger.warning(
        "Backend call failed",
        action=action,
        error_code=error.error_code,
        status_code=error.status_code,
    )
    raise CatalogAPIError(
        f"Failed to {action}: {error.message}",
        error_code=error.error_code,
        status_code=error.status_code,
        details=error.details,
    )


def _parse(schema: type[M], data: Any) -> M:
    """Validate a payload, raising CatalogAPIError when it is malformed."""
    try:
        return schema.model_validate(data)
    except pydantic.ValidationError as e:
        logger.warning("Malformed backend payload", schema=schema.__name__)
        raise CatalogAPIError(
            f"Malformed {schema.__name__} payload",
            error_code="MALFORMED_RESPONSE",
            details={"errors": e.errors(include_url=False)},
        ) from e


def _parse_products(data: Any) -> list[CatalogEntry]:
    if not isinstance(data, list):
        raise CatalogAPIError("Expected a list of products", "MALFORMED_RESPONSE")
    return [_parse(ProductSchema, item).to_domain() for item in data]
