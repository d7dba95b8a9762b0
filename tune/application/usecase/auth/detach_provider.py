"""Detach provider use case."""

from pydantic import BaseModel

from tune.application.usecase.base import BaseUseCase
from tune.domain.service import IdentityService
from tune.domain.value import AuthProvider, UserId


class DetachProviderRequest(BaseModel):
    """Request to unlink a provider from a user."""

    user_id: int
    provider: AuthProvider


class DetachProviderResponse(BaseModel):
    """Detach provider response."""

    user_id: int
    providers: list[AuthProvider]  # Providers still linked


class DetachProviderUseCase(BaseUseCase):
    """Use case for removing a provider's credentials from a user."""

    def __init__(self, identity_service: IdentityService) -> None:
        self.identity_service = identity_service

    async def execute(self, request: DetachProviderRequest) -> DetachProviderResponse:
        """Execute detach provider.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = await self.identity_service.get_by_id(UserId(request.user_id))
        updated = await self.identity_service.detach_provider(user, request.provider)

        return DetachProviderResponse(user_id=updated.id, providers=updated.providers)
