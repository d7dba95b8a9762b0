"""Domain layer DI providers."""

from dishka import Scope, provide

from tune.config import Settings
from tune.domain.repository import UserRepository
from tune.domain.service import IdentityService, StreamTokenService
from tune.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Services that touch repositories are REQUEST-scoped to align with the
    session lifecycle. The stream token service is stateless and lives for
    the whole application.
    """

    scope = Scope.REQUEST

    @provide
    def get_identity_service(
        self, user_repository: UserRepository, settings: Settings
    ) -> IdentityService:
        """Provide identity resolution domain service."""
        return IdentityService(
            user_repository=user_repository,
            max_resolve_attempts=settings.identity.max_resolve_attempts,
        )

    @provide(scope=Scope.APP)
    def get_stream_token_service(self, settings: Settings) -> StreamTokenService:
        """Provide stream token domain service."""
        return StreamTokenService(secret=settings.token_secret)
