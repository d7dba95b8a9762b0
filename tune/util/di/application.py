"""Application layer DI providers."""

from dishka import Scope, provide

from tune.application.usecase.auth import DetachProviderUseCase, LoginUseCase
from tune.domain.service import IdentityService, StreamTokenService
from tune.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        identity_service: IdentityService,
        stream_token_service: StreamTokenService,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            identity_service=identity_service,
            stream_token_service=stream_token_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_detach_provider_use_case(
        self, identity_service: IdentityService
    ) -> DetachProviderUseCase:
        """Provide detach provider use case."""
        return DetachProviderUseCase(identity_service=identity_service)
