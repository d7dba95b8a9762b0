"""Login use case."""

import logfire
from pydantic import BaseModel

from tune.application.usecase.base import BaseUseCase
from tune.domain.service import IdentityService, StreamTokenService
from tune.domain.value import AuthProvider, ProfileHints, ProviderCredential


class LoginRequest(BaseModel):
    """Login request carrying one provider's authentication result."""

    credential: ProviderCredential
    hints: ProfileHints | None = None  # Display data and optional id hint


class LoginResponse(BaseModel):
    """Login response."""

    token: str  # Stream endpoint token
    user_id: int
    name: str
    avatar: str
    providers: list[AuthProvider]


class LoginUseCase(BaseUseCase):
    """Use case for provider login followed by stream token issuance."""

    def __init__(
        self,
        identity_service: IdentityService,
        stream_token_service: StreamTokenService,
    ) -> None:
        """Initialize login use case.

        Args:
            identity_service: Identity resolution domain service
            stream_token_service: Stream token domain service
        """
        self.identity_service = identity_service
        self.stream_token_service = stream_token_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Resolve the login to a user and mint a stream token.

        Args:
            request: Login request with provider credential and hints

        Returns:
            Login response with stream token and user info

        Raises:
            NotFoundError: If an id hint names no stored user
            ValidationError: If the resolved user lacks a name or avatar
        """
        user = await self.identity_service.resolve_or_create(
            request.credential, request.hints
        )

        with logfire.span(
            "login_user",
            user_id=user.id,
            provider=request.credential.provider.value,
        ):
            token = self.stream_token_service.issue(user.id, user.name, user.avatar)

            return LoginResponse(
                token=token,
                user_id=user.id,
                name=user.name,
                avatar=user.avatar,
                providers=user.providers,
            )
