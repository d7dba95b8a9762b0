"""Stream token domain service."""

from typing import Any

import logfire
from pydantic import SecretStr

from tune.domain.error import ValidationError
from tune.util.stream_token import create_stream_token, verify_stream_token

from .base import Service


class StreamTokenService(Service):
    """Domain service for minting stream endpoint tokens.

    Tokens bind a user's id, name and avatar. The same inputs and secret
    always produce the same token.
    """

    def __init__(self, secret: SecretStr) -> None:
        """Initialize stream token service.

        Args:
            secret: Signing secret, resolved at startup
        """
        self._secret = secret

    def issue(self, user_id: Any, name: str | None, avatar: str | None) -> str:
        """Issue a stream token for a user.

        Args:
            user_id: User ID, rendered as text before signing
            name: Display name
            avatar: Avatar URL

        Returns:
            64-character lowercase hex token

        Raises:
            ValidationError: If any input is missing or empty
        """
        user_id_str, name, avatar = self._validate(user_id, name, avatar)

        with logfire.span("stream_token_service.issue", user_id=user_id_str):
            token = create_stream_token(
                user_id_str, name, avatar, self._secret.get_secret_value()
            )
            logfire.info("Stream token issued", user_id=user_id_str)
            return token

    def verify(
        self, token: str, user_id: Any, name: str | None, avatar: str | None
    ) -> bool:
        """Verify a stream token against user attributes.

        Args:
            token: Token presented by the client
            user_id: User ID
            name: Display name
            avatar: Avatar URL

        Returns:
            True if the token matches

        Raises:
            ValidationError: If any attribute is missing or empty
        """
        user_id_str, name, avatar = self._validate(user_id, name, avatar)
        valid = verify_stream_token(
            token, user_id_str, name, avatar, self._secret.get_secret_value()
        )
        if not valid:
            logfire.warn("Stream token rejected", user_id=user_id_str)
        return valid

    @staticmethod
    def _validate(
        user_id: Any, name: str | None, avatar: str | None
    ) -> tuple[str, str, str]:
        """Check inputs in order and return them in canonical form."""
        user_id_str = "" if user_id is None else str(user_id)
        for field, value in (("id", user_id_str), ("name", name), ("avatar", avatar)):
            if not value:
                raise ValidationError(field)
        return user_id_str, name, avatar  # type: ignore[return-value]
