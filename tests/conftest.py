"""Test configuration and fixtures."""

from tune.domain.value import AuthProvider, ProviderCredential

TEST_TOKEN_SECRET = "test-secret"


def make_credential(
    provider: AuthProvider = AuthProvider.YOUTUBE,
    client_id: str = "yt1",
    **fields,
) -> ProviderCredential:
    """Helper function to build provider credentials for tests.

    Args:
        provider: Provider that issued the credential
        client_id: Provider client id
        **fields: Token fields to override

    Returns:
        ProviderCredential with placeholder tokens
    """
    defaults = {
        "access_token": f"{client_id}-access",
        "refresh_token": f"{client_id}-refresh",
        "refresh_token_expiry": 1700000000,
    }
    defaults.update(fields)
    return ProviderCredential(provider=provider, client_id=client_id, **defaults)
