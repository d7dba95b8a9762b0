"""Stream token utilities.

A stream token is the HMAC-SHA256 of the user's id, name and avatar,
keyed with the application secret and hex encoded. The receiving party
verifies it by recomputing the MAC over the same tuple.
"""

import hashlib
import hmac

TOKEN_LENGTH = 64  # hex characters of a SHA-256 MAC


def create_stream_token(user_id: int | str, name: str, avatar: str, secret: str) -> str:
    """Create a stream token for the user.

    Args:
        user_id: User ID (numeric ids render as decimal text)
        name: Display name
        avatar: Avatar URL
        secret: Signing secret

    Returns:
        Lowercase hex MAC, 64 characters
    """
    mac = hmac.new(secret.encode("utf-8"), digestmod=hashlib.sha256)
    mac.update(str(user_id).encode("utf-8"))
    mac.update(name.encode("utf-8"))
    mac.update(avatar.encode("utf-8"))
    return mac.hexdigest()


def verify_stream_token(
    token: str, user_id: int | str, name: str, avatar: str, secret: str
) -> bool:
    """Check a stream token against the user attributes it should bind.

    Comparison runs in constant time.

    Args:
        token: Token presented by the client
        user_id: User ID
        name: Display name
        avatar: Avatar URL
        secret: Signing secret

    Returns:
        True if the token was produced for exactly these attributes
    """
    expected = create_stream_token(user_id, name, avatar, secret)
    return hmac.compare_digest(expected.encode("ascii"), token.encode("utf-8"))
