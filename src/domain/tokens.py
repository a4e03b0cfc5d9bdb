"""
Bearer token issuance and parsing.

Tokens are placeholder identity carriers: "demo::<email>", with no
signature, expiry or revocation. Replace with real sessions before
relying on them for anything sensitive.
"""

SCHEME = "Bearer "
TOKEN_PREFIX = "demo::"


def make_token(email: str) -> str:
    """Issue the token identifying email."""
    return f"{TOKEN_PREFIX}{email}"


def parse_token(authorization: str | None) -> str | None:
    """
    Extract the email from an Authorization header value.

    Only "Bearer demo::<email>" is accepted; anything else yields None.
    """
    if not authorization or not authorization.startswith(SCHEME):
        return None
    token = authorization[len(SCHEME) :]
    if not token.startswith(TOKEN_PREFIX):
        return None
    return token[len(TOKEN_PREFIX) :] or None
