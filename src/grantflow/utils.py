"""Random values for the authorization-code grant: state, OIDC nonce and PKCE.

The engine never stores these.  Callers generate them before building the
authorization URL, keep them (typically in the user's session keyed by
provider name) and replay them into the callback handling.
"""

from __future__ import annotations

import base64
import hashlib
import secrets
import string

from grantflow.models import CodeChallengeMethod

# RFC 7636 section 4.1
CODE_VERIFIER_LEN_MIN = 43
CODE_VERIFIER_LEN_MAX = 128
CODE_VERIFIER_CHARSET = string.ascii_letters + string.digits + "-._~"

_ALPHANUMERIC = string.ascii_letters + string.digits


def _random_string(alphabet: str, length: int) -> str:
    return "".join(secrets.choice(alphabet) for _ in range(length))


def gen_state(length: int = 10) -> str:
    """Return a random alphanumeric ``state`` value."""
    return _random_string(_ALPHANUMERIC, length)


def gen_nonce(length: int = 22) -> str:
    """Return a random alphanumeric OIDC ``nonce`` value."""
    return _random_string(_ALPHANUMERIC, length)


def gen_code_verifier(length: int = 64) -> str:
    """Return a PKCE code verifier.

    *length* is clamped to the 43..128 range allowed by RFC 7636.
    """
    length = max(CODE_VERIFIER_LEN_MIN, min(CODE_VERIFIER_LEN_MAX, length))
    return _random_string(CODE_VERIFIER_CHARSET, length)


def code_challenge(
    code_verifier: str, method: CodeChallengeMethod = CodeChallengeMethod.S256
) -> str:
    """Derive the PKCE code challenge for *code_verifier*.

    Args:
        code_verifier: The verifier the client keeps.
        method: ``S256`` (base64url of the SHA-256 digest, unpadded) or
            ``plain`` (the verifier itself).

    Returns:
        The ``code_challenge`` value to put in the authorization URL.
    """
    if method is CodeChallengeMethod.PLAIN:
        return code_verifier
    digest = hashlib.sha256(code_verifier.encode("ascii")).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


def generate_pkce_pair(length: int = 64) -> tuple[str, str]:
    """Generate a PKCE code_verifier and code_challenge (S256).

    Returns:
        A tuple of ``(code_verifier, code_challenge)``.
    """
    verifier = gen_code_verifier(length)
    return verifier, code_challenge(verifier)
