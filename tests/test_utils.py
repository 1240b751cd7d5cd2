"""Tests for state, nonce and PKCE generation."""

from __future__ import annotations

import base64
import hashlib

from grantflow.models import CodeChallengeMethod
from grantflow.utils import (
    CODE_VERIFIER_CHARSET,
    code_challenge,
    gen_code_verifier,
    gen_nonce,
    gen_state,
    generate_pkce_pair,
)


class TestRandomValues:
    def test_state(self):
        state = gen_state()
        assert len(state) == 10
        assert state.isalnum()

    def test_nonce(self):
        assert len(gen_nonce()) == 22
        assert gen_nonce() != gen_nonce()

    def test_code_verifier_charset(self):
        verifier = gen_code_verifier()
        assert len(verifier) == 64
        assert set(verifier) <= set(CODE_VERIFIER_CHARSET)

    def test_code_verifier_length_clamped(self):
        assert len(gen_code_verifier(10)) == 43
        assert len(gen_code_verifier(500)) == 128


class TestCodeChallenge:
    def test_rfc7636_appendix_b(self):
        verifier = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"
        assert code_challenge(verifier) == "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"

    def test_plain(self):
        assert code_challenge("abc", CodeChallengeMethod.PLAIN) == "abc"

    def test_pkce_pair(self):
        verifier, challenge = generate_pkce_pair()
        digest = hashlib.sha256(verifier.encode("ascii")).digest()
        assert challenge == base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
        assert "=" not in challenge
