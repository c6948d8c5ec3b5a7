"""Unit tests for conference.core.tokens: dual-domain issuance, verification and authorize()."""

import base64
import json
import unittest
from datetime import UTC, datetime, timedelta
from types import SimpleNamespace
from unittest import mock

import jwt

from conference.core.config import get_settings
from conference.core.errors import AuthenticationFailure
from conference.core.tokens import (
    TokenDomain,
    authorize,
    issue_token,
    verify_participant_token,
    verify_staff_token,
    verify_token,
)
from conference.schemas.auth import ParticipantClaims, StaffClaims


def _participant(role: str = "participant") -> SimpleNamespace:
    return SimpleNamespace(id=7, email="ada@example.com", role=role)


def _staff(role: str = "admin") -> SimpleNamespace:
    return SimpleNamespace(id=3, email="admin@example.com", role=role)


class TestIssueAndVerifySameDomain(unittest.TestCase):
    """A token verifies in the domain it was issued for and returns typed claims."""

    def test_participant_round_trip(self) -> None:
        token = issue_token(_participant("reviewer"), TokenDomain.PARTICIPANT)
        claims = verify_token(token, TokenDomain.PARTICIPANT)
        self.assertIsInstance(claims, ParticipantClaims)
        self.assertEqual(claims.id, 7)
        self.assertEqual(claims.email, "ada@example.com")
        self.assertEqual(claims.role, "reviewer")
        self.assertEqual(claims.domain, "participant")

    def test_staff_round_trip(self) -> None:
        token = issue_token(_staff("moderator"), TokenDomain.STAFF)
        claims = verify_staff_token(token)
        self.assertIsInstance(claims, StaffClaims)
        self.assertEqual(claims.id, 3)
        self.assertEqual(claims.role, "moderator")

    def test_token_has_three_base64url_parts(self) -> None:
        token = issue_token(_participant(), TokenDomain.PARTICIPANT)
        self.assertEqual(len(token.split(".")), 3)

    def test_staff_tokens_expire_sooner_than_participant_tokens(self) -> None:
        now = datetime.now(UTC)
        p_claims = verify_participant_token(issue_token(_participant(), TokenDomain.PARTICIPANT, now=now))
        s_claims = verify_staff_token(issue_token(_staff(), TokenDomain.STAFF, now=now))
        settings = get_settings()
        self.assertEqual(
            p_claims.expires_at - p_claims.issued_at,
            timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
        )
        self.assertEqual(
            s_claims.expires_at - s_claims.issued_at,
            timedelta(minutes=settings.JWT_ADMIN_EXPIRE_MINUTES),
        )
        self.assertLess(s_claims.expires_at, p_claims.expires_at)


class TestDomainSeparation(unittest.TestCase):
    """Tokens never cross-validate between participant and staff domains."""

    def test_participant_token_rejected_by_staff_domain(self) -> None:
        token = issue_token(_participant(), TokenDomain.PARTICIPANT)
        with self.assertRaises(AuthenticationFailure):
            verify_token(token, TokenDomain.STAFF)

    def test_staff_token_rejected_by_participant_domain(self) -> None:
        token = issue_token(_staff("super-admin"), TokenDomain.STAFF)
        with self.assertRaises(AuthenticationFailure):
            verify_participant_token(token)

    def test_forged_staff_claims_signed_with_participant_secret_rejected(self) -> None:
        """A leaked participant secret cannot mint staff tokens, even with a staff role and audience."""
        settings = get_settings()
        now = datetime.now(UTC)
        forged = jwt.encode(
            {
                "sub": "7",
                "email": "ada@example.com",
                "role": "super-admin",
                "aud": "staff",
                "iat": now,
                "exp": now + timedelta(minutes=5),
            },
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        with self.assertRaises(AuthenticationFailure):
            verify_staff_token(forged)

    def test_staff_secret_with_participant_audience_rejected(self) -> None:
        settings = get_settings()
        now = datetime.now(UTC)
        token = jwt.encode(
            {
                "sub": "3",
                "email": "admin@example.com",
                "role": "admin",
                "aud": "participant",
                "iat": now,
                "exp": now + timedelta(minutes=5),
            },
            settings.JWT_ADMIN_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        with self.assertRaises(AuthenticationFailure):
            verify_staff_token(token)

    def test_issue_rejects_role_from_other_domain(self) -> None:
        with self.assertRaises(ValueError):
            issue_token(_participant("admin"), TokenDomain.PARTICIPANT)
        with self.assertRaises(ValueError):
            issue_token(_staff("participant"), TokenDomain.STAFF)


class TestExpiry(unittest.TestCase):
    """Tokens at or past their expiry are always rejected."""

    def test_expired_participant_token_rejected(self) -> None:
        settings = get_settings()
        issued = datetime.now(UTC) - timedelta(minutes=settings.JWT_EXPIRE_MINUTES + 1)
        token = issue_token(_participant(), TokenDomain.PARTICIPANT, now=issued)
        with self.assertRaises(AuthenticationFailure):
            verify_participant_token(token)

    def test_token_at_expiry_instant_rejected(self) -> None:
        settings = get_settings()
        issued = datetime.now(UTC) - timedelta(minutes=settings.JWT_ADMIN_EXPIRE_MINUTES)
        token = issue_token(_staff(), TokenDomain.STAFF, now=issued)
        with self.assertRaises(AuthenticationFailure):
            verify_staff_token(token)

    def test_token_just_before_expiry_accepted(self) -> None:
        settings = get_settings()
        issued = datetime.now(UTC) - timedelta(minutes=settings.JWT_ADMIN_EXPIRE_MINUTES) + timedelta(minutes=1)
        token = issue_token(_staff(), TokenDomain.STAFF, now=issued)
        self.assertEqual(verify_staff_token(token).id, 3)


class TestMalformedTokens(unittest.TestCase):
    def test_garbage_rejected(self) -> None:
        with self.assertRaises(AuthenticationFailure):
            verify_participant_token("not.a.jwt")

    def test_empty_rejected(self) -> None:
        with self.assertRaises(AuthenticationFailure):
            verify_participant_token("")

    def test_tampered_payload_rejected(self) -> None:
        token = issue_token(_participant(), TokenDomain.PARTICIPANT)
        header, payload, signature = token.split(".")
        claims = json.loads(base64.urlsafe_b64decode(payload + "=" * (-len(payload) % 4)))
        claims["role"] = "committee"
        forged_payload = base64.urlsafe_b64encode(json.dumps(claims).encode()).rstrip(b"=").decode()
        tampered = f"{header}.{forged_payload}.{signature}"
        with self.assertRaises(AuthenticationFailure):
            verify_participant_token(tampered)

    def test_missing_required_claim_rejected(self) -> None:
        settings = get_settings()
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "7", "role": "participant", "aud": "participant", "iat": now, "exp": now + timedelta(minutes=5)},
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        with self.assertRaises(AuthenticationFailure):
            verify_participant_token(token)

    def test_unknown_role_in_signed_token_rejected(self) -> None:
        settings = get_settings()
        now = datetime.now(UTC)
        token = jwt.encode(
            {
                "sub": "7",
                "email": "ada@example.com",
                "role": "root",
                "aud": "participant",
                "iat": now,
                "exp": now + timedelta(minutes=5),
            },
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        with self.assertRaises(AuthenticationFailure):
            verify_participant_token(token)

    def test_none_algorithm_rejected(self) -> None:
        token = jwt.encode(
            {"sub": "3", "email": "a@example.com", "role": "admin", "aud": "staff"},
            key=None,
            algorithm="none",
        )
        with self.assertRaises(AuthenticationFailure):
            verify_staff_token(token)


class TestTypedShortcuts(unittest.TestCase):
    """The typed shortcuts reject claims of the wrong variant even if verification returned them."""

    def test_participant_shortcut_rejects_staff_claims(self) -> None:
        token = issue_token(_staff(), TokenDomain.STAFF)
        staff_claims = verify_staff_token(token)
        with mock.patch("conference.core.tokens.verify_token", return_value=staff_claims):
            with self.assertRaises(AuthenticationFailure):
                verify_participant_token(token)

    def test_staff_shortcut_rejects_participant_claims(self) -> None:
        token = issue_token(_participant(), TokenDomain.PARTICIPANT)
        participant_claims = verify_participant_token(token)
        with mock.patch("conference.core.tokens.verify_token", return_value=participant_claims):
            with self.assertRaises(AuthenticationFailure):
                verify_staff_token(token)


class TestAuthorize(unittest.TestCase):
    """authorize() is a pure membership test on the claims' role."""

    def test_role_in_allowed_set(self) -> None:
        claims = verify_staff_token(issue_token(_staff("admin"), TokenDomain.STAFF))
        self.assertTrue(authorize(claims, frozenset({"admin", "super-admin"})))

    def test_moderator_not_in_editor_set(self) -> None:
        claims = verify_staff_token(issue_token(_staff("moderator"), TokenDomain.STAFF))
        self.assertFalse(authorize(claims, frozenset({"admin", "super-admin"})))

    def test_empty_allowed_set(self) -> None:
        claims = verify_participant_token(issue_token(_participant(), TokenDomain.PARTICIPANT))
        self.assertFalse(authorize(claims, frozenset()))


if __name__ == "__main__":
    unittest.main()
