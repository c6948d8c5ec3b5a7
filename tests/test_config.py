"""Unit tests for conference.core.config: signing-domain and environment validation."""

import unittest

from pydantic import ValidationError

from conference.core.config import Settings


def _settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "JWT_SECRET": "participant-secret-for-tests",
        "JWT_ADMIN_SECRET": "staff-secret-for-tests",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestSigningDomainSettings(unittest.TestCase):
    def test_valid_distinct_secrets(self) -> None:
        settings = _settings()
        self.assertNotEqual(
            settings.JWT_SECRET.get_secret_value(),
            settings.JWT_ADMIN_SECRET.get_secret_value(),
        )

    def test_defaults_make_staff_tokens_shorter_lived(self) -> None:
        settings = _settings()
        self.assertLess(settings.JWT_ADMIN_EXPIRE_MINUTES, settings.JWT_EXPIRE_MINUTES)

    def test_identical_secrets_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="shared", JWT_ADMIN_SECRET="shared")

    def test_blank_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_ADMIN_SECRET="   ")

    def test_staff_lifetime_longer_than_participant_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_EXPIRE_MINUTES=60, JWT_ADMIN_EXPIRE_MINUTES=120)

    def test_non_hmac_algorithm_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_ALGORITHM="RS256")

    def test_prod_refuses_default_secrets(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, APP_ENV="prod")

    def test_prod_accepts_overridden_secrets(self) -> None:
        settings = _settings(APP_ENV="prod")
        self.assertEqual(settings.APP_ENV, "prod")


class TestOtherSettings(unittest.TestCase):
    def test_non_postgres_database_url_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mysql://localhost/conference")

    def test_default_database_url_names_the_installed_driver(self) -> None:
        default = Settings.model_fields["DATABASE_URL"].default
        self.assertTrue(default.startswith("postgresql+psycopg2://"))

    def test_bcrypt_rounds_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(BCRYPT_ROUNDS=3)
        self.assertEqual(_settings(BCRYPT_ROUNDS=10).BCRYPT_ROUNDS, 10)

    def test_payment_corrections_disabled_by_default(self) -> None:
        self.assertFalse(_settings().PAYMENT_ALLOW_CORRECTIONS)


if __name__ == "__main__":
    unittest.main()
