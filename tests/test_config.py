"""Settings validation."""

import unittest

from pydantic import ValidationError

from app.core.config import Settings


class TestSettings(unittest.TestCase):
    def test_secrets_must_differ(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_ACCESS_SECRET="same", JWT_REFRESH_SECRET="same", _env_file=None)

    def test_rejects_unknown_database_scheme(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="mysql://localhost/db", _env_file=None)

    def test_access_lifetime_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_ACCESS_EXPIRE_MINUTES=0, _env_file=None)

    def test_wildcard_origin_dropped_in_prod(self) -> None:
        prod = Settings(APP_ENV="prod", CORS_ORIGINS="*, https://app.example.com", _env_file=None)
        self.assertEqual(prod.cors_origins_list, ["https://app.example.com"])
        dev = Settings(APP_ENV="dev", CORS_ORIGINS="*", _env_file=None)
        self.assertEqual(dev.cors_origins_list, ["*"])


if __name__ == "__main__":
    unittest.main()
