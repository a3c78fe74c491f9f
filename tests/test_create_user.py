"""Unit tests for the create_user CLI (argument checks and delegation to AuthService)."""

import unittest
from unittest.mock import MagicMock, patch

from app.core.errors import DuplicateCredentialError
from app.scripts import create_user


class TestCreateUserCli(unittest.TestCase):
    @patch("app.scripts.create_user.SessionLocal")
    @patch("app.scripts.create_user.AuthService")
    def test_registers_user(self, mock_service: MagicMock, mock_session: MagicMock) -> None:
        mock_service.return_value.register.return_value = MagicMock(role="admin")
        code = create_user.main(["admin@example.com", "Site Admin", "secret"])
        self.assertEqual(code, 0)
        mock_service.return_value.register.assert_called_once_with(
            mock_session.return_value,
            email="admin@example.com",
            name="Site Admin",
            password="secret",
        )
        mock_session.return_value.close.assert_called_once()

    @patch("app.scripts.create_user.SessionLocal")
    @patch("app.scripts.create_user.AuthService")
    def test_duplicate_email_fails(self, mock_service: MagicMock, mock_session: MagicMock) -> None:
        mock_service.return_value.register.side_effect = DuplicateCredentialError("Email already exists")
        code = create_user.main(["admin@example.com", "Site Admin", "secret"])
        self.assertEqual(code, 1)
        mock_session.return_value.close.assert_called_once()

    @patch("app.scripts.create_user.SessionLocal")
    def test_invalid_email(self, mock_session: MagicMock) -> None:
        self.assertEqual(create_user.main(["not-an-email", "Name", "secret"]), 1)
        mock_session.assert_not_called()


if __name__ == "__main__":
    unittest.main()
