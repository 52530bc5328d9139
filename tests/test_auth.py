"""
Auth servis - registracija i login.
"""
import pytest

from civichub.services import AuthError, ConflictError, ValidationFailedError


class TestRegister:

    def test_username_is_unique_ignoring_case(self, services):
        services.auth.register('Alice', 'secret123', 'Alice', 'alice@example.com')
        with pytest.raises(ConflictError):
            services.auth.register('alice', 'secret123', 'Alice Two', 'alice2@example.com')

    def test_email_is_stored_lowercase(self, services):
        user = services.auth.register('bob', 'secret123', 'Bob', 'Bob@Example.com')
        assert user.email == 'bob@example.com'
        with pytest.raises(ConflictError):
            services.auth.register('bobby', 'secret123', 'Bob', 'BOB@example.com')

    def test_short_password(self, services):
        with pytest.raises(ValidationFailedError):
            services.auth.register('carol', '123', 'Carol', 'carol@example.com')


class TestLogin:

    def test_login_ignores_username_case(self, app, services):
        services.auth.register('Alice', 'secret123', 'Alice', 'alice@example.com')
        with app.app_context():
            user, token = services.auth.login('ALICE', 'secret123')
        assert user.username == 'Alice'
        assert token

    def test_wrong_password(self, app, services):
        services.auth.register('Alice', 'secret123', 'Alice', 'alice@example.com')
        with app.app_context():
            with pytest.raises(AuthError):
                services.auth.login('alice', 'wrong-password')
