"""Login and registration screens."""

from __future__ import annotations

from craftly.client.models import SessionUser
from craftly.client.repositories.auth import AuthRepository
from craftly.client.viewmodels.state import Error, Loading, Success, UiState, ViewModel
from craftly.domain.validators import validate_email, validate_name, validate_password

DESTINATION_ADMIN = "admin"
DESTINATION_SELLER = "seller"
DESTINATION_HOME = "home"


def destination_for(user: SessionUser) -> str:
    """Screen to open after sign-in: admins first, then sellers, else the marketplace."""
    if user.is_admin:
        return DESTINATION_ADMIN
    if user.is_seller:
        return DESTINATION_SELLER
    return DESTINATION_HOME


class LoginViewModel(ViewModel):
    def __init__(self, repository: AuthRepository) -> None:
        super().__init__()
        self._repository = repository

    async def login(self, email: str, password: str) -> UiState:
        error = validate_email(email.strip()) or validate_password(password)
        if error:
            self._set_state(Error(error))
            return self.state
        self._set_state(Loading())
        return self._apply(await self._repository.sign_in(email.strip(), password))

    @property
    def destination(self) -> str | None:
        if isinstance(self.state, Success):
            return destination_for(self.state.data)
        return None


class RegisterViewModel(ViewModel):
    """Success carries a SignUpResult so the screen can show the recovery codes."""

    def __init__(self, repository: AuthRepository) -> None:
        super().__init__()
        self._repository = repository

    async def register(
        self, full_name: str, email: str, password: str, confirm_password: str
    ) -> UiState:
        error = (
            validate_name(full_name.strip(), "Full name")
            or validate_email(email.strip())
            or validate_password(password)
        )
        if error is None and password != confirm_password:
            error = "Passwords do not match"
        if error:
            self._set_state(Error(error))
            return self.state
        self._set_state(Loading())
        return self._apply(
            await self._repository.sign_up(full_name.strip(), email.strip(), password)
        )
