from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.exceptions import AuthenticationError


class HRAuthService:
    """Use case: unlock the HR dashboard with the shared HR password."""

    def __init__(self, password_hash: str):
        self._password_hash = password_hash

    @classmethod
    def from_plaintext(cls, password: str) -> "HRAuthService":
        return cls(generate_password_hash(password))

    def authenticate(self, password: str) -> None:
        if not password:
            raise AuthenticationError("Invalid password")

        try:
            ok = check_password_hash(self._password_hash, password)
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid password")
