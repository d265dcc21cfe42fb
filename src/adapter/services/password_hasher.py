import bcrypt

from src.app.services.password_hasher import IPasswordHasher


class BcryptPasswordHasher(IPasswordHasher):
    """bcrypt with a configurable cost factor"""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._dummy_hash = self.hash("dummy_password")

    def hash(self, plaintext: str) -> str:
        return bcrypt.hashpw(plaintext.encode(), bcrypt.gensalt(self.rounds)).decode()

    def verify(self, plaintext: str, digest: str) -> bool:
        return bcrypt.checkpw(plaintext.encode(), digest.encode())

    def verify_dummy(self, plaintext: str) -> None:
        bcrypt.checkpw(plaintext.encode(), self._dummy_hash.encode())
