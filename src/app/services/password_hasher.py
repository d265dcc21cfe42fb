from abc import ABC, abstractmethod


class IPasswordHasher(ABC):
    """One-way password hashing with per-hash salt"""

    @abstractmethod
    def hash(self, plaintext: str) -> str:
        pass

    @abstractmethod
    def verify(self, plaintext: str, digest: str) -> bool:
        """Constant-time check. A malformed digest raises ValueError."""
        pass

    @abstractmethod
    def verify_dummy(self, plaintext: str) -> None:
        """Spend the same work as verify() when there is no digest to check"""
        pass
