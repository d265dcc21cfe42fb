class RepositoryError(Exception):
    """Unexpected store failure"""


class UniqueConstraintViolation(RepositoryError):
    """A uniqueness constraint rejected the write"""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Unique constraint violated on '{field}'")
