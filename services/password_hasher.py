"""Password hashing backed by werkzeug.security."""

from werkzeug.security import check_password_hash, generate_password_hash


class PasswordHasher:
    """Salted one-way hashing; the same input never hashes to the same value twice."""

    def __init__(self, method: str = "scrypt"):
        self.method = method

    def hash(self, plaintext: str) -> str:
        return generate_password_hash(plaintext, method=self.method)

    def verify(self, hashed: str, plaintext: str) -> bool:
        return check_password_hash(hashed, plaintext)
