from passlib.hash import bcrypt

from ideaboard.errors import ValidationError

BCRYPT_ROUNDS = 10

_bcrypt = bcrypt.using(rounds=BCRYPT_ROUNDS)


def hash_password(plaintext: str) -> str:
    """Salted bcrypt hash of ``plaintext``. The result embeds salt and cost."""
    if not plaintext:
        raise ValidationError("Password must not be blank")
    return _bcrypt.hash(plaintext)


def verify_password(plaintext: str, password_hash: str) -> bool:
    if not plaintext or not password_hash:
        return False
    try:
        return _bcrypt.verify(plaintext, password_hash)
    except ValueError:
        # Not a bcrypt hash
        return False
