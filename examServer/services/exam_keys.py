import secrets
import string

KEY_ALPHABET = string.ascii_uppercase + string.digits


def generate_key(length: int = 6) -> str:
    return "".join(secrets.choice(KEY_ALPHABET) for _ in range(length))


async def generate_unique_key(db, length: int = 6) -> str:
    """Generate a key that no stored exam uses yet."""
    key = generate_key(length)
    while await db.exams.find_one({"examKey": key}):
        key = generate_key(length)
    return key
