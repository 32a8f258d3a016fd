import secrets
import string
import time

BASE36_ALPHABET = string.digits + string.ascii_lowercase


class UniqueIdGenerator:
    @staticmethod
    def current_millis() -> int:
        return int(time.time() * 1000)

    @staticmethod
    def random_base36(length: int = 9) -> str:
        return "".join(secrets.choice(BASE36_ALPHABET) for _ in range(length))

    @staticmethod
    def generate_reference() -> str:
        """
        Generate a transaction reference with format: ref_{unixMillis}_{random}
        where random is 9 base36 characters.
        """
        return f"ref_{UniqueIdGenerator.current_millis()}_{UniqueIdGenerator.random_base36()}"
