import itertools
import secrets
import time

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_counter = itertools.count()


def _base36(value: int) -> str:
    digits = []
    while True:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
        if value == 0:
            return "".join(reversed(digits))


def new_id() -> str:
    """Return an opaque id, unique for the life of the process.

    Random part + nanosecond clock + per-process counter, so two ids issued in
    the same clock tick still differ.
    """
    random_part = _base36(secrets.randbits(64)).rjust(13, "0")
    return f"{random_part}{_base36(time.time_ns())}{_base36(next(_counter))}"
