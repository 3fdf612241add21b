import re
from functools import lru_cache

__all__ = ["camel_to_snake"]

_re_camel_to_snake = re.compile(r"(?<=[a-z\d])([A-Z])")


@lru_cache()
def camel_to_snake(s: str) -> str:
    """firstName -> first_name

    Existing underscores are kept, so snake_case input is returned unchanged.
    """
    return _re_camel_to_snake.sub(r"_\1", s).lower()
