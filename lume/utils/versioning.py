import typing

from lume.constants import INITIAL_VERSION

__all__ = ['next_version']


def next_version(current: typing.Optional[str]) -> str:
    """
    Returns the version that follows ``current``.

    Versions are stored as base-10 strings. Anything that can't be parsed
    into a positive integer is treated as the initial version, so the
    function never fails.
    """
    try:
        parsed = int(str(current).strip())
    except (TypeError, ValueError):
        parsed = int(INITIAL_VERSION)
    if parsed < 1:
        parsed = int(INITIAL_VERSION)
    return str(parsed + 1)
