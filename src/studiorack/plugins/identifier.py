"""Parse plugin references of the form ``<id>[@<version>]``.

Examples:
    >>> id_of("studiorack/mda/adelay@1.0.0")
    'studiorack/mda/adelay'
    >>> version_of("studiorack/mda/adelay@1.0.0")
    '1.0.0'
    >>> version_of("studiorack/mda/adelay") is None
    True
"""

VERSION_SEPARATOR = "@"


def id_of(token: str) -> str:
    """Return the plugin id portion of a reference."""
    return token.split(VERSION_SEPARATOR, 1)[0]


def version_of(token: str) -> str | None:
    """Return the version portion of a reference, or None if it has none."""
    _, sep, version = token.partition(VERSION_SEPARATOR)
    if not sep or not version:
        return None
    return version
