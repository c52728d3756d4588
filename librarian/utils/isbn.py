# librarian/utils/isbn.py
import re

_SEPARATORS = re.compile(r'[\s-]')

# EAN-13 prefixes reserved for books
BOOKLAND_PREFIXES = ('978', '979')


def normalize_isbn(isbn: str) -> str:
    """Remove hyphens and whitespace, ``978-3-16-148410-0`` -> ``9783161484100``"""
    return _SEPARATORS.sub('', isbn)


def is_isbn13(value: str) -> bool:
    """Check that ``value`` is a well formed ISBN-13 with a valid check digit"""
    if len(value) != 13 or not value.isdigit():
        return False
    if not value.startswith(BOOKLAND_PREFIXES):
        return False
    total = sum(int(d) * (1 if i % 2 == 0 else 3) for i, d in enumerate(value[:12]))
    return (10 - total % 10) % 10 == int(value[12])
