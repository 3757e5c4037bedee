"""
Address Parser - free-text Danish addresses to (street, postcode, district).

Handles the two shapes found in the sales export:
    "Strandvej 10, 2100 København Ø"   (comma before the postcode)
    "Nørrebrogade 5 2200 København N"  (no comma)

The parser never fails. When no 4-digit postcode can be found the whole
(trimmed) input is returned as the street with empty postcode/district.
"""

import re
from typing import NamedTuple

# Rightmost "<4 digits> <district>" tail, district may not contain a comma.
# The greedy street group pushes the match to the last valid postcode.
_TAIL_PATTERN = re.compile(
    r'^(?P<street>.*)(?:^|[\s,])(?P<postcode>[0-9]{4})\s+(?P<district>[^,]+)$'
)

# Last comma segment starting with a postcode
_SEGMENT_PATTERN = re.compile(r'^(?P<postcode>[0-9]{4})\s+(?P<district>.+)$')

_DISTRICT_POSTCODE_PREFIX = re.compile(r'^[0-9]{4}\s+')


class ParsedAddress(NamedTuple):
    street: str
    postcode: str
    district: str


EMPTY_ADDRESS = ParsedAddress('', '', '')


def clean_district(district: str) -> str:
    """Strip whitespace and a leading "<postcode> " duplicated into the district."""
    return _DISTRICT_POSTCODE_PREFIX.sub('', district.strip()).strip()


def _clean_street(street: str) -> str:
    return street.strip().rstrip(',').strip()


def parse_address(address: str) -> ParsedAddress:
    """
    Parse a free-text address.

    Algorithm:
        1. Match "optional street, 4-digit postcode, district without comma"
           anchored at the end of the string.
        2. Otherwise split on commas and look for a leading postcode in the
           last segment; the street is the preceding segments re-joined.
        3. Otherwise return the trimmed input as street.

    Args:
        address: Raw address text (None is treated as empty)

    Returns:
        ParsedAddress(street, postcode, district)

    Example:
        >>> parse_address("Strandvej 10, 2100 København Ø")
        ParsedAddress(street='Strandvej 10', postcode='2100', district='København Ø')
    """
    if not address:
        return EMPTY_ADDRESS

    text = address.strip()
    if not text:
        return EMPTY_ADDRESS

    match = _TAIL_PATTERN.match(text)
    if match:
        district = clean_district(match.group('district'))
        if district:
            return ParsedAddress(
                street=_clean_street(match.group('street')),
                postcode=match.group('postcode'),
                district=district,
            )

    if ',' in text:
        segments = [segment.strip() for segment in text.split(',')]
        match = _SEGMENT_PATTERN.match(segments[-1])
        if match:
            district = clean_district(match.group('district'))
            if district:
                return ParsedAddress(
                    street=', '.join(s for s in segments[:-1] if s),
                    postcode=match.group('postcode'),
                    district=district,
                )

    return ParsedAddress(street=text, postcode='', district='')
