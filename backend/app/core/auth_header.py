"""Authorization Header Parsing — pure split of `<scheme> <username>:<password>`.

Invariants:
    - Missing or blank header raises AuthMissingError (checked before any lookup)
    - The second token is taken as literal `username:password` text
    - Splits on the FIRST colon, so passwords may contain ':'
    - A colon-less Basic token is base64-decoded once before splitting
"""

import base64
import binascii
from dataclasses import dataclass

from app.core.errors import AuthInvalidError, AuthMissingError


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str


def parse_authorization(header: str | None) -> Credentials:
    if header is None or not header.strip():
        raise AuthMissingError()

    parts = header.split()
    if len(parts) < 2:
        raise AuthInvalidError(AuthInvalidError.MALFORMED)
    scheme, token = parts[0], parts[1]

    if ":" not in token and scheme.lower() == "basic":
        token = _decode_basic(token)

    username, sep, password = token.partition(":")
    if not sep or not username:
        raise AuthInvalidError(AuthInvalidError.MALFORMED)
    return Credentials(username, password)


def _decode_basic(token: str) -> str:
    try:
        return base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        raise AuthInvalidError(AuthInvalidError.MALFORMED)
