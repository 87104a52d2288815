"""Bearer token verification.

Tokens are issued by the host application's authentication module; this
package only checks their signature and reads the caller identity.
"""

from jose import JWTError, jwt

from bms_notifications.config import get_settings


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def user_id_from_token(token: str) -> int:
    """Return the user identifier carried in the ``sub`` claim of ``token``."""

    payload = decode_access_token(token)
    subject = payload.get("sub")
    if subject is None or isinstance(subject, bool):
        raise ValueError("Token does not identify a user")
    try:
        return int(subject)
    except (TypeError, ValueError) as exc:
        raise ValueError("Token does not identify a user") from exc
