import secrets

from itsdangerous import BadSignature, URLSafeSerializer

SESSION_COOKIE = "session"


def _serializer(secret_key: str) -> URLSafeSerializer:
    return URLSafeSerializer(secret_key, salt="wizard-session")


def issue_session(secret_key: str) -> str:
    """Create a signed anonymous session token for a new browser"""
    return _serializer(secret_key).dumps(secrets.token_hex(16))


def read_session(token, secret_key: str):
    """Return the session id inside a signed token, or None when it was tampered with"""
    if not token:
        return None
    try:
        return _serializer(secret_key).loads(token)
    except BadSignature:
        return None


def bearer(token: str) -> dict:
    """Authorization header forwarding the browser session to the gateway"""
    return {"Authorization": f"Bearer {token}"}
