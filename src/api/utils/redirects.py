from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from config import ApplicationConfig


def _origin(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}".lower()


def is_allowed_redirect(url: str) -> bool:
    """Redirect targets are untrusted input: only configured origins are accepted"""
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        return False
    allowed = {origin.rstrip("/").lower() for origin in ApplicationConfig.REDIRECT_ALLOWED_ORIGINS}
    return _origin(url) in allowed


def with_query(url: str, **params: str) -> str:
    """Append query parameters, keeping any the target already carries"""
    parts = urlsplit(url)
    query = parse_qsl(parts.query, keep_blank_values=True) + list(params.items())
    return urlunsplit(parts._replace(query=urlencode(query)))
