from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter

DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "weathermail/1.0"


class TimeoutHTTPAdapter(HTTPAdapter):
    """Adapter that applies a default timeout to every request it sends."""

    def __init__(self, *args, timeout: float = DEFAULT_TIMEOUT, **kwargs) -> None:
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(self, request, **kwargs):  # type: ignore[override]
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


def create_session(timeout: float = DEFAULT_TIMEOUT, user_agent: str = DEFAULT_USER_AGENT) -> requests.Session:
    # Each forecast call is attempted exactly once.
    session = requests.Session()
    session.headers.update({"User-Agent": user_agent, "Accept": "application/json"})
    adapter = TimeoutHTTPAdapter(timeout=timeout, max_retries=0)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session
