"""Gateway error taxonomy.

Every error raised by the gateway carries the HTTP status it maps to and
knows how to render itself as the JSON body the UI expects.
"""

from typing import Any


class GatewayError(Exception):
    status_code: int = 500

    def to_body(self) -> dict[str, Any]:
        return {"error": str(self)}


class NotConfiguredError(GatewayError):
    """Live mode was selected but the provider config is incomplete."""

    status_code = 501

    def __init__(self, provider: str = "Jira") -> None:
        super().__init__(f"{provider} not configured")
        self.provider = provider


class InvalidRequestError(GatewayError):
    status_code = 400


class UpstreamError(GatewayError):
    """Non-2xx, timeout or network failure talking to the provider.

    ``upstream_status`` is None when no response was received at all.
    """

    def __init__(
        self,
        *,
        upstream_status: int | None = None,
        details: Any = None,
        message: str = "Jira request failed",
        provider: str = "Jira",
    ) -> None:
        super().__init__(message)
        self.upstream_status = upstream_status
        self.details = details
        self.message = message
        self.provider = provider
        self.status_code = upstream_status or 500

    def to_body(self) -> dict[str, Any]:
        return {"error": f"{self.provider} API error", "details": self.details}
