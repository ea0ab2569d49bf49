"""Redirector exception hierarchy."""


class RedirectorError(Exception):
    """Base for all redirector errors."""


class ProviderError(RedirectorError):
    """Raised when the shortcut provider cannot return rows.

    Covers network, authorization and payload failures. The cache keeps
    serving its last good mapping when this is raised during a refresh.
    """

    def __init__(self, provider: str, detail: str) -> None:
        self.provider = provider
        self.detail = detail
        super().__init__(f"{provider}: {detail}")


class ProviderConfigError(ProviderError):
    """Raised when the provider is missing required configuration."""
