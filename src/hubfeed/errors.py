"""Exceptions and user-facing error messages."""

import httpx


class ConfigError(Exception):
    """Required configuration is missing or malformed."""


class AuthFailed(Exception):
    """Sign-in or sign-up was rejected by the auth backend."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DuplicateHandle(Exception):
    """The handle is already registered in the directory."""

    def __init__(self, handle: str) -> None:
        super().__init__(f"Handle '{handle}' is already registered")
        self.handle = handle


def describe_error(exc: BaseException, has_token: bool = False) -> str:
    """One-line explanation of a failure, suitable for the error screen."""
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        if status == 404:
            return "❌ Not found on GitHub. Check the name and try again."
        if status == 403:
            text = exc.response.text.lower()
            if "rate limit" in text:
                if has_token:
                    return (
                        "❌ GitHub API rate limit exceeded. "
                        "Wait a few minutes and retry."
                    )
                return (
                    "❌ GitHub API rate limit exceeded "
                    "(unauthenticated: 60 req/hour). "
                    "Set GITHUB_TOKEN to get 5 000 req/hour."
                )
            if has_token:
                return "❌ Access denied. Your token may lack permissions."
            return "❌ Access denied — no GitHub token found. Set GITHUB_TOKEN."
        if status == 401:
            return "❌ Authentication failed. Please check your GitHub token."
        return f"❌ GitHub API error ({status}): {exc.response.reason_phrase}"
    if isinstance(exc, httpx.ConnectError):
        return "❌ Could not connect to GitHub. Check your internet connection."
    if isinstance(exc, httpx.TimeoutException):
        return "❌ GitHub took too long to answer. Try again."
    if isinstance(exc, AuthFailed):
        return f"❌ {exc.message}"
    if isinstance(exc, ConfigError):
        return f"❌ {exc}"
    return f"❌ Unexpected error: {exc}"
