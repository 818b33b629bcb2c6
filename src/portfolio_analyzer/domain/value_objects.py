"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

from portfolio_analyzer.domain.exceptions import InvalidProfileInputError

_PROFILE_URL_RE = re.compile(r"github\.com/(?P<username>[A-Za-z0-9-]+)", re.IGNORECASE)
_USERNAME_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,38})$")


@dataclass(frozen=True, slots=True)
class GitHubUsername:
    """Validated GitHub login.

    Accepts a bare handle (``octocat``), an ``@``-prefixed handle
    (``@octocat``) or a profile URL like ``https://github.com/octocat``.
    """

    value: str
    raw: str

    @classmethod
    def from_string(cls, text: str) -> GitHubUsername:
        """Normalise and validate user input."""
        raw = text
        text = text.strip()

        match = _PROFILE_URL_RE.search(text)
        candidate = match["username"] if match else text.removeprefix("@")

        if not _USERNAME_RE.match(candidate):
            raise InvalidProfileInputError(
                f"Invalid GitHub username or profile URL: '{text}'. "
                "Expected 'octocat', '@octocat' or https://github.com/octocat"
            )
        return cls(value=candidate, raw=raw)

    def __str__(self) -> str:
        return self.value
