"""Push URL resolution for the configured repository."""

import re
from urllib.parse import urlsplit

from vault_sync.core.exceptions import ConfigurationError


class PushURLResolver:
    """Resolves the configured repository path to an HTTPS push URL.

    The configured value is a scheme-less path such as
    `github.com/owner/repo`. Handles:
    - github.com/owner/repo -> https://github.com/owner/repo
    - https://github.com/owner/repo -> unchanged
    - git@github.com:owner/repo.git -> https://github.com/owner/repo.git
    """

    def __init__(self, repository_path: str) -> None:
        self._repository_path = repository_path.strip()

    def resolve(self) -> str:
        """Return the HTTPS URL, or raise ConfigurationError if unusable."""
        path = self._normalize(self._repository_path)
        if not path:
            raise ConfigurationError("Repository URL is not configured")

        url = f"https://{path}"
        parts = urlsplit(url)
        if not parts.hostname or not parts.path.strip("/"):
            raise ConfigurationError(
                f"Repository URL must look like host/owner/repository: {self._repository_path}",
                details={"repository_url": self._repository_path},
            )
        if parts.username or parts.password:
            raise ConfigurationError(
                "Repository URL must not embed credentials",
                details={"host": parts.hostname},
            )
        return url

    @staticmethod
    def _normalize(path: str) -> str:
        """Strip a scheme or convert SSH notation to a scheme-less path."""
        ssh_match = re.match(r"^git@([^:]+):(.+)$", path)
        if ssh_match:
            host, repo = ssh_match.groups()
            return f"{host}/{repo}"
        return re.sub(r"^https?://", "", path, flags=re.IGNORECASE)
