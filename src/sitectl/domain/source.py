"""Source repository identity consumed by the source-code provider."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, SecretStr

from sitectl.domain.errors import ConfigurationError


class SourceRepository(BaseModel):
    """Owner/repository pair plus the OAuth token used to pull branches.

    The token is a :class:`~pydantic.SecretStr`: ``repr``, ``str`` and
    :meth:`public_dict` never expose it.
    """

    model_config = {"frozen": True}

    owner: str
    repository: str
    oauth_token: SecretStr

    @classmethod
    def from_fields(
        cls,
        owner: str | None,
        repository: str | None,
        oauth_token: str | SecretStr | None,
    ) -> SourceRepository:
        """Build a source reference, rejecting any missing field."""
        token = oauth_token
        if isinstance(token, SecretStr):
            token = token.get_secret_value()
        for field, value in (("owner", owner), ("repository", repository), ("oauth_token", token)):
            if not value or not str(value).strip():
                raise ConfigurationError(f"source repository is missing {field}", field=field)
        assert owner is not None and repository is not None and token is not None
        return cls(owner=owner.strip(), repository=repository.strip(), oauth_token=SecretStr(token))

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repository}"

    @property
    def url(self) -> str:
        return f"https://github.com/{self.full_name}"

    def public_dict(self) -> dict[str, Any]:
        """Serializable view with the credential masked."""
        return {"owner": self.owner, "repository": self.repository, "url": self.url}
