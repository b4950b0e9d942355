"""Persisted sync configuration record."""

from pydantic import BaseModel, ConfigDict, SecretStr

MASK = "********"


class SyncConfig(BaseModel):
    """User-editable configuration for the sync flow.

    Mirrors the fields of the settings form. Every field defaults to the
    empty string and none is validated beyond its type.
    """

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    username: str = ""
    repository_url: str = ""
    access_token: SecretStr = SecretStr("")
    working_directory: str = ""
    author_name: str = ""
    author_email: str = ""

    @classmethod
    def field_names(cls) -> list[str]:
        return list(cls.model_fields)

    def to_storage(self) -> dict[str, str]:
        """Plain dict for the settings store, token in cleartext."""
        data = self.model_dump(exclude={"access_token"})
        data["access_token"] = self.access_token.get_secret_value()
        return data

    def to_display(self) -> dict[str, str]:
        """Plain dict for display, token masked when set."""
        data = self.model_dump(exclude={"access_token"})
        data["access_token"] = MASK if self.access_token.get_secret_value() else ""
        return data
