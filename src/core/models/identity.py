"""Verified caller identity."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from core.utils.constants import USER_PREFIX_SEPARATOR


class Identity(BaseModel):
    """Identity derived from a verified bearer token. Never persisted."""

    model_config = ConfigDict(frozen=True)

    # The id names a key prefix, so it may not contain the separator itself
    subject_id: StrictStr = Field(
        ...,
        min_length=1,
        pattern=rf"^[^{USER_PREFIX_SEPARATOR}]+$",
        description="Stable, globally unique user id",
    )
    username: StrictStr | None = Field(None, description="Login name")
    email: StrictStr | None = Field(None, description="Email address, if released by the provider")

    @property
    def key_prefix(self) -> str:
        """Storage namespace owned by this user."""
        return f"{self.subject_id}{USER_PREFIX_SEPARATOR}"
