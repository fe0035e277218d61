"""Session value types and the persisted session blob codec."""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from rootstore.shared.core.errors import SessionDecodeError


class Authenticated(BaseModel):
    """A signed-in account. The credential is opaque and never inspected."""
    model_config = ConfigDict(frozen=True, extra='forbid')

    kind: Literal["authenticated"] = "authenticated"
    identity: str = Field(min_length=1, description="Stable account id (e.g. a DID)")
    credential: str = Field(min_length=1, repr=False, description="Opaque access token")
    handle: Optional[str] = Field(default=None, description="Human-readable account handle")
    service: Optional[str] = Field(default=None, description="Origin service URL")

    @property
    def is_authenticated(self) -> bool:
        return True


class Unauthenticated(BaseModel):
    """No signed-in account."""
    model_config = ConfigDict(frozen=True, extra='forbid')

    kind: Literal["unauthenticated"] = "unauthenticated"

    @property
    def is_authenticated(self) -> bool:
        return False


Session = Annotated[Union[Authenticated, Unauthenticated], Field(discriminator="kind")]

UNAUTHENTICATED = Unauthenticated()


class PersistedSession(BaseModel):
    """On-disk shape of a persisted session."""
    model_config = ConfigDict(frozen=True, extra='ignore')

    identity: str = Field(min_length=1)
    credential: str = Field(min_length=1)
    handle: Optional[str] = None
    service: Optional[str] = None


def decode_session_blob(blob: bytes) -> Authenticated:
    """Decode a persisted session blob.

    Raises:
        SessionDecodeError: If the blob is not a well-formed session
    """
    try:
        persisted = PersistedSession.model_validate_json(blob)
    except (ValidationError, UnicodeDecodeError, ValueError) as e:
        raise SessionDecodeError(f"Malformed session blob: {e}") from e
    return Authenticated(**persisted.model_dump())


def encode_session_blob(session: Authenticated) -> bytes:
    """Encode an authenticated session into the persisted blob format."""
    persisted = PersistedSession(**session.model_dump(exclude={"kind"}))
    return persisted.model_dump_json(exclude_none=True).encode("utf-8")
