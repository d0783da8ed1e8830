"""Subsonic response models.

Field aliases are the protocol's element and attribute names. Scalar fields
render as XML attributes, nested models as child elements, and lists as one
repeated element per item named after the field.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

API_VERSION = "1.14.0"
XML_NAMESPACE = "http://subsonic.org/restapi"


class ResponseStatus(StrEnum):
    OK = "ok"
    FAILED = "failed"


class SubsonicModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ErrorInfo(SubsonicModel):
    """Failure details. Code 0 is generic, 10 missing parameter, 40 auth."""

    code: int
    message: str


class License(SubsonicModel):
    valid: bool = True


class MusicFolder(SubsonicModel):
    id: int
    name: str


class MusicFolders(SubsonicModel):
    music_folder: list[MusicFolder] = Field(default_factory=list, alias="musicFolder")


class Artist(SubsonicModel):
    """A top-level entry, presented as an artist by getIndexes."""

    id: str
    name: str


class Index(SubsonicModel):
    """Artists sharing one initial character."""

    name: str
    artist: list[Artist] = Field(default_factory=list)


class Indexes(SubsonicModel):
    last_modified: int = Field(alias="lastModified")
    index: list[Index] = Field(default_factory=list)


class Child(SubsonicModel):
    """A directory or song inside a music directory."""

    id: str
    parent: str | None = None
    title: str
    album: str = ""
    artist: str = ""
    is_dir: bool = Field(alias="isDir")
    suffix: str | None = None
    content_type: str | None = Field(default=None, alias="contentType")


class Directory(SubsonicModel):
    id: str
    name: str
    child: list[Child] = Field(default_factory=list)


class SubsonicResponse(SubsonicModel):
    """The envelope wrapping every non-streaming response."""

    status: ResponseStatus = ResponseStatus.OK
    version: str = API_VERSION
    error: ErrorInfo | None = None
    license: License | None = None
    indexes: Indexes | None = None
    directory: Directory | None = None
    music_folders: MusicFolders | None = Field(default=None, alias="musicFolders")

    @classmethod
    def failed(cls, code: int, message: str) -> "SubsonicResponse":
        return cls(
            status=ResponseStatus.FAILED,
            error=ErrorInfo(code=code, message=message),
        )
