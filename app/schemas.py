from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class TokenPayload(BaseModel):
    """Claims carried by an access token once it has been verified."""

    id: UUID = Field(..., description="Id of the authenticated user")
    user_name: str = Field(..., alias="userName", description="Username")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class UserRegister(BaseModel):
    user_name: str = Field(
        ...,
        alias="userName",
        min_length=3,
        max_length=50,
        description="Username for the new account",
    )
    password: str = Field(
        ..., min_length=6, max_length=100, description="Password for the new account"
    )

    model_config = ConfigDict(populate_by_name=True)


class UserLogin(BaseModel):
    user: str = Field(..., description="Username for login")
    password: str = Field(..., description="Password for login")


class UserPublic(BaseModel):
    """Owner projection embedded in films and comments."""

    id: UUID
    user_name: str = Field(
        ...,
        validation_alias=AliasChoices("user_name", "userName"),
        serialization_alias="userName",
    )

    model_config = ConfigDict(from_attributes=True)


class UserRead(UserPublic):
    """User as returned to clients: never includes the credential hash."""

    films: list[str] = Field(default_factory=list)


class LoginResponse(BaseModel):
    token: str = Field(..., description="JWT access token")
    user: UserRead


class ImageData(BaseModel):
    url_original: str = Field(..., alias="urlOriginal")
    url: str
    mimetype: str
    size: int

    model_config = ConfigDict(populate_by_name=True)


class CommentCreate(BaseModel):
    comment: str = Field(..., min_length=1, description="Comment body")


class CommentRead(BaseModel):
    comment: str
    owner: UserPublic


class FilmUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    genre: str | None = Field(default=None, min_length=1, max_length=100)

    @field_validator("title", "genre", mode="before")
    @classmethod
    def reject_null(cls, v):
        # Omitted fields stay untouched; an explicit null is not a value
        if v is None:
            raise ValueError("must not be null")
        return v


class FilmRead(BaseModel):
    id: UUID
    title: str
    genre: str
    image: ImageData | None = None
    owner: UserPublic
    comments: list[CommentRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class FilmList(BaseModel):
    items: list[FilmRead]
    count: int
    previous: str | None = None
    next: str | None = None


class MessageResponse(BaseModel):
    message: str = Field(..., description="Response message")
