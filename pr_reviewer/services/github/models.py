from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """GitHub user information."""

    login: str


class Repository(BaseModel):
    """GitHub repository information as found in event payloads."""

    model_config = ConfigDict(extra="ignore")

    name: str
    owner: User


class PullRequestContext(BaseModel):
    """The pull request under review, threaded read-only through the pipeline."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str
    number: int
    title: str = ""
    description: str = ""


class ReviewComment(BaseModel):
    """A review comment to post on a PR."""

    path: str
    line: int
    body: str
    side: Literal["LEFT", "RIGHT"] = "RIGHT"


class Review(BaseModel):
    """A complete review to submit."""

    body: str = ""
    event: Literal["APPROVE", "REQUEST_CHANGES", "COMMENT"] = "COMMENT"
    comments: list[ReviewComment] = Field(default_factory=list)


class PullRequestEvent(BaseModel):
    """Parsed payload of the triggering event.

    Only ``pull_request`` events carry a top-level ``number``; it is checked
    once the action is known to be one we review.
    """

    model_config = ConfigDict(extra="ignore")

    action: str | None = None
    number: int | None = None
    repository: Repository
    before: str | None = None
    after: str | None = None

    @property
    def owner(self) -> str:
        return self.repository.owner.login

    @property
    def repo(self) -> str:
        return self.repository.name
