"""Trigger context data models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

SHORT_SHA_LENGTH = 7


class EventKind(str, Enum):
    """Kind of event that triggered the run."""

    COMMIT = "commit"
    PULL_REQUEST = "pull_request"
    RELEASE = "release"
    OTHER = "other"


class TriggerContext(BaseModel):
    """Facts about the triggering event.

    Fields belonging to an inactive event kind are ``None``, never an empty
    string, so a missing title can be told apart from an empty one.
    """

    model_config = ConfigDict(frozen=True)

    sha: str
    owner: str
    repo: str

    is_commit: bool = False
    is_pull_request: bool = False
    is_release: bool = False

    commit_message: str | None = None
    pull_request_number: int | None = None
    pull_request_title: str | None = None
    pull_request_head_sha: str | None = None
    release_tag: str | None = None
    release_title: str | None = None
    issue_number: int | None = None

    @property
    def sha_short(self) -> str:
        return self.sha[:SHORT_SHA_LENGTH]

    @property
    def deployment_sha(self) -> str:
        """Pull request head SHA when present, else the triggering SHA."""
        return self.pull_request_head_sha or self.sha

    @property
    def event_kinds(self) -> frozenset[EventKind]:
        kinds = set()
        if self.is_commit:
            kinds.add(EventKind.COMMIT)
        if self.is_pull_request:
            kinds.add(EventKind.PULL_REQUEST)
        if self.is_release:
            kinds.add(EventKind.RELEASE)
        return frozenset(kinds or {EventKind.OTHER})
