"""GitHub event payload models.

Only the fields the action reads are declared; everything else in the
payload is ignored.
"""

from pydantic import BaseModel, ConfigDict


class GitRef(BaseModel):
    model_config = ConfigDict(extra="ignore")

    sha: str
    ref: str | None = None


class HeadCommit(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    message: str | None = None


class PullRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    number: int
    title: str | None = None
    head: GitRef | None = None


class Release(BaseModel):
    model_config = ConfigDict(extra="ignore")

    tag_name: str | None = None
    name: str | None = None


class Issue(BaseModel):
    model_config = ConfigDict(extra="ignore")

    number: int


class RepositoryOwner(BaseModel):
    model_config = ConfigDict(extra="ignore")

    login: str


class Repository(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    owner: RepositoryOwner | None = None


class GitHubEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    head_commit: HeadCommit | None = None
    pull_request: PullRequest | None = None
    release: Release | None = None
    issue: Issue | None = None
    repository: Repository | None = None
    # issue_comment and a few other events only carry a top-level number
    number: int | None = None
