"""Test factories using factory_boy."""

import factory

from vault_sync.core.models.config import SyncConfig
from vault_sync.core.models.status import FileState, StatusEntry


class SyncConfigFactory(factory.Factory):
    """Factory for creating SyncConfig instances."""

    class Meta:
        model = SyncConfig

    username = factory.Faker("user_name")
    repository_url = factory.LazyAttribute(lambda o: f"github.com/{o.username}/blog")
    access_token = factory.Sequence(lambda n: f"ghp_{n:036d}")
    working_directory = "blog"
    author_name = factory.Faker("name")
    author_email = factory.Faker("email")


class StatusEntryFactory(factory.Factory):
    """Factory for creating StatusEntry instances."""

    class Meta:
        model = StatusEntry

    path = factory.Sequence(lambda n: f"content/post-{n}.md")
    index_state = FileState.UNTRACKED
    worktree_state = FileState.UNTRACKED
