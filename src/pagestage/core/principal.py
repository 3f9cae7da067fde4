"""Current caller identity and permission checks."""

from dataclasses import dataclass, field
from typing import Protocol

from pagestage.core.entities import Attachment, Page
from pagestage.core.types import EDITOR_CAPABILITIES


class Principal(Protocol):
    """Caller of a request. Never mutated by the pipeline."""

    @property
    def authenticated(self) -> bool: ...

    def able_to(self, *capabilities: str) -> bool: ...

    def able_to_view(self, entity: Page | Attachment) -> bool: ...


@dataclass(frozen=True)
class User:
    """Principal backed by a user record from the content manifest.

    Entities without groups are public. Restricted entities need a shared
    group, except for editors, who may view everything.
    """

    id: str
    capabilities: frozenset[str] = field(default_factory=frozenset)
    groups: frozenset[str] = field(default_factory=frozenset)
    authenticated: bool = True

    def able_to(self, *capabilities: str) -> bool:
        """Return True if the user holds any of the given capabilities."""
        return any(capability in self.capabilities for capability in capabilities)

    def able_to_view(self, entity: Page | Attachment) -> bool:
        """Return True if the user may view the entity."""
        if not entity.groups:
            return True
        if self.able_to(*EDITOR_CAPABILITIES):
            return True
        return bool(self.groups & entity.groups)


ANONYMOUS = User(id="anonymous", authenticated=False)


def is_editor(principal: Principal) -> bool:
    """Whether the principal may author or publish content."""
    return principal.able_to(*EDITOR_CAPABILITIES)
