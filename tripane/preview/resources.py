"""Preview resource lifecycle.

The manager is a small state machine (no entry / reason only / content) that
opens, reuses and releases preview resources. Resources live in a shared
``ResourcePool``; whatever the pool held before the session started belongs
to the user and is never released here.

Release policy is fixed at construction:
- ``eager``: the last session-owned file resource is released as soon as another
  file is shown, whatever was previewed in between, so at most one extra
  resource is open.
- ``deferred``: session-owned resources accumulate until ``release_all``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import BrowserError, error_for_os_error
from ..fs.classify import PathClassifier, PreviewEligibility
from .identity import PreviewIdentity, true_path
from .viewer import ContentViewer, PreviewResource

LOGGER = logging.getLogger(__name__)

STATE_NO_ENTRY = "no-entry"
STATE_REASON = "reason"
STATE_CONTENT = "content"

RELEASE_EAGER = "eager"
RELEASE_DEFERRED = "deferred"
RELEASE_POLICIES = (RELEASE_EAGER, RELEASE_DEFERRED)


@dataclass(frozen=True)
class PreviewState:
    status: str
    reason: str = ""
    resource: PreviewResource | None = None
    identity: PreviewIdentity = field(default_factory=PreviewIdentity.no_entry)
    error: BrowserError | None = field(default=None, compare=False)

    @classmethod
    def no_entry(cls) -> PreviewState:
        return cls(STATE_NO_ENTRY)

    @classmethod
    def reason_only(cls, child: Path, reason: str, error: BrowserError | None = None) -> PreviewState:
        return cls(STATE_REASON, reason=reason, identity=PreviewIdentity.reason(child), error=error)

    @classmethod
    def content(cls, resource: PreviewResource) -> PreviewState:
        return cls(STATE_CONTENT, resource=resource, identity=resource.identity)


class ResourcePool:
    """Open preview resources keyed by canonical path."""

    def __init__(self, resources: list[PreviewResource] | None = None) -> None:
        self._resources: dict[Path, PreviewResource] = {}
        for resource in resources or []:
            self.add(resource)

    def __contains__(self, path: object) -> bool:
        return path in self._resources

    def __len__(self) -> int:
        return len(self._resources)

    def paths(self) -> frozenset[Path]:
        return frozenset(self._resources)

    def get(self, path: Path) -> PreviewResource | None:
        return self._resources.get(path)

    def add(self, resource: PreviewResource) -> None:
        self._resources[resource.path] = resource

    def release(self, path: Path) -> bool:
        resource = self._resources.pop(path, None)
        if resource is None:
            return False
        resource.close()
        return True


class PreviewResourceManager:
    """Own the active preview and the resources the session opened."""

    def __init__(
        self,
        viewer: ContentViewer,
        classifier: PathClassifier,
        pool: ResourcePool | None = None,
        policy: str = RELEASE_DEFERRED,
    ) -> None:
        if policy not in RELEASE_POLICIES:
            raise ValueError(f"unknown release policy: {policy!r}")
        self.viewer = viewer
        self.classifier = classifier
        self.pool = pool if pool is not None else ResourcePool()
        self.policy = policy
        self.pre_session: frozenset[Path] = self.pool.paths()
        self.visited: set[Path] = set()
        self.state = PreviewState.no_entry()
        self.acquisitions = 0
        self.skipped_refreshes = 0
        self._active_key: tuple[object, ...] | None = None
        self._last_owned: Path | None = None
        self._force_reopen: Path | None = None
        # Rebuilt copy of a pre-session resource; kept out of the pool.
        self._detached: PreviewResource | None = None

    @property
    def active_resource(self) -> PreviewResource | None:
        return self.state.resource

    def _session_owned(self, path: Path) -> bool:
        return path in self.visited and path not in self.pre_session

    def _release(self, path: Path) -> None:
        if self._last_owned == path:
            self._last_owned = None
        if not self._session_owned(path):
            return
        self.pool.release(path)
        self.visited.discard(path)
        LOGGER.debug("released preview resource %s", path)

    def _close_detached(self, keep: PreviewResource | None = None) -> None:
        if self._detached is not None and self._detached is not keep:
            self._detached.close()
            self._detached = None

    def _show(self, state: PreviewState, key: tuple[object, ...] | None = None) -> PreviewState:
        self._close_detached(state.resource)
        self._active_key = key
        self.state = state
        return state

    def _key_for(self, target: Path, eligibility: PreviewEligibility) -> tuple[object, ...]:
        if target.is_dir():
            return (target, eligibility, self.viewer.lister.filters.signature())
        return (target, eligibility)

    def _acquire(self, child: Path, target: Path) -> PreviewResource:
        """Return a resource for ``target``, from the pool unless a rebuild is pending.

        Raises whatever the viewer raises when the target cannot be opened.
        """
        force = self._force_reopen == target
        self._force_reopen = None
        resource = None if force else self.pool.get(target)
        if resource is not None and not resource.closed:
            return resource
        resource = self.viewer.open(child)
        self.acquisitions += 1
        if resource.is_directory:
            return resource
        if resource.path in self.pre_session:
            self._close_detached()
            self._detached = resource
        else:
            self.pool.add(resource)
            self.visited.add(resource.path)
        return resource

    def _track_file(self, resource: PreviewResource) -> None:
        """Apply the eager policy: keep at most one session-owned file open."""
        if resource.is_directory:
            return
        owned = self._session_owned(resource.path)
        previous = self._last_owned
        if self.policy == RELEASE_EAGER and previous is not None and previous != resource.path:
            self._release(previous)
        if owned:
            self._last_owned = resource.path

    def preview(self, child: Path | None) -> PreviewState:
        """Bring the preview in line with ``child`` and return the new state."""
        if child is None:
            return self._show(PreviewState.no_entry())

        eligibility = self.classifier.classify_for_preview(child)
        if not eligibility.eligible:
            return self._show(PreviewState.reason_only(child, eligibility.reason, eligibility.error_for(child)))

        target = true_path(child)
        key = self._key_for(target, eligibility)
        active = self.state.resource
        if key == self._active_key and active is not None and not active.closed:
            self.skipped_refreshes += 1
            return self.state

        try:
            resource = self._acquire(child, target)
        except (OSError, ValueError, BrowserError) as exc:
            message = getattr(exc, "message", None) or getattr(exc, "strerror", None) or str(exc)
            LOGGER.warning("cannot open preview for %s: %s", child, message)
            error = exc if isinstance(exc, BrowserError) else None
            if isinstance(exc, OSError):
                error = error_for_os_error(child, exc)
            return self._show(PreviewState.reason_only(child, f"cannot open: {message}", error))
        self._track_file(resource)
        return self._show(PreviewState.content(resource), key)

    def invalidate(self) -> None:
        """Forget the active preview so the next ``preview`` call rebuilds it."""
        active = self.state.resource
        if active is not None and not active.is_directory:
            self._release(active.path)
            self._force_reopen = active.path
        self._active_key = None

    def release_all(self) -> None:
        """Release every session-owned resource; pre-session ones stay open."""
        for path in sorted(self.visited):
            if path not in self.pre_session:
                self.pool.release(path)
        self.visited.clear()
        self._last_owned = None
        self._force_reopen = None
        self._show(PreviewState.no_entry())


__all__ = [
    "STATE_NO_ENTRY",
    "STATE_REASON",
    "STATE_CONTENT",
    "RELEASE_EAGER",
    "RELEASE_DEFERRED",
    "RELEASE_POLICIES",
    "PreviewState",
    "ResourcePool",
    "PreviewResourceManager",
]
