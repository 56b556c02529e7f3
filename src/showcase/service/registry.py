"""Component registry: artifact id -> factory producing the component source."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from showcase.models.artifact import ArtifactRecord

logger = logging.getLogger("showcase.service")


class UnregisteredComponentError(KeyError):
    """Raised when no factory is registered for an artifact id."""

    def __init__(self, artifact_id: str, available: list[str]) -> None:
        self.artifact_id = artifact_id
        self.available = available
        super().__init__(
            f"No component registered for '{artifact_id}'. Available: {', '.join(available)}"
        )


class ComponentResolutionError(Exception):
    """Raised when a resolved component cannot be materialised."""

    def __init__(self, artifact_id: str, reason: str) -> None:
        self.artifact_id = artifact_id
        self.reason = reason
        super().__init__(f"Cannot load component '{artifact_id}': {reason}")


@dataclass(frozen=True)
class ComponentSource:
    """A materialised component: where it lives and its source text."""

    artifact_id: str
    module: str
    file: str
    source: str


ComponentFactory = Callable[[], ComponentSource]


def _read_component(artifact_id: str, scan_root: Path, rel_file: PurePosixPath) -> ComponentSource:
    full_path = scan_root / rel_file
    try:
        source = full_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ComponentResolutionError(artifact_id, f"{rel_file}: {exc}") from exc
    return ComponentSource(
        artifact_id=artifact_id,
        module=str(rel_file.with_suffix("")),
        file=str(rel_file),
        source=source,
    )


def file_factory(artifact_id: str, scan_root: Path, rel_file: str) -> ComponentFactory:
    """Factory for a statically known component file."""
    rel = PurePosixPath(rel_file)
    return lambda: _read_component(artifact_id, scan_root, rel)


def module_factory(
    record: ArtifactRecord, scan_root: Path, extensions: Iterable[str]
) -> ComponentFactory:
    """Generic factory: locate ``record.module`` under *scan_root* by extension.

    The record's own extension is tried first, then *extensions* in order.
    """
    module = record.module
    candidates = [PurePosixPath(record.path).suffix, *extensions]

    def load() -> ComponentSource:
        for ext in dict.fromkeys(c for c in candidates if c):
            rel_file = PurePosixPath(f"{module}{ext}")
            if (scan_root / rel_file).is_file():
                return _read_component(record.id, scan_root, rel_file)
        raise ComponentResolutionError(record.id, f"no component file for module '{module}'")

    return load


class LazyComponent:
    """One-shot deferred component handle.

    The factory runs on the first :meth:`materialize` call; its outcome,
    success or failure, is cached.  There is no retry and no timeout.
    """

    def __init__(self, artifact_id: str, factory: ComponentFactory) -> None:
        self.artifact_id = artifact_id
        self._factory = factory
        self._value: ComponentSource | None = None
        self._error: ComponentResolutionError | None = None
        self._done = False

    @property
    def resolved(self) -> bool:
        return self._done and self._error is None

    @property
    def failed(self) -> bool:
        return self._error is not None

    @property
    def error(self) -> ComponentResolutionError | None:
        return self._error

    def materialize(self) -> ComponentSource:
        """Return the component, running the factory at most once.

        Raises :class:`ComponentResolutionError` (the cached one on repeat calls).
        """
        if not self._done:
            self._done = True
            try:
                self._value = self._factory()
            except ComponentResolutionError as exc:
                self._error = exc
            except Exception as exc:
                self._error = ComponentResolutionError(self.artifact_id, str(exc))
            if self._error is not None:
                logger.warning("%s", self._error)
        if self._error is not None:
            raise self._error
        assert self._value is not None
        return self._value


class ComponentRegistry:
    """Statically populated mapping of artifact id -> component factory.

    Ids are matched case-insensitively.  Can be used as a decorator::

        @registry.register("barchart")
        def bar_chart() -> ComponentSource: ...
    """

    def __init__(self) -> None:
        self._factories: dict[str, ComponentFactory] = {}

    @classmethod
    def from_static(cls, scan_root: Path, components: dict[str, str]) -> ComponentRegistry:
        """Registry pre-populated with ``{id: file relative to scan_root}``."""
        registry = cls()
        for artifact_id, rel_file in components.items():
            registry.register(artifact_id, file_factory(artifact_id, scan_root, rel_file))
        return registry

    def register(
        self, artifact_id: str, factory: ComponentFactory | None = None
    ) -> Callable[[ComponentFactory], ComponentFactory] | ComponentFactory:
        key = artifact_id.lower()
        if factory is not None:
            self._factories[key] = factory
            return factory

        def decorator(func: ComponentFactory) -> ComponentFactory:
            self._factories[key] = func
            return func

        return decorator

    def get(self, artifact_id: str) -> ComponentFactory:
        key = artifact_id.lower()
        if key not in self._factories:
            raise UnregisteredComponentError(artifact_id, available=self.available())
        return self._factories[key]

    def __contains__(self, artifact_id: object) -> bool:
        return isinstance(artifact_id, str) and artifact_id.lower() in self._factories

    def available(self) -> list[str]:
        """List registered ids."""
        return sorted(self._factories)
