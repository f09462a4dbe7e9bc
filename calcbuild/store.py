"""
Project store — named projects kept as one JSON map under a single storage key.

Read-modify-write on save, whole-map read on load. There is no locking: two
app instances sharing the same database file are last-write-wins, and a save
from one can silently replace projects the other saved since its last read.
That is an accepted limitation of the single-slot layout.
"""

import json
import logging

from pydantic import TypeAdapter, ValidationError

from .config import settings
from .schemas import Project
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)

_PROJECT_MAP = TypeAdapter(dict[str, Project])


class ProjectNotFound(LookupError):
    """No project is stored under the requested name."""

    def __init__(self, name: str):
        super().__init__(f"Project not found: {name}")
        self.name = name


class ProjectStore:
    """save / load / list_names over a KeyValueStorage backing."""

    def __init__(self, storage: KeyValueStorage, key: str = None):
        self.storage = storage
        self.key = key or settings.STORE_KEY

    def save(self, project: Project) -> str:
        """Store a full snapshot of the project. Returns the key it was saved under."""
        key = self.key_for(project)
        projects = self._read()
        projects[key] = project
        self._write(projects)
        logger.info("Saved project %r (%d rooms)", key, len(project.rooms))
        return key

    def load(self, name: str) -> Project:
        """Return the stored project, or raise ProjectNotFound."""
        projects = self._read()
        if name not in projects:
            logger.debug("No project stored under %r", name)
            raise ProjectNotFound(name)
        logger.info("Loaded project %r", name)
        return projects[name]

    def list_names(self) -> list[str]:
        return list(self._read().keys())

    @staticmethod
    def key_for(project: Project) -> str:
        return project.project_name or settings.UNNAMED_PROJECT_KEY

    def _read(self) -> dict:
        """Decode the whole map. Missing or corrupted content reads as empty."""
        raw = self.storage.get_item(self.key)
        if not raw:
            return {}
        try:
            return _PROJECT_MAP.validate_python(json.loads(raw))
        except (ValueError, OverflowError, ValidationError) as e:
            logger.warning("Ignoring unreadable project store %r: %s", self.key, e)
            return {}

    def _write(self, projects: dict) -> None:
        payload = {name: project.to_storage() for name, project in projects.items()}
        self.storage.set_item(self.key, json.dumps(payload, ensure_ascii=False))
