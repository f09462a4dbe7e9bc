"""
Project editor — the working copy behind the estimator's form.

Holds the project being edited and its latest estimate. Every edit goes
through the schemas (so bad input is normalized, never rejected) and
triggers a recompute. User interaction that a UI would do with dialogs is
injected: `confirm(message) -> bool` before destructive actions and
`notify(message)` for informational notices.
"""

import logging
from typing import Callable, Optional

from .csv_export import csv_filename, generate_csv
from .estimator import Estimator
from .report import generate_report_pdf
from .schemas import DEFAULT_PARAMETERS, DEFAULT_ROOM, SAMPLE_ROOMS, Project, Room
from .store import ProjectNotFound, ProjectStore

logger = logging.getLogger(__name__)

# Editable global fields: python attribute -> persisted name
PROJECT_FIELDS = {
    "project_name": "projectName",
    "wall_height": "wallHeight",
    "paint_coverage": "paintCoverage",
    "paint_price": "paintPrice",
    "plaster_price": "plasterPrice",
    "insulation_price": "insulationPrice",
    "wall_waste": "wallWaste",
}
ROOM_FIELDS = {"name": "name", "length": "L", "width": "W", "openings": "openings"}


def _always_yes(message: str) -> bool:
    return True


def _log_notice(message: str) -> None:
    logger.info(message)


def new_project_state() -> Project:
    """Blank project: no name, default parameters, the two sample rooms."""
    return Project.model_validate({"projectName": "", **DEFAULT_PARAMETERS, "rooms": SAMPLE_ROOMS})


class ProjectEditor:

    def __init__(self, store: ProjectStore, project: Project = None,
                 confirm: Callable[[str], bool] = _always_yes,
                 notify: Callable[[str], None] = _log_notice):
        self.store = store
        self.confirm = confirm
        self.notify = notify
        self.estimator = Estimator()
        self.project = project or new_project_state()
        self.estimate = {}
        self.recompute()

    # --- Computation ---

    def recompute(self) -> dict:
        self.estimate = self.estimator.compute_project(self.project)
        return self.estimate

    # --- Rooms ---

    def add_room(self, name: str = "", length=None, width=None, openings=None) -> Room:
        """Append a room; dimensions left out take the new-row defaults (4 x 3, 2 m²)."""
        room = Room.model_validate({
            "name": name,
            "L": DEFAULT_ROOM["L"] if length is None else length,
            "W": DEFAULT_ROOM["W"] if width is None else width,
            "openings": DEFAULT_ROOM["openings"] if openings is None else openings,
        })
        self._replace(rooms=[*self.project.rooms, room])
        return room

    def delete_room(self, index: int) -> bool:
        """Remove the room at index. Out-of-range indexes are ignored."""
        if not 0 <= index < len(self.project.rooms):
            return False
        rooms = list(self.project.rooms)
        del rooms[index]
        self._replace(rooms=rooms)
        return True

    def update_room(self, index: int, **fields) -> Room:
        """Edit fields of one room (name, length, width, openings)."""
        unknown = set(fields) - set(ROOM_FIELDS)
        if unknown:
            raise ValueError(f"Unknown room field(s): {sorted(unknown)}")
        if not 0 <= index < len(self.project.rooms):
            raise IndexError(f"No room at index {index}")
        current = self.project.rooms[index].model_dump(by_alias=True)
        current.update({ROOM_FIELDS[k]: v for k, v in fields.items()})
        rooms = list(self.project.rooms)
        rooms[index] = Room.model_validate(current)
        self._replace(rooms=rooms)
        return rooms[index]

    # --- Global fields ---

    def update_field(self, name: str, value) -> None:
        """Edit one global field (project name or a pricing/coverage parameter)."""
        if name not in PROJECT_FIELDS:
            raise ValueError(
                f"Unknown project field: {name}. "
                f"Available: {list(PROJECT_FIELDS.keys())}"
            )
        self._replace(**{PROJECT_FIELDS[name]: value})

    # --- Project actions ---

    def new_project(self) -> bool:
        """Reset to a blank project once the user confirms. Returns False if declined."""
        if not self.confirm("Clear the fields and start from scratch?"):
            return False
        self.project = new_project_state()
        self.recompute()
        return True

    def save(self) -> str:
        key = self.store.save(self.project)
        self.notify(f"Project saved: {key}")
        return key

    def saved_names(self) -> list:
        return self.store.list_names()

    def load(self, name: Optional[str]) -> bool:
        """
        Replace the working copy with a saved project.

        An empty store, an empty pick or an unknown name is a notice, and
        leaves the current project untouched.
        """
        if not self.store.list_names():
            self.notify("No projects saved.")
            return False
        if not name:
            return False
        try:
            project = self.store.load(name)
        except ProjectNotFound:
            self.notify(f"No saved project named {name!r}.")
            return False
        self.project = project
        self.recompute()
        return True

    def export_csv(self) -> tuple:
        """Returns (filename, csv_text)."""
        return csv_filename(self.project.project_name), generate_csv(self.project, self.estimate)

    def print_report(self) -> bytes:
        return generate_report_pdf(self.project, self.estimate)

    def _replace(self, **changes) -> None:
        """Rebuild the project with changed fields so normalization runs again."""
        data = self.project.model_dump(by_alias=True)
        for key, value in changes.items():
            if key == "rooms":
                value = [r.model_dump(by_alias=True) if isinstance(r, Room) else r for r in value]
            data[key] = value
        self.project = Project.model_validate(data)
        self.recompute()
