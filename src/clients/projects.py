"""
Project Store
Named tree snapshots kept in memory or in a JSON file.
"""

from pathlib import Path

from pydantic import ValidationError as PydanticValidationError
from returns.pipeline import is_successful

from blueprint import Node, SavedProject
from core import JSONParseError, dumps_bytes, get_logger, loads, validate_tree
from core.id import new_project_id


logger = get_logger(__name__)


class ProjectStore:
    """
    Save, list and load named projects.

    With ``path`` set, every save rewrites the whole file (a JSON array of
    projects); without it projects live only for the process.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path else None
        self._projects: list[SavedProject] = self._read() if self.path else []
        logger.info("project_store_init", path=str(self.path) if self.path else None, projects=len(self._projects))

    def save_named_project(self, name: str, tree: Node) -> SavedProject:
        """Store a snapshot of ``tree`` under a new project id."""
        project = SavedProject(id=new_project_id(), name=name, tree=tree)
        self._projects.append(project)
        self._write()
        logger.info("project_saved", project_id=project.id, name=name)
        return project

    def list_projects(self) -> list[SavedProject]:
        return list(self._projects)

    def load_project(self, project_id: str) -> SavedProject | None:
        for project in self._projects:
            if project.id == project_id:
                return project
        logger.debug("project_not_found", project_id=project_id)
        return None

    def _read(self) -> list[SavedProject]:
        """
        Load projects from disk; entries with invalid trees are skipped.

        Raises:
            JSONParseError: If the file is not a JSON array
        """
        if not self.path.exists():
            return []

        records = loads(self.path.read_bytes())
        if not isinstance(records, list):
            raise JSONParseError(f"Project file {self.path} must contain a JSON array")

        projects: list[SavedProject] = []
        for record in records:
            tree = record.get("tree", record.get("schema")) if isinstance(record, dict) else None
            validation = validate_tree(tree)
            if not is_successful(validation):
                logger.warning("project_skipped", reason=validation.failure().message)
                continue
            try:
                projects.append(SavedProject.model_validate(record))
            except PydanticValidationError as e:
                logger.warning("project_skipped", reason=f"{e.error_count()} invalid fields")
        return projects

    def _write(self) -> None:
        if self.path is None:
            return
        data = dumps_bytes(
            [project.model_dump(mode="json", by_alias=True, exclude_none=True) for project in self._projects]
        )
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_bytes(data)
        tmp.replace(self.path)
