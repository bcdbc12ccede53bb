import json
import os
import tempfile
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from .domain.errors import RepositoryConfigError
from .domain.models import RepositorySpec
from .registry.repository import DefaultUpdateRepository

CONFIG_DIR = Path(os.environ.get("PLUGIN_UPDATE_HOME", Path.home() / ".plugin-update"))
REPOSITORIES_FILE = CONFIG_DIR / "repositories.json"

_specs_adapter = TypeAdapter(List[RepositorySpec])


def load_repositories(path: Optional[Path] = None) -> List[RepositorySpec]:
    """load the configured repositories; a missing file means none."""
    path = path or REPOSITORIES_FILE
    if not path.exists():
        return []

    try:
        with open(path, "r") as f:
            data = json.load(f)
        return _specs_adapter.validate_python(data)
    except (json.JSONDecodeError, ValidationError) as e:
        raise RepositoryConfigError(f"invalid repositories file {path}: {e}") from e
    except (IOError, PermissionError, OSError) as e:
        raise RepositoryConfigError(f"failed to read repositories file {path}: {e}") from e


def save_repositories(specs: List[RepositorySpec], path: Optional[Path] = None):
    """write the repositories file, replacing it in one step."""
    path = path or REPOSITORIES_FILE
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with tempfile.NamedTemporaryFile("w", dir=str(path.parent), delete=False) as f:
            json.dump([spec.model_dump() for spec in specs], f, indent=2)
            temp_name = f.name
        Path(temp_name).replace(path)
    except (IOError, PermissionError, OSError) as e:
        raise RepositoryConfigError(f"failed to write repositories file {path}: {e}") from e


def add_repository(id: str, url: str, path: Optional[Path] = None) -> RepositorySpec:
    """add a repository, replacing any existing entry with the same id."""
    specs = [s for s in load_repositories(path) if s.id != id]
    spec = RepositorySpec(id=id, url=url)
    specs.append(spec)
    save_repositories(specs, path)
    return spec


def remove_repository(id: str, path: Optional[Path] = None) -> bool:
    specs = load_repositories(path)
    remaining = [s for s in specs if s.id != id]
    if len(remaining) == len(specs):
        return False
    save_repositories(remaining, path)
    return True


def create_repositories(specs: List[RepositorySpec]) -> List[DefaultUpdateRepository]:
    return [DefaultUpdateRepository(spec.id, spec.url) for spec in specs]
