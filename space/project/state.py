"""Per-project local state.

A project directory that has been linked to Space carries a hidden state
directory (``.space`` by default) with two files:

  .space/meta    JSON record identifying the remote project
  .space/README  note warning not to commit the directory

The directory is kept out of version control by patching the project's
``.gitignore``. Missing metadata means "not initialized yet" and is reported
as ``Ok(None)``; only genuine I/O or decode failures are errors.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path

from space.core.config import SpaceConfig
from space.core.result import Err, Ok, Result
from space.core.structured import StrDict, as_str_dict, get_str
from space.platform.files import DIR_MODE, FILE_MODE, atomic_write_text

__all__ = [
    "ProjectMeta",
    "ProjectStateStore",
    "StateError",
]

_GITIGNORE = ".gitignore"
_KNOWN_KEYS = ("id", "name", "alias")


@dataclass(frozen=True, slots=True)
class StateError:
    message: str
    path: Path | None = None


def _empty_extra() -> StrDict:
    return {}


@dataclass(frozen=True, slots=True)
class ProjectMeta:
    """Identity of the remote project a directory is linked to.

    ``extra`` holds keys written by other tooling; they are carried through
    unchanged so a read/write cycle never drops them.
    """

    id: str
    name: str | None = None
    alias: str | None = None
    extra: StrDict = field(default_factory=_empty_extra)

    def to_json(self) -> str:
        data: StrDict = dict(self.extra)
        data["id"] = self.id
        if self.name is not None:
            data["name"] = self.name
        if self.alias is not None:
            data["alias"] = self.alias
        return json.dumps(data, sort_keys=True)

    @classmethod
    def from_json(cls, text: str) -> ProjectMeta:
        """Decode a meta record.

        Raises:
            ValueError: If the text is not a JSON object with a non-empty id.
        """
        data = as_str_dict(json.loads(text))
        if data is None:
            raise ValueError("project meta must be a JSON object")
        project_id = get_str(data, "id")
        if project_id is None:
            raise ValueError("project meta has no id")
        name = data.get("name")
        alias = data.get("alias")
        return cls(
            id=project_id,
            name=name if isinstance(name, str) else None,
            alias=alias if isinstance(alias, str) else None,
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )


class ProjectStateStore:
    """Reads and writes the hidden state directory of one project root."""

    def __init__(self, root: Path, *, config: SpaceConfig) -> None:
        self.root = root
        self.config = config
        self.state_path = root / config.state_dir
        self.meta_path = self.state_path / config.meta_file

    @classmethod
    def open(
        cls,
        root: Path | None = None,
        *,
        create_dirs: bool = False,
        config: SpaceConfig | None = None,
    ) -> Result[ProjectStateStore, StateError]:
        """Bind a store to ``root`` (default: the current directory).

        With ``create_dirs`` the state directory is created (mode 0o770);
        an existing directory is fine.
        """
        cfg = config or SpaceConfig()
        if root is None:
            try:
                root = Path.cwd()
            except OSError as e:
                return Err(StateError(f"cannot determine working directory: {e}"))

        store = cls(root, config=cfg)
        if create_dirs:
            try:
                store.state_path.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
            except OSError as e:
                return Err(
                    StateError(
                        f"could not create {store.state_path}: {e}",
                        path=store.state_path,
                    )
                )
        return Ok(store)

    def store_meta(self, meta: ProjectMeta) -> Result[None, StateError]:
        """Overwrite the meta file with ``meta``.

        The README note is written first and on a best-effort basis: if it
        cannot be written the meta write still goes ahead.
        """
        encoded = meta.to_json()

        readme = self.state_path / self.config.readme_file
        try:
            atomic_write_text(readme, self._readme_text(), mode=FILE_MODE)
        except OSError:
            pass  # best-effort

        try:
            atomic_write_text(self.meta_path, encoded, mode=FILE_MODE)
        except OSError as e:
            return Err(StateError(f"could not write {self.meta_path}: {e}", path=self.meta_path))
        return Ok(None)

    def get_meta(self) -> Result[ProjectMeta | None, StateError]:
        """Read the meta file; ``Ok(None)`` when the project is not initialized."""
        try:
            text = self.meta_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return Ok(None)
        except OSError as e:
            return Err(StateError(f"could not read {self.meta_path}: {e}", path=self.meta_path))
        except UnicodeDecodeError as e:
            return Err(
                StateError(f"invalid project meta in {self.meta_path}: {e}", path=self.meta_path)
            )

        try:
            return Ok(ProjectMeta.from_json(text))
        except ValueError as e:
            # json.JSONDecodeError is a ValueError subclass
            return Err(
                StateError(f"invalid project meta in {self.meta_path}: {e}", path=self.meta_path)
            )

    def is_initialized(self) -> Result[bool, StateError]:
        try:
            self.meta_path.stat()
        except FileNotFoundError:
            return Ok(False)
        except OSError as e:
            return Err(StateError(f"could not stat {self.meta_path}: {e}", path=self.meta_path))
        return Ok(True)

    def ensure_gitignored(self) -> Result[None, StateError]:
        """Make sure ``.gitignore`` at the project root ignores the state dir.

        Creates the file when missing, leaves it alone when a line already
        starts with the pattern, otherwise appends the pattern on a new line.
        """
        pattern = self.config.state_dir
        path = self.root / _GITIGNORE

        try:
            contents: str | None = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            contents = None
        except OSError as e:
            return Err(StateError(f"failed to read {_GITIGNORE}: {e}", path=path))
        except UnicodeDecodeError as e:
            return Err(StateError(f"{_GITIGNORE} is not valid UTF-8: {e}", path=path))

        if contents is None:
            new_contents = pattern
        elif self._has_pattern(contents, pattern):
            return Ok(None)
        else:
            new_contents = f"{contents}\n{pattern}"

        try:
            atomic_write_text(path, new_contents, mode=FILE_MODE)
        except OSError as e:
            return Err(StateError(f"failed to add {pattern} to {_GITIGNORE}: {e}", path=path))
        return Ok(None)

    @staticmethod
    def _has_pattern(contents: str, pattern: str) -> bool:
        return re.search(rf"^({re.escape(pattern)})\b", contents, flags=re.MULTILINE) is not None

    def _readme_text(self) -> str:
        return (
            f"Don't commit this folder ({self.config.state_dir}) to git "
            "as it may contain security-sensitive data."
        )
