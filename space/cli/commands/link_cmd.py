from __future__ import annotations

from pathlib import Path

import typer

from space.api.auth import login_info
from space.cli.commands._helpers import exit_with_error, require_not_blank
from space.cli.context import build_context
from space.core.errors import ErrorCode
from space.core.result import Err
from space.output.console import Style
from space.project.state import ProjectMeta, ProjectStateStore


def link(
    project_dir: Path = typer.Option(Path("./"), "--dir", "-d", help="src of project to link"),
    project_id: str = typer.Option(..., "--id", "-i", help="project id of the project to link"),
) -> None:
    """Link a local directory with an existing project."""
    ctx = build_context()
    console = ctx.console

    require_not_blank(console, id=project_id)
    project_id = project_id.strip()

    project = ctx.client.get_project(project_id)
    if isinstance(project, Err):
        e = project.error
        if e.is_unauthenticated:
            console.print(login_info(), Style.WARNING)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
        if e.kind == "not_found":
            exit_with_error(
                console,
                f"no project with id {project_id} found",
                code=ErrorCode.USER_ERROR,
            )
        exit_with_error(console, f"failed to link project: {e}", code=ErrorCode.NETWORK_ERROR)

    opened = ProjectStateStore.open(project_dir, create_dirs=True, config=ctx.config)
    if isinstance(opened, Err):
        exit_with_error(console, opened.error.message, code=ErrorCode.IO_ERROR)
    store = opened.value

    info = project.value
    stored = store.store_meta(ProjectMeta(id=info.id, name=info.name, alias=info.alias))
    if isinstance(stored, Err):
        exit_with_error(console, stored.error.message, code=ErrorCode.IO_ERROR)

    ignored = store.ensure_gitignored()
    if isinstance(ignored, Err):
        # The link itself succeeded; the user can add the pattern by hand.
        console.warning(ignored.error.message)
        console.print(f"hint: add {ctx.config.state_dir} to .gitignore", Style.DIM)

    console.success(f"Project {info.name or info.id} was linked!")
    console.print(f"Project id: {info.id}", Style.DIM)
