from __future__ import annotations

from pathlib import Path

import typer

from space.cli import prompts
from space.cli.commands._helpers import exit_with_error, release_error_code, require_not_blank
from space.cli.context import build_context
from space.core.config import SpaceConfig
from space.core.errors import ErrorCode
from space.core.result import Err
from space.output.console import ConsoleProtocol
from space.project.state import ProjectStateStore
from space.services.release.orchestrator import ReleaseOrchestrator
from space.services.release.selector import RevisionSelector


def release(
    project_dir: Path = typer.Option(Path("./"), "--dir", "-d", help="src of project to release"),
    project_id: str | None = typer.Option(
        None, "--id", "-i", help="project id of an existing project"
    ),
    revision_id: str | None = typer.Option(None, "--rid", help="revision id for release"),
    version: str | None = typer.Option(None, "--version", "-v", help="version for the release"),
    listed: bool = typer.Option(False, "--listed", help="listed on discovery"),
    use_latest: bool = typer.Option(False, "--confirm", help="confirm to use latest revision"),
    notes: str | None = typer.Option(None, "--notes", "-n", help="release notes"),
) -> None:
    """Create a new release from a revision."""
    ctx = build_context()
    console = ctx.console

    if use_latest and revision_id is not None:
        exit_with_error(
            console,
            "--confirm and --rid cannot be used together",
            code=ErrorCode.USER_ERROR,
        )

    require_not_blank(console, id=project_id, rid=revision_id, version=version)

    if revision_id is None and not use_latest and not prompts.is_interactive_terminal():
        exit_with_error(
            console,
            "revision id or confirm flag must be provided in non-interactive mode",
            code=ErrorCode.USER_ERROR,
            hint="pass --rid <revision-id> or --confirm",
        )

    if project_id is None:
        _ensure_project_initialized(project_dir, ctx.config, console)

    orchestrator = ReleaseOrchestrator(
        client=ctx.client,
        selector=RevisionSelector(
            client=ctx.client,
            choose=prompts.make_chooser(console),
            window=ctx.config.revision_window,
        ),
        console=console,
        confirm=prompts.confirm,
        config=ctx.config,
    )
    result = orchestrator.run(
        project_dir=project_dir,
        project_id=project_id,
        revision_id=revision_id,
        version=version,
        listed=listed,
        notes=notes,
        use_latest=True if use_latest else None,
    )
    # The orchestrator already reported the failure.
    if isinstance(result, Err):
        raise typer.Exit(code=int(release_error_code(result.error.kind)))


def _ensure_project_initialized(
    project_dir: Path, config: SpaceConfig, console: ConsoleProtocol
) -> None:
    opened = ProjectStateStore.open(project_dir, config=config)
    if isinstance(opened, Err):
        exit_with_error(console, opened.error.message, code=ErrorCode.IO_ERROR)

    initialized = opened.value.is_initialized()
    if isinstance(initialized, Err):
        exit_with_error(console, initialized.error.message, code=ErrorCode.IO_ERROR)
    if not initialized.value:
        exit_with_error(
            console,
            f"project is not initialized: {project_dir}",
            code=ErrorCode.ENV_ERROR,
            hint="run `space link --id <project-id>` or pass --id",
        )
