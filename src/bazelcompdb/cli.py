"""CLI entry point for bazel-compdb."""

from __future__ import annotations

from pathlib import Path

import click
import yaml

from bazelcompdb import __version__
from bazelcompdb.compdb.generation_log import DEFAULT_LOG_FILE, generation_log_context
from bazelcompdb.compdb.generator import GenerationContext, GenerationOverrides, run_generation
from bazelcompdb.compdb.task_runner import SubprocessTaskRunner
from bazelcompdb.core.config import ConfigManager
from bazelcompdb.core.events import TerminationEventSource
from bazelcompdb.core.exceptions import ConfigError
from bazelcompdb.core.health import HealthChecker
from bazelcompdb.core.notify import ClickNotificationSink


def _load_config(project_root: Path | None = None) -> ConfigManager:
    """Load .env and YAML configuration; exit 1 on invalid configuration."""
    config = ConfigManager(project_root=project_root)
    try:
        config.load()
    except ConfigError as e:
        click.echo(str(e), err=True)
        raise SystemExit(1)
    return config


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """bazel-compdb: build a clang compilation database for Bazel targets."""
    pass


@main.command()
@click.option("--target", "targets", multiple=True, help="Bazel target label; repeat for several (overrides compdb.targets).")
@click.option("--cwd", "cwd", type=click.Path(path_type=Path, exists=True, file_okay=False), help="Directory to run bazel in (default: workspace root).")
@click.option("--repository", "repository_root", type=click.Path(path_type=Path, exists=True, file_okay=False), help="Directory holding aspects.bzl and postprocess.py.")
@click.option("--bazel", "bazel", help="Bazel executable (default: bazel).")
@click.option("--log-file", "log_file", type=click.Path(path_type=Path), help=f"Write the run log to this file (default: <workspace>/{DEFAULT_LOG_FILE}).")
@click.option("--verbose", "-v", is_flag=True, help="Verbose run log (DEBUG level).")
@click.option("--dry-run", is_flag=True, help="Print the command that would run and exit.")
@click.option("--notify-failure", is_flag=True, help="Report a failed step as an error instead of staying silent.")
def generate(
    targets: tuple[str, ...],
    cwd: Path | None,
    repository_root: Path | None,
    bazel: str | None,
    log_file: Path | None,
    verbose: bool,
    dry_run: bool,
    notify_failure: bool,
) -> None:
    """Run bazel with the compdb aspect and post-process its build-event log."""
    config = _load_config()
    cfg = config.config
    events = TerminationEventSource()
    context = GenerationContext(
        config_manager=config,
        sink=ClickNotificationSink(),
        events=events,
        executor=SubprocessTaskRunner(
            events,
            clear=cfg.presentation.clear,
            echo=cfg.presentation.echo,
        ),
        overrides=GenerationOverrides(
            targets=list(targets) or None,
            working_directory=cwd.resolve() if cwd else None,
            repository_root=repository_root.resolve() if repository_root else None,
            tool_path=bazel,
        ),
        notify_failure=True if notify_failure else None,
        dry_run=dry_run,
    )

    log_path = log_file.resolve() if log_file else config.project_root / DEFAULT_LOG_FILE
    with generation_log_context(log_path, verbose=verbose) as log:
        log.info("=== Compilation database generation started ===")
        log.info("workspace=%s", config.project_root)
        result = run_generation(context)
        log.info("=== Generation finished: %s ===", "success" if result.success else "failed")

    if not result.success:
        if result.steps:
            click.echo(f"Run log: {log_path}", err=True)
        raise SystemExit(1)


@main.command()
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output.")
@click.option("--skip-bazel", is_flag=True, help="Skip running 'bazel version'.")
def check(verbose: bool, skip_bazel: bool) -> None:
    """Verify bazel, the aspect repository, and target configuration."""
    config = _load_config()
    checker = HealthChecker(config=config)
    results = checker.check_all(skip_bazel=skip_bazel)
    for r in results:
        status = "OK" if r.ok else "FAIL"
        click.echo(f"  {r.name}: {status}")
        if verbose or not r.ok:
            click.echo(f"    {r.message}")
        if not r.ok and r.suggestion:
            click.echo(f"    → {r.suggestion}")
    if all(r.ok for r in results):
        click.echo("All checks passed.")
    else:
        click.echo("Some checks failed. Fix the issues above or follow the suggested steps.", err=True)
        raise SystemExit(1)


@main.command("show-config")
def show_config() -> None:
    """Print the resolved configuration as YAML."""
    config = _load_config()
    click.echo(f"# workspace: {config.project_root}")
    click.echo(f"# config file: {config.config_path}")
    click.echo(yaml.safe_dump(config.config.model_dump(), sort_keys=False).rstrip())


if __name__ == "__main__":
    main()
