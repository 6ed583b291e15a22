"""Notification sink that writes to the terminal with click."""

from __future__ import annotations

import logging

import click

log = logging.getLogger(__name__)


class ClickNotificationSink:
    """Info messages go to stdout, errors to stderr in red."""

    def info(self, message: str) -> None:
        log.info("%s", message)
        click.echo(message)

    def error(self, message: str) -> None:
        log.error("%s", message)
        click.secho(message, fg="red", err=True)
