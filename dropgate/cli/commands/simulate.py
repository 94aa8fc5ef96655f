"""
Simulation CLI command.

Replays a recorded sequence of transport and user events through the
consent orchestrator, showing notifications on the console and the
consent decisions sent back to the transport.

Script format (JSON list, processed in order):

    [
      {"event": "offer",
       "transfer": {"id": "t1", "pin_code": "482913",
                    "files": [{"name": "photo.jpg", "size": 1024}]},
       "device": {"id": "abcd", "name": "Pixel 8"}},
      {"event": "respond", "id": "t1", "action": "ACCEPT"},
      {"event": "finish", "id": "t1", "error": null},
      {"event": "auto-accept", "value": true}
    ]
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import click
from rich.console import Console
from rich.table import Table

from dropgate.config import Config
from dropgate.constants import TRANSFER_ID_KEY
from dropgate.core.notifications import ConsoleNotificationCenter, NotificationPresenter
from dropgate.core.transfer import (
    Orchestrator,
    RemoteDeviceInfo,
    TransferMetadata,
    TransferSession,
)
from dropgate.exceptions import ErrorKind, TransferError, TransportError

logger = logging.getLogger(__name__)


class RecordingTransport:
    """Transport stand-in that records consent decisions."""

    def __init__(self) -> None:
        self.decisions: list[tuple[str, bool]] = []

    def submit_consent(self, transfer_id: str, accept: bool) -> None:
        logger.debug(f"submit_consent({transfer_id!r}, {accept})")
        self.decisions.append((transfer_id, accept))


def parse_error(value: Optional[str]) -> Optional[BaseException]:
    """
    Build the failure reported by a finish event.

    Known error kinds ("io", "protocol", ...) become TransportErrors;
    any other string is treated as a free-form error description.
    """
    if value is None:
        return None
    try:
        return TransportError(ErrorKind(value))
    except ValueError:
        return TransferError(value)


def load_script(path: Path) -> list[dict[str, Any]]:
    """Load and sanity-check a simulation script."""
    with open(path) as f:
        events = json.load(f)
    if not isinstance(events, list):
        raise ValueError("script must be a JSON list of events")
    for index, event in enumerate(events):
        if not isinstance(event, dict) or "event" not in event:
            raise ValueError(f"event #{index} has no 'event' field")
    return events


def run_script(
    events: list[dict[str, Any]],
    orchestrator: Orchestrator,
    auto_accept: list[bool],
) -> None:
    """
    Feed events to the orchestrator.

    Args:
        events: Parsed script.
        orchestrator: Orchestrator under simulation.
        auto_accept: Single-item list holding the live auto-accept value;
                    "auto-accept" events update it in place.
    """
    for event in events:
        kind = event["event"]
        if kind == "offer":
            orchestrator.offer(
                TransferMetadata.from_dict(event["transfer"]),
                RemoteDeviceInfo(**event["device"]),
            )
        elif kind == "respond":
            orchestrator.handle_notification_response(
                {TRANSFER_ID_KEY: event["id"]},
                event.get("action"),
            )
        elif kind == "finish":
            orchestrator.transfer_finished(event["id"], parse_error(event.get("error")))
        elif kind == "auto-accept":
            auto_accept[0] = bool(event["value"])
        else:
            raise ValueError(f"unknown event type: {kind}")


@click.command()
@click.argument("script", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--auto-accept/--no-auto-accept",
    default=None,
    help="Override the configured auto-accept setting.",
)
@click.pass_context
def simulate(ctx: click.Context, script: Path, auto_accept: Optional[bool]) -> None:
    """Replay transfer events from SCRIPT through the consent flow."""
    console: Console = ctx.obj.get("console", Console())
    config: Config = ctx.obj["config"]

    try:
        events = load_script(script)
    except (ValueError, OSError) as e:
        console.print(f"[red]Invalid script {script}: {e}[/red]", soft_wrap=True)
        sys.exit(1)

    live_setting = [config.auto_accept if auto_accept is None else auto_accept]
    transport = RecordingTransport()
    presenter = NotificationPresenter(
        ConsoleNotificationCenter(console=console),
        sound=config.notifications.sound,
    )
    presenter.start()

    orchestrator = Orchestrator(
        transport=transport,
        presenter=presenter,
        auto_accept=lambda: live_setting[0],
        app_name=config.notifications.app_name,
    )

    outcomes: dict[str, str] = {}

    def record_outcome(session: TransferSession) -> None:
        outcomes[session.transfer_id] = session.state.value

    orchestrator.on_session_resolved(record_outcome)

    try:
        run_script(events, orchestrator, live_setting)
    except (KeyError, TypeError, ValueError) as e:
        console.print(f"[red]Invalid event in {script}: {e}[/red]", soft_wrap=True)
        sys.exit(1)

    for session in orchestrator.active_sessions():
        outcomes[session.transfer_id] = session.state.value

    table = Table(title="Consent Decisions")
    table.add_column("Transfer", style="cyan", no_wrap=True)
    table.add_column("Consent")
    table.add_column("Outcome")

    decisions = dict(transport.decisions)
    for transfer_id, outcome in outcomes.items():
        if transfer_id in decisions:
            consent = "[green]accept[/green]" if decisions[transfer_id] else "[red]decline[/red]"
        else:
            consent = "[dim]-[/dim]"
        table.add_row(transfer_id, consent, outcome)

    console.print(table)
    console.print(
        f"\n[dim]{len(events)} event(s), "
        f"{len(orchestrator.active_sessions())} transfer(s) still active[/dim]"
    )
