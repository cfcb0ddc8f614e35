from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from pydantic import ValidationError

from jsonsyslog_common.config import load_send_options
from jsonsyslog_common.logging import setup_logging
from jsonsyslog_common.models import SendOptions
from jsonsyslog_common.settings import get_settings
from jsonsyslog_emitter.emitter import Emitter
from jsonsyslog_emitter.environment import HostEnvironment
from jsonsyslog_emitter.receiver import TcpLineReceiver
from jsonsyslog_emitter.record import build_record, encode_line

app = typer.Typer(
    help="jsonsyslog: send structured JSON log lines to a syslog receiver over TCP.",
    no_args_is_help=True,
)


@app.callback()
def main() -> None:
    """
    Root command for the jsonsyslog CLI.
    """
    return


def _merge_options(config: Optional[Path], flags: Dict[str, Any]) -> SendOptions:
    merged: Dict[str, Any] = dict(get_settings().send_defaults())
    if config is not None:
        try:
            merged.update(load_send_options(config))
        except (FileNotFoundError, ValueError) as exc:
            raise typer.BadParameter(str(exc), param_hint="--config")
    merged.update({k: v for k, v in flags.items() if v is not None})
    try:
        return SendOptions.model_validate(merged)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc))


@app.command("send")
def send_cmd(
    service: Optional[str] = typer.Option(None, "--service", help="Application or service name"),
    process: Optional[str] = typer.Option(None, "--process", help="Module, subsystem or script"),
    action: Optional[str] = typer.Option(None, "--action", help="What is being logged, e.g. Deploy"),
    result: Optional[str] = typer.Option(None, "--result", help="Outcome, e.g. Success"),
    message: Optional[str] = typer.Option(None, "--message", "-m", help="Free-text message"),
    category: Optional[str] = typer.Option(None, "--category", help="Classification tag"),
    host: Optional[str] = typer.Option(None, "--host", help="Receiver host or IP"),
    port: Optional[int] = typer.Option(None, "--port", help="Receiver TCP port"),
    user: Optional[str] = typer.Option(None, "--user", help="Defaults to the OS user"),
    server_name: Optional[str] = typer.Option(
        None, "--server-name", help="Defaults to the local host name"
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Connect/write timeout in seconds"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML file with send options"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print the line instead of sending it"
    ),
) -> None:
    """
    Send one JSON log line. Delivery failures are reported on stderr only.
    """
    options = _merge_options(
        config,
        {
            "service": service,
            "process": process,
            "action": action,
            "result": result,
            "message": message,
            "category": category,
            "host": host,
            "port": port,
            "user": user,
            "server_name": server_name,
            "timeout_seconds": timeout,
        },
    )
    if dry_run:
        record = build_record(options, HostEnvironment())
        typer.echo(encode_line(record).decode("utf-8"), nl=False)
        return
    Emitter().send(options)


@app.command("listen")
def listen(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(5514, "--port", help="TCP port to listen on"),
    pretty: bool = typer.Option(False, "--pretty", help="Indent JSON lines"),
) -> None:
    """
    Print lines sent by `jsonsyslog send` (a local stand-in for a receiver).
    """
    setup_logging("jsonsyslog", level=get_settings().log_level)
    receiver = TcpLineReceiver(host=host, port=port)
    try:
        while True:
            for line in receiver.poll(100):
                text = line.raw
                if pretty:
                    try:
                        text = json.dumps(line.as_json_dict(), indent=2)
                    except ValueError:
                        pass
                typer.echo(f"{line.remote_addr} -> {text}")
            time.sleep(0.2)
    except KeyboardInterrupt:
        pass
    finally:
        receiver.close()


if __name__ == "__main__":
    app()
