from typing import List

import typer

from buildprov.cli import core
from buildprov.kernel.services import ServiceOutcome

app = typer.Typer(help="Stop or reconfigure Windows services.", no_args_is_help=True)


def _parse_arguments(pairs: List[str]) -> dict[str, str]:
    arguments = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected KEY=VALUE, got '{pair}'")
        arguments[key.strip().replace("-", "_")] = value
    return arguments


@app.command("stop")
def stop(
    name: str = typer.Argument(..., help="Service name."),
    strict: bool = typer.Option(False, "--strict", help="Fail if the service does not exist."),
):
    """
    Stop a service and wait for it to reach the stopped state.
    """
    with core.exit_on_failure():
        outcome = core.build_service_controller().stop_service(name, stop_on_error=strict)

    if outcome is ServiceOutcome.ABSENT:
        typer.echo(f"Service [{name}] is not found.")
    elif outcome is ServiceOutcome.STOP_FAILED:
        typer.echo(f"Failed to stop service [{name}]; continuing.")
    else:
        typer.echo(f"Service [{name}] has been stopped.")


@app.command("set")
def set_arguments(
    name: str = typer.Argument(..., help="Service name."),
    pairs: List[str] = typer.Argument(..., metavar="KEY=VALUE...", help="start_type, display_name, description, username, password or status."),
):
    """
    Apply configuration to a service. Failures are reported but never fatal.
    """
    arguments = _parse_arguments(pairs)
    outcome = core.build_service_controller().set_service_arguments(name, arguments)

    if outcome is ServiceOutcome.ABSENT:
        typer.echo(f"Service [{name}] is not found.")
    elif outcome is ServiceOutcome.APPLY_FAILED:
        typer.echo(f"Failed to set service [{name}] arguments; continuing.")
    else:
        typer.echo(f"Service [{name}] updated.")
