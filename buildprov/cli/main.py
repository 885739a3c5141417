import typer

from buildprov.cli.commands import (
    catalog,
    doctor,
    fetch,
    install,
    service,
    version,
    vsix,
)
from buildprov.internal.logging import configure_logging

app = typer.Typer(
    name="buildprov",
    help="Download and run installers, and control services, while provisioning build-agent images.",
    no_args_is_help=True
)


@app.callback()
def main():
    configure_logging()


app.command("fetch")(fetch.fetch)
app.command("install")(install.install)
app.command("install-package")(install.install_package)
app.command("vsix")(vsix.vsix)
app.command("catalog")(catalog.catalog)
app.command("doctor")(doctor.doctor)
app.command("version")(version.version)
app.add_typer(service.app, name="service")

if __name__ == "__main__":
    app()
