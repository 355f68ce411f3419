import typer

from kubetoken import __version__
from kubetoken.cli.context import current, list_contexts, refresh, select
from kubetoken.constants import PROJECT_NAME
from kubetoken.logger import setup_logger


def version_callback(version: bool) -> None:
    if version:
        typer.echo(f"{PROJECT_NAME} version: {__version__}")
        raise typer.Exit()


cli = typer.Typer(
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
)


@cli.callback()
def main_options(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """
    Switch kubeconfig contexts and refresh the tokens of their users.
    """
    setup_logger(verbose)


cli.command(name="list")(list_contexts)

cli.command()(select)

cli.command()(refresh)

cli.command()(current)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
