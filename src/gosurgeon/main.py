import typer

from gosurgeon import __version__
from gosurgeon.cli import mutations, queries
from gosurgeon.cli.config import CLIConfig
from gosurgeon.logging_config import setup_logging

app = typer.Typer(help="Locate and surgically rewrite Go declarations by name.")


# Global CLI callback for flags that apply to all commands
@app.callback()
def global_options(
    human: bool = typer.Option(
        False,
        "--human",
        "-H",
        help="Pretty output with tables and highlighted code (also via GOSURGEON_HUMAN_MODE env var)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log to stderr at DEBUG level"
    ),
):
    """
    gosurgeon: symbol indexing and span-addressed edits for Go source trees.

    Output is JSON by default; use --human/-H for tables.
    """
    if human:
        CLIConfig.set_machine_mode(False)

    if verbose:
        setup_logging(level="DEBUG", suppress_console=False, force=True)
    else:
        # stdout carries results; keep stderr quiet unless asked
        setup_logging(suppress_console=True, force=True)


# Queries
app.command(name="find")(queries.find_cmd)
app.command(name="read")(queries.read_cmd)
app.command(name="symbols")(queries.symbols_cmd)
app.command(name="api")(queries.api_cmd)

# Mutations
app.command(name="replace")(mutations.replace_cmd)
app.command(name="delete")(mutations.delete_cmd)
app.command(name="add")(mutations.add_cmd)
app.command(name="move")(mutations.move_cmd)
app.command(name="format")(mutations.format_cmd)


@app.command()
def version():
    """
    Prints the current version of gosurgeon.
    """
    typer.echo(f"gosurgeon v{__version__}")


if __name__ == "__main__":
    app()
