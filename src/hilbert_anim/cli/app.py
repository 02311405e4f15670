"""Command line entry point."""

import typer

from hilbert_anim.cli.commands.render import render_command

app = typer.Typer(
    help="Render animated Hilbert curves.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
app.command(name="render")(render_command)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
