import click

from vintlang import __version__
from vintlang.cli.lint import lint
from vintlang.cli.lsp import lsp


@click.group(invoke_without_command=True)
@click.version_option(__version__, prog_name="vintlang")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """VintLang CLI"""
    # Show help when no subcommand is provided
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(lsp)
cli.add_command(lint)


if __name__ == "__main__":
    cli()
