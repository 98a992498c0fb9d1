"""mdcorpus entrypoint: registers the corpus commands on one Typer app"""

import typer

from mdcorpus.cli.commands import check_cmd, export_cmd, list_cmd, main_callback, show_cmd


app = typer.Typer(name="mdcorpus", no_args_is_help=True, help="Load, validate, and export a +++ front-matter Markdown corpus")

app.callback()(main_callback)
app.command(name="check")(check_cmd)
app.command(name="list")(list_cmd)
app.command(name="show")(show_cmd)
app.command(name="export")(export_cmd)
