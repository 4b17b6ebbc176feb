"""CLI entrypoint: Typer app definition and command registration"""

import typer

from manifold.cli.commands import (
    create_cmd, list_cmd, load_cmd, main_callback, pick_cmd, save_cmd, serve_cmd, set_url_cmd, token_cmd,
)


app = typer.Typer(name="manifold", no_args_is_help=True, help="Manifold website-builder project store")

app.callback()(main_callback)
app.command(name="list")(list_cmd)
app.command(name="create")(create_cmd)
app.command(name="set-url")(set_url_cmd)
app.command(name="load")(load_cmd)
app.command(name="save")(save_cmd)
app.command(name="serve")(serve_cmd)
app.command(name="pick")(pick_cmd)
app.command(name="token")(token_cmd)
