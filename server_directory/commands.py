import json

import click

from .app import app
from .directory import FLAGS, get_directory
from .errors import NotFoundError


@app.cli.command("load-json")
@click.argument("filename")
@click.option("--replace", is_flag=True, help="Discard the current list first.")
def load_json(filename, replace):
	"""Load servers from a JSON server list.
	"""
	with open(filename, "r", encoding="utf-8") as fd:
		data = json.load(fd)

	if isinstance(data, dict):
		data = data.get("servers", data.get("list", []))
	if not isinstance(data, list):
		raise click.ClickException("Expected a list of servers.")

	added = get_directory().import_servers(data, replace)

	click.echo(click.style(f"Loaded {added} of {len(data)} servers", fg="green"))


@app.cli.command("list-servers")
def list_servers():
	"""Print the ranked server list."""
	for server in get_directory().list():
		flags = "".join(f" [{flag}]" for flag in FLAGS if getattr(server, flag))
		click.echo(f"{server.rank:>3}. {server.id} ({server.ip}) "
			f"{server.votes} votes{flags}")


@app.cli.command("set-flag")
@click.argument("server_id")
@click.argument("flag", type=click.Choice(FLAGS))
@click.option("--off", is_flag=True, help="Clear the flag instead of setting it.")
def set_flag(server_id, flag, off):
	"""Mark a server as featured or verified."""
	try:
		get_directory().set_flag(server_id, flag, not off)
	except NotFoundError as e:
		raise click.ClickException(e.message)

	state = "cleared" if off else "set"
	click.echo(click.style(f"{flag} {state} on {server_id}", fg="green"))
