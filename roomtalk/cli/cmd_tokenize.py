"""Tokenize and normalize commands."""

import asyncio
import json
import mimetypes
import sys

import click
from rich.markup import escape
from rich.table import Table

from . import cli
from .shared import console, parse_pairs


def _file_type(name: str) -> str:
    mime, _ = mimetypes.guess_type(name)
    if mime:
        kind = mime.split("/", 1)[0]
        if kind in ("image", "video", "audio"):
            return kind
    return "file"


@cli.command()
@click.argument("text")
@click.option("--room", "rooms", multiple=True, metavar="ID[=NAME]", help="Room the resolver knows about (repeatable).")
@click.option("--file", "files", multiple=True, metavar="KEY[=NAME]", help="File the resolver knows about (repeatable).")
@click.option("--json", "as_json", is_flag=True, help="Print wire tokens as JSON.")
@click.option("--motd", is_flag=True, help="Apply message-of-the-day limits.")
def tokenize(text, rooms, files, as_json, motd):
    """Tokenize TEXT (use - to read stdin)."""
    from roomtalk.config import load_settings
    from roomtalk.chat import (
        InvalidMotd,
        MessageTokenizer,
        MessageTooLong,
        MotdTooLong,
        RegistryResolver,
        describe_error,
        to_wire,
    )

    if text == "-":
        text = click.get_text_stream("stdin").read()

    try:
        room_names = parse_pairs(rooms, "--room")
        file_names = parse_pairs(files, "--file")
    except ValueError as e:
        raise click.BadParameter(str(e))

    # Seeded registries override any configured remote lookups
    resolve_room = None
    if room_names:
        resolve_room = RegistryResolver({
            room_id: {"id": room_id, "name": name} for room_id, name in room_names.items()
        })
    resolve_file = None
    if file_names:
        resolve_file = RegistryResolver({
            key: {"key": key, "name": name, "type": _file_type(name), "href": f"/g/{key}"}
            for key, name in file_names.items()
        })

    tokenizer = MessageTokenizer.from_settings(load_settings(), resolve_room, resolve_file)

    try:
        if motd:
            tokens = asyncio.run(tokenizer.tokenize_motd(text))
        else:
            tokens = asyncio.run(tokenizer.tokenize(text))
    except (MessageTooLong, MotdTooLong, InvalidMotd) as e:
        console.print(f"[red]Error:[/red] {describe_error(e)}", highlight=False)
        sys.exit(1)

    wire = to_wire(tokens)
    if as_json:
        click.echo(json.dumps(wire, ensure_ascii=False))
        return

    table = Table(title=f"{len(wire)} token(s)", padding=(0, 1))
    table.add_column("#", style="dim", justify="right")
    table.add_column("Tag", style="bold")
    table.add_column("Value")
    for i, part in enumerate(wire):
        fields = {k: v for k, v in part.items() if k != "t"}
        if set(fields) == {"v"}:
            value = repr(fields["v"])
        else:
            value = json.dumps(fields, ensure_ascii=False) if fields else ""
        table.add_row(str(i), part["t"], escape(value))
    console.print(table)


@cli.command()
@click.argument("url")
def normalize(url):
    """Print the normalized form of URL."""
    from roomtalk.config import load_settings
    from roomtalk.chat import normalize_url

    try:
        click.echo(normalize_url(url, load_settings().base_url))
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        sys.exit(1)
