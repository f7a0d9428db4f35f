"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .articles import articles_app, freshness_command
from .init import init_command
from .run import fetch_command, register_command
from .sources import sources_app

app = typer.Typer(
    name="spacenexus",
    help="Space Nexus - space industry blog aggregator",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("register")(register_command)
app.command("fetch")(fetch_command)
app.command("freshness")(freshness_command)
app.add_typer(sources_app, name="sources", help="Manage blog sources")
app.add_typer(articles_app, name="articles", help="Browse stored articles")


if __name__ == "__main__":
    app()
