import asyncio
import inspect
import json
import logging
from typing import Optional

import typer
from dotenv import load_dotenv
from InquirerPy import inquirer

from routes_indexer.app.config import settings
from routes_indexer.app.interface.tasks import TASKS


load_dotenv()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

app = typer.Typer()
routes_app = typer.Typer(help="cli for building bridge route lists from on chain events.")
app.add_typer(routes_app, name="routes")


@routes_app.command("fetch")
def fetch(
    hub_chain_id: int = typer.Option(settings.hub_pool_chain_id, help="Chain id of the hub pool."),
    hub_pool_address: Optional[str] = typer.Option(None, help="Override the registry hub pool address."),
    output: Optional[str] = typer.Option(None, help="Write the route config JSON to this file."),
) -> None:
    route_config = asyncio.run(
        TASKS["routes__fetch_routes_task"](
            chain_id=hub_chain_id,
            hub_pool_address=hub_pool_address,
            output=output,
        )
    )
    if not output:
        typer.echo(json.dumps(route_config.to_dict(), indent=2))


@routes_app.command("run")
def run() -> None:
    task_name = inquirer.select(
        message="Select task:",
        choices=list(TASKS.keys()),
        pointer="❯",
        instruction="Use ↑/↓ to move, Enter to select",
    ).execute()
    chain_id = int(
        inquirer.text(
            message="Hub pool chain ID (e.g. 1 for Ethereum mainnet):",
            default=str(settings.hub_pool_chain_id),
        ).execute()
    )

    task = TASKS[task_name]

    kwargs: dict[str, object] = {"chain_id": chain_id}

    sig = inspect.signature(task)
    params = sig.parameters

    if "hub_pool_address" in params:
        address = inquirer.text(
            message="Hub pool address (optional, empty = registry address):",
            default="",
        ).execute()
        kwargs["hub_pool_address"] = address.strip() or None
    if "output" in params:
        output = inquirer.text(
            message="Output file (optional, empty = print):",
            default="",
        ).execute()
        kwargs["output"] = output.strip() or None

    route_config = asyncio.run(task(**kwargs))  # type: ignore
    if not kwargs.get("output"):
        typer.echo(json.dumps(route_config.to_dict(), indent=2))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
