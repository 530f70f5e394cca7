from __future__ import annotations

import json
import logging
from pathlib import Path

from routes_indexer.app.application.services.fetch_routes import fetch_routes
from routes_indexer.app.domain.models import RouteConfig
from routes_indexer.app.infrastructure.factories.route_aggregator_factory import (
    route_aggregator_factory,
)

logger = logging.getLogger(__name__)


async def fetch_routes_task(
    *,
    chain_id: int,
    hub_pool_address: str | None = None,
    output: str | Path | None = None,
    backend: str = "web3",
) -> RouteConfig:
    """
    Task: build the enabled route list for the hub pool on a given chain.

    - replays hub pool events to discover spoke pools and token mappings,
    - replays every spoke pool's EnabledDepositRoute events concurrently,
    - writes the resulting route config as JSON when `output` is given.
    """
    aggregator = route_aggregator_factory(backend=backend)

    route_config = await fetch_routes(
        aggregator=aggregator,
        hub_chain_id=chain_id,
        hub_pool_address=hub_pool_address or None,
    )

    if output:
        path = Path(output)
        path.write_text(json.dumps(route_config.to_dict(), indent=2) + "\n", encoding="utf-8")
        logger.info(
            "Wrote route config",
            extra={"path": str(path), "routes": len(route_config.routes)},
        )

    return route_config
