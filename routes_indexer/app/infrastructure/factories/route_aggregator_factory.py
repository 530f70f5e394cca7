from __future__ import annotations

from routes_indexer.app.application.services.fetch_routes import RouteAggregator
from routes_indexer.app.config import Settings, settings
from routes_indexer.app.domain.models import MissingL1TokenPolicy
from routes_indexer.app.infrastructure.factories.chain_clients_factory import chain_clients_factory
from routes_indexer.app.infrastructure.registry.chains import StaticChainConfiguration
from routes_indexer.app.infrastructure.registry.deployments import StaticDeploymentRegistry


def route_aggregator_factory(
    *,
    backend: str,
    app_settings: Settings | None = None,
    missing_l1_token_policy: MissingL1TokenPolicy | None = None,
) -> RouteAggregator:
    """
    Wire a RouteAggregator:
    - chain clients for the given backend,
    - built-in deployment registry and chain configuration,
    - missing L1 token policy (argument, else settings).
    """
    app_settings = app_settings or settings
    return RouteAggregator(
        clients=chain_clients_factory(backend=backend, app_settings=app_settings),
        deployments=StaticDeploymentRegistry(),
        chains=StaticChainConfiguration(),
        missing_l1_token_policy=missing_l1_token_policy or app_settings.missing_l1_token_policy,
    )
