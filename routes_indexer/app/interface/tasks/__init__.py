from __future__ import annotations

from collections.abc import Awaitable, Callable

from routes_indexer.app.domain.models import RouteConfig

from .routes.fetch_routes_task import fetch_routes_task as routes__fetch_routes_task

TaskFn = Callable[..., Awaitable[RouteConfig]]

TASKS: dict[str, TaskFn] = {
    "routes__fetch_routes_task": routes__fetch_routes_task,
}
