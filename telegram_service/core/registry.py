"""Host registration metadata and operation dispatch.

Labels, UI hints and sample results are presentation data for the host.
They never change how an operation behaves.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigItem:
    """A setting the deploying operator supplies once per service instance."""
    name: str
    display_name: str
    type: str = "STRING"
    required: bool = False
    hint: str = ""


@dataclass(frozen=True)
class ParamDef:
    name: str          # camelCase host-facing name
    label: str
    type: str
    arg: str           # keyword argument of the bound method
    required: bool = False
    description: str = ""
    ui_component: dict | None = None


@dataclass(frozen=True)
class OperationDef:
    name: str
    method_name: str
    route: str
    category: str
    description: str
    params: tuple[ParamDef, ...]
    sample_result: dict = field(default_factory=dict)
    appearance_color: tuple[str, str] | None = None

    @property
    def http_method(self) -> str:
        return self.route.split(" ", 1)[0]

    @property
    def path(self) -> str:
        return self.route.split(" ", 1)[1]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

@dataclass
class ServiceEntry:
    name: str
    factory: Callable[[dict], Any]
    config_items: tuple[ConfigItem, ...]
    operations: tuple[OperationDef, ...]


class ServiceRegistry:
    """Named services with their config items and callable operations."""

    def __init__(self) -> None:
        self._services: dict[str, ServiceEntry] = {}

    def add_service(
        self,
        name: str,
        factory: Callable[[dict], Any],
        config_items: list[ConfigItem] | tuple[ConfigItem, ...],
        operations: list[OperationDef] | tuple[OperationDef, ...],
    ) -> ServiceEntry:
        if name in self._services:
            raise ValueError(f"Service already registered: {name}")
        entry = ServiceEntry(name, factory, tuple(config_items), tuple(operations))
        self._services[name] = entry
        logger.info("Registered service %s (%d operations)", name, len(entry.operations))
        return entry

    def get(self, name: str) -> ServiceEntry:
        try:
            return self._services[name]
        except KeyError:
            raise KeyError(f"Unknown service: {name}") from None

    def create(self, name: str, config: dict) -> Any:
        """Instantiate a service after checking its required config items."""
        entry = self.get(name)
        missing = [
            item.name for item in entry.config_items
            if item.required and not config.get(item.name)
        ]
        if missing:
            raise ValueError(f"Missing config: {', '.join(missing)}")
        return entry.factory(config)

    def describe(self, name: str) -> dict:
        """JSON-serializable metadata document for the host UI."""
        entry = self.get(name)
        return {
            "name": entry.name,
            "config": [asdict(item) for item in entry.config_items],
            "operations": [
                {
                    "name": op.name,
                    "method": op.method_name,
                    "route": op.route,
                    "category": op.category,
                    "description": op.description,
                    "appearanceColor": list(op.appearance_color or ()),
                    "params": [
                        {
                            "name": p.name,
                            "label": p.label,
                            "type": p.type,
                            "required": p.required,
                            "description": p.description,
                            "uiComponent": p.ui_component,
                        }
                        for p in op.params
                    ],
                    "sampleResult": op.sample_result,
                }
                for op in entry.operations
            ],
        }


def bind_params(op: OperationDef, params: dict) -> dict:
    """Map camelCase host params to method keyword arguments."""
    known = {p.name: p for p in op.params}
    unknown = sorted(set(params) - set(known))
    if unknown:
        raise ValueError(f"Unknown parameter(s): {', '.join(unknown)}")
    missing = [
        p.name for p in op.params
        if p.required and params.get(p.name) in (None, "")
    ]
    if missing:
        raise ValueError(f"Missing required parameter(s): {', '.join(missing)}")
    return {known[k].arg: v for k, v in params.items()}


async def invoke(service: Any, op: OperationDef, params: dict) -> Any:
    """Call *op* on *service* with host-supplied params."""
    kwargs = bind_params(op, params)
    return await getattr(service, op.method_name)(**kwargs)
