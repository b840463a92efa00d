from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from loguru import logger
from pydantic import BaseModel, ValidationError

from nhl_stats.config.settings import AppSettings, settings as default_settings
from nhl_stats.models.inputs import OperationInput
from nhl_stats.models.outputs import ShapedModel
from nhl_stats.normalization.resolver import TeamResolver, default_resolver
from nhl_stats.upstream.espn_client import ESPNClient
from nhl_stats.upstream.nhl_client import NHLClient


class OperationError(Exception):
    """Base class for dispatch errors raised before a handler runs."""


class UnknownOperationError(OperationError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown operation: {key!r}")


class InputValidationError(OperationError):
    """Request input was malformed or out of range. No fetch was made."""

    def __init__(self, key: str, errors: List[Dict[str, Any]]):
        self.key = key
        self.errors = errors
        super().__init__(f"Invalid input for {key!r}: {errors}")


class Price(BaseModel):
    """Static per-operation price in millionths of a USD (1000 = $0.001)."""

    amount: int = 0

    @property
    def usd(self) -> float:
        return self.amount / 1_000_000


@dataclass
class OperationContext:
    """Collaborators handed to every handler invocation."""

    nhl: NHLClient
    espn: ESPNClient
    resolver: TeamResolver = field(default_factory=lambda: default_resolver)
    settings: AppSettings = field(default_factory=lambda: default_settings)


Handler = Callable[[Any, OperationContext], Awaitable[ShapedModel]]


@dataclass(frozen=True)
class Operation:
    key: str
    description: str
    input_model: Type[OperationInput]
    price: Price
    handler: Handler

    def describe(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "description": self.description,
            "price": {"amount": self.price.amount, "usd": self.price.usd},
            "input_schema": self.input_model.model_json_schema(by_alias=True),
        }


@dataclass
class OperationRegistry:
    """Declares which handler serves each operation key."""

    operations: Dict[str, Operation] = field(default_factory=dict)

    def entrypoint(
        self,
        key: str,
        description: str,
        input_model: Type[OperationInput],
        price: int = 0,
    ) -> Callable[[Handler], Handler]:
        """Decorator registering ``handler`` under ``key``."""

        def decorator(handler: Handler) -> Handler:
            if key in self.operations:
                raise ValueError(f"Operation {key!r} is already registered")
            self.operations[key] = Operation(
                key=key,
                description=description,
                input_model=input_model,
                price=Price(amount=price),
                handler=handler,
            )
            return handler

        return decorator

    def get(self, key: str) -> Operation:
        try:
            return self.operations[key]
        except KeyError:
            raise UnknownOperationError(key) from None

    def list_operations(self) -> List[Operation]:
        return list(self.operations.values())

    def validate(self, key: str, raw_input: Optional[Dict[str, Any]]) -> OperationInput:
        operation = self.get(key)
        try:
            return operation.input_model.model_validate(raw_input or {})
        except ValidationError as e:
            errors = e.errors(include_url=False, include_context=False)
            logger.info(f"Rejected input for '{key}': {errors}")
            raise InputValidationError(key, errors) from e

    async def invoke(
        self,
        key: str,
        raw_input: Optional[Dict[str, Any]],
        ctx: OperationContext,
    ) -> Dict[str, Any]:
        """Validates ``raw_input``, runs the handler and wraps the result as ``{"output": ...}``."""
        operation = self.get(key)
        params = self.validate(key, raw_input)
        logger.info(f"Invoking '{key}' with {params.model_dump(mode='json', by_alias=True)}")
        output = await operation.handler(params, ctx)
        return {"output": output.to_output()}


registry = OperationRegistry()
