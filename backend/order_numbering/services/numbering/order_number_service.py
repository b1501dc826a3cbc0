"""Order number service: routes order types to their tables and fields."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from types import MappingProxyType
from typing import Any

import structlog
from sqlalchemy import UniqueConstraint
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from order_numbering.config import Settings, settings
from order_numbering.models.enums import OrderType
from order_numbering.models.orders import (
    PURCHASE_ORDER_POID_CONSTRAINT,
    SALE_NUMBER_CONSTRAINT,
    SHIPPING_ORDER_SOID_CONSTRAINT,
    PurchaseOrder,
    Sale,
    ShippingOrder,
)
from order_numbering.services.numbering.allocator import SequenceAllocator
from order_numbering.services.numbering.exceptions import UnsupportedOrderType
from order_numbering.services.numbering.sequence_config import SequenceConfig
from order_numbering.services.numbering.sql_store import SQLModelRecordStore
from order_numbering.services.numbering.store import RecordStore
from order_numbering.services.numbering.uniqueness import UniquenessGuarantor
from order_numbering.utils.datetime_utils import business_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OrderRoute:
    """Table, number field and its unique constraint for one order type."""

    model_class: type[SQLModel]
    field: str
    constraint: UniqueConstraint


ORDER_TYPE_ROUTES: Mapping[OrderType, OrderRoute] = MappingProxyType(
    {
        OrderType.PURCHASE: OrderRoute(PurchaseOrder, "poid", PURCHASE_ORDER_POID_CONSTRAINT),
        OrderType.SHIPPING: OrderRoute(ShippingOrder, "soid", SHIPPING_ORDER_SOID_CONSTRAINT),
        OrderType.SALE: OrderRoute(Sale, "sale_number", SALE_NUMBER_CONSTRAINT),
    }
)

StoreFactory = Callable[[type[SQLModel]], RecordStore]
ConfigOverride = SequenceConfig | Mapping[str, Any] | None


class OrderNumberService:
    """Single entry point for generating and checking order numbers.

    Stateless apart from what is persisted in the store: every call re-reads
    current store state and nothing is cached between calls.
    """

    def __init__(
        self,
        store_factory: StoreFactory,
        config: Settings | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ):
        self.store_factory = store_factory
        self.config = config or settings
        self.clock = clock or (lambda: business_now(self.config))

    @classmethod
    def for_session(cls, session: AsyncSession, config: Settings | None = None) -> "OrderNumberService":
        """Service backed by SQLModel tables on the given session."""
        return cls(lambda model_class: SQLModelRecordStore(session, model_class), config)

    def route(self, order_type: OrderType | str) -> tuple[OrderType, OrderRoute]:
        """Resolve an order type to its table/field, rejecting unknown types."""
        parsed = OrderType.parse(order_type)
        route = ORDER_TYPE_ROUTES.get(parsed)
        if route is None:
            raise UnsupportedOrderType(order_type)
        return parsed, route

    def default_config(self, order_type: OrderType | str) -> SequenceConfig:
        parsed = OrderType.parse(order_type)
        prefixes = {
            OrderType.PURCHASE: self.config.purchase_order_prefix,
            OrderType.SHIPPING: self.config.shipping_order_prefix,
            OrderType.SALE: self.config.sale_order_prefix,
        }
        return SequenceConfig(
            prefix=prefixes[parsed],
            use_short_year=self.config.order_number_short_year,
            sequence_digits=self.config.order_number_sequence_digits,
            sequence_start=self.config.order_number_sequence_start,
        )

    def allocator(self, order_type: OrderType | str, override_config: ConfigOverride = None) -> SequenceAllocator:
        """Build a SequenceAllocator for the order type."""
        parsed, route = self.route(order_type)
        if isinstance(override_config, SequenceConfig):
            sequence_config = override_config
        elif override_config:
            sequence_config = self.default_config(parsed).with_overrides(**override_config)
        else:
            sequence_config = self.default_config(parsed)

        return SequenceAllocator(
            self.store_factory(route.model_class),
            route.field,
            sequence_config,
            counter_scope=parsed.value if self.config.order_number_use_counter else None,
        )

    async def generate(
        self,
        order_type: OrderType | str,
        override_config: ConfigOverride = None,
        *,
        now: date | datetime | None = None,
    ) -> str:
        """Generate the next order number for today (or for ``now``)."""
        allocator = self.allocator(order_type, override_config)
        return await allocator.allocate(now if now is not None else self.clock())

    async def generate_for_date(
        self,
        order_type: OrderType | str,
        business_date: date,
        override_config: ConfigOverride = None,
    ) -> str:
        """Generate the next order number for an explicit business date.

        Used when importing orders dated by their source document rather
        than by the time of import.
        """
        return await self.generate(order_type, override_config, now=business_date)

    async def is_unique(self, order_type: OrderType | str, candidate: str) -> bool:
        _, route = self.route(order_type)
        store = self.store_factory(route.model_class)
        return not await store.exists_by_exact_field(route.field, candidate)

    async def generate_unique(self, order_type: OrderType | str, base: str) -> str:
        """Return ``base`` or the first free ``base-N`` variant."""
        _, route = self.route(order_type)
        guarantor = UniquenessGuarantor(
            self.store_factory(route.model_class),
            route.field,
            max_attempts=self.config.order_number_max_unique_attempts,
        )
        return await guarantor.ensure_unique(base)

    async def resolve(
        self,
        order_type: OrderType | str,
        candidate: str | None = None,
        *,
        now: date | datetime | None = None,
    ) -> str:
        """Order number for a new order.

        A blank candidate gets a freshly generated number; a user-entered one
        is kept if free, otherwise suffixed.
        """
        if candidate is None or not candidate.strip():
            return await self.generate(order_type, now=now)
        logger.debug("Using caller-supplied order number", order_type=str(order_type), candidate=candidate)
        return await self.generate_unique(order_type, candidate.strip())
