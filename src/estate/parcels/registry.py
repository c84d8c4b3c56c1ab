"""Property registry: the parcel ownership state machine.

Each parcel is either listed (``price > 0``) or unlisted (``price == 0``);
ownership changes only through a successful purchase. Every operation
checks all of its preconditions and appends its audit entry before
touching state, so a failed call leaves the registry exactly as it
found it.
"""

from __future__ import annotations

import logging

from estate.core.clock import TickSource
from estate.core.types import (
    AuditEvent,
    Principal,
    PropertyId,
    RegistryError,
    RegistryResult,
)
from estate.governance.audit import AuditLogger
from estate.parcels.models import Property
from estate.zoning.models import Zone
from estate.zoning.registry import ZoneRegistry

logger = logging.getLogger(__name__)


class PropertyRegistry:
    """Parcels keyed by a monotonically increasing id.

    Shares the zone registry's state aggregate so zone lookups and parcel
    mutations always see the same ledger.
    """

    def __init__(
        self,
        zones: ZoneRegistry,
        clock: TickSource,
        audit_logger: AuditLogger | None = None,
    ) -> None:
        self._zones = zones
        self._state = zones.state
        self._clock = clock
        self._audit = audit_logger

    # -- Mutations --

    def create_property(self, caller: Principal, zone_name: str) -> RegistryResult:
        """Create a parcel owned by ``caller``; the result value is its id."""
        if not self._zones.has_zone(zone_name):
            return self._reject("create_property", RegistryError.NOT_FOUND,
                                f"Zone {zone_name!r} not found")

        tick = self._clock.current_tick()
        property_id = self._state.last_property_id + 1
        prop = Property(
            id=property_id,
            owner=caller,
            zone=zone_name,
            last_tax_payment=tick,
        )

        # Audit first: a failed append must leave the id unconsumed
        self._record(caller, "property_created", property_id, tick, zone=zone_name)
        self._state.properties[property_id] = prop
        self._state.last_property_id = property_id

        logger.info("Property %d created in zone %r by %s", property_id, zone_name, caller)
        return RegistryResult.success(property_id)

    def set_price(
        self, caller: Principal, property_id: PropertyId, new_price: int
    ) -> RegistryResult:
        """List (``new_price > 0``) or delist (``new_price == 0``) a parcel."""
        prop = self._state.properties.get(property_id)
        if prop is None:
            return self._not_found("set_price", property_id)
        if prop.owner != caller:
            return self._not_owner("set_price", property_id, caller)
        if not _is_amount(new_price):
            return self._reject("set_price", RegistryError.INVALID_VALUE,
                                f"Price must be a non-negative integer, got {new_price!r}")

        old_price = prop.price
        self._record(caller, "price_set", property_id, self._clock.current_tick(),
                     old_price=old_price, new_price=new_price)
        prop.price = new_price

        logger.info("Property %d price %d -> %d", property_id, old_price, new_price)
        return RegistryResult.success()

    def buy_property(self, caller: Principal, property_id: PropertyId) -> RegistryResult:
        """Transfer a listed parcel to ``caller`` and take it off the market.

        Payment to the seller is the host's concern and must commit or roll
        back together with this call. Buying a parcel you already own is
        allowed when it is listed.
        """
        prop = self._state.properties.get(property_id)
        if prop is None:
            return self._not_found("buy_property", property_id)
        if not prop.for_sale:
            return self._reject("buy_property", RegistryError.INVALID_VALUE,
                                f"Property {property_id} is not for sale")

        seller, price = prop.owner, prop.price
        self._record(caller, "property_bought", property_id, self._clock.current_tick(),
                     seller=seller, price=price)
        self._state.properties[property_id] = prop.model_copy(
            update={"owner": caller, "price": 0}
        )

        logger.info("Property %d sold by %s to %s for %d", property_id, seller, caller, price)
        return RegistryResult.success()

    def improve_property(
        self, caller: Principal, property_id: PropertyId, improvement_value: int
    ) -> RegistryResult:
        """Add improvement value, bounded by the zone's ceiling."""
        prop = self._state.properties.get(property_id)
        if prop is None:
            return self._not_found("improve_property", property_id)
        if prop.owner != caller:
            return self._not_owner("improve_property", property_id, caller)
        zone = self._zone_of(prop)
        if zone is None:
            return self._zone_missing("improve_property", prop)
        if not _is_amount(improvement_value):
            return self._reject(
                "improve_property",
                RegistryError.INVALID_VALUE,
                f"Improvement value must be a non-negative integer, got {improvement_value!r}",
            )
        improvements = prop.improvements + improvement_value
        if improvements > zone.max_improvements:
            return self._reject(
                "improve_property",
                RegistryError.INVALID_VALUE,
                f"Improvements {prop.improvements} + {improvement_value} exceed "
                f"zone {zone.name!r} ceiling {zone.max_improvements}",
            )

        self._record(caller, "property_improved", property_id, self._clock.current_tick(),
                     improvement_value=improvement_value, improvements=improvements)
        prop.improvements = improvements

        logger.info("Property %d improved by %d (now %d/%d)", property_id,
                    improvement_value, improvements, zone.max_improvements)
        return RegistryResult.success()

    def pay_property_tax(self, caller: Principal, property_id: PropertyId) -> RegistryResult:
        """Stamp the parcel's last tax payment with the current tick.

        No amount is computed here and early or repeated payments are
        accepted; debiting the owner is the host's concern.
        """
        prop = self._state.properties.get(property_id)
        if prop is None:
            return self._not_found("pay_property_tax", property_id)
        if prop.owner != caller:
            return self._not_owner("pay_property_tax", property_id, caller)
        if self._zone_of(prop) is None:
            return self._zone_missing("pay_property_tax", prop)

        tick = self._clock.current_tick()
        previous = prop.last_tax_payment
        self._record(caller, "tax_paid", property_id, tick, previous_payment=previous)
        prop.last_tax_payment = tick

        logger.info("Property %d tax paid at tick %d", property_id, tick)
        return RegistryResult.success()

    # -- Queries --

    def get_property(self, property_id: PropertyId) -> Property | None:
        prop = self._state.properties.get(property_id)
        return prop.model_copy() if prop else None

    def list_properties(self) -> list[Property]:
        return [p.model_copy() for p in self._state.properties.values()]

    def properties_owned_by(self, owner: Principal) -> list[Property]:
        return [
            p.model_copy() for p in self._state.properties.values()
            if p.owner == owner
        ]

    def properties_for_sale(self) -> list[Property]:
        return [
            p.model_copy() for p in self._state.properties.values()
            if p.for_sale
        ]

    @property
    def last_property_id(self) -> int:
        return self._state.last_property_id

    # -- Helpers --

    def _zone_of(self, prop: Property) -> Zone | None:
        return self._state.zones.get(prop.zone)

    def _reject(self, operation: str, error: RegistryError, detail: str) -> RegistryResult:
        logger.warning("Rejected %s (%s): %s", operation, error.value, detail)
        return RegistryResult.failure(error, detail)

    def _not_found(self, operation: str, property_id: PropertyId) -> RegistryResult:
        return self._reject(operation, RegistryError.NOT_FOUND,
                            f"Property {property_id} not found")

    def _not_owner(
        self, operation: str, property_id: PropertyId, caller: Principal
    ) -> RegistryResult:
        return self._reject(operation, RegistryError.UNAUTHORIZED,
                            f"{caller} does not own property {property_id}")

    def _zone_missing(self, operation: str, prop: Property) -> RegistryResult:
        return self._reject(operation, RegistryError.NOT_FOUND,
                            f"Zone {prop.zone!r} of property {prop.id} not found")

    def _record(
        self,
        actor: Principal,
        action: str,
        property_id: PropertyId,
        tick: int,
        **details: object,
    ) -> None:
        if self._audit is None:
            return
        self._audit.log(AuditEvent(
            tick=tick,
            actor=actor,
            action=action,
            resource=f"property:{property_id}",
            details=details,
        ))


def _is_amount(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
