"""
Stock item lifecycle as an explicit state machine.

    in_stock --SELL--> sold
    sold --RESTORE--> in_stock

These are the only legal transitions. SELL is only ever applied together
with inserting a Sale and RESTORE together with deleting it (see
``sellersync.modules.stock.lifecycle``), so a stock item is ``sold`` exactly
when one Sale references it.
"""
import enum

from sellersync.common.exceptions import ConflictStateError


class StockStatus(str, enum.Enum):
    IN_STOCK = "in_stock"
    SOLD = "sold"


class LifecycleEvent(str, enum.Enum):
    SELL = "sell"
    RESTORE = "restore"


class StockLifecycle:
    """Transition table for stock items."""

    INITIAL = StockStatus.IN_STOCK

    TRANSITIONS = {
        (StockStatus.IN_STOCK, LifecycleEvent.SELL): StockStatus.SOLD,
        (StockStatus.SOLD, LifecycleEvent.RESTORE): StockStatus.IN_STOCK,
    }

    @classmethod
    def can_apply(cls, current: StockStatus, event: LifecycleEvent) -> bool:
        return (current, event) in cls.TRANSITIONS

    @classmethod
    def next_state(cls, current: StockStatus, event: LifecycleEvent) -> StockStatus:
        try:
            return cls.TRANSITIONS[(current, event)]
        except KeyError:
            code = "ITEM_ALREADY_SOLD" if event == LifecycleEvent.SELL else "ITEM_NOT_SOLD"
            raise ConflictStateError(
                f"Cannot apply '{event.value}' to a stock item that is '{current.value}'.",
                code=code,
                status=current.value,
                event=event.value,
            )
