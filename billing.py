# billing.py
# bill engine: catalog lookup, multi-buy pricing, basket -> bill, total
# All money is in pence (integers). Formatting lives in receipt.py.

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Generic, Iterable, Mapping, Optional, Tuple, TypeVar

log = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")

UNKNOWN_SKU_TXT = "Unknown SKU"


@dataclass(frozen=True)
class StockItem:
    sku: int
    description: str
    unit_price: int

    def __post_init__(self):
        if self.unit_price < 0:
            raise ValueError(f"unit price for SKU {self.sku} cannot be negative")


@dataclass(frozen=True)
class DiscountRule:
    """Fixed amount off for every complete multiple of threshold_qty bought."""

    threshold_qty: int
    amount_per_threshold: int

    def __post_init__(self):
        # threshold is a divisor in discount_amount
        if self.threshold_qty < 1:
            raise ValueError("discount threshold must be at least 1")
        if self.amount_per_threshold < 0:
            raise ValueError("discount amount cannot be negative")


# sentinels handed back for SKUs we do not know about
UNKNOWN_ITEM = StockItem(0, UNKNOWN_SKU_TXT, 0)
NO_DISCOUNT = DiscountRule(1, 0)


class Registry(Generic[K, V]):
    """Read-only key -> value table.

    find() gives an explicit optional result; get_or_default() never fails and
    hands back the fallback, which should be a valid value of the same shape.
    """

    def __init__(self, entries: Iterable[Tuple[K, V]] = ()):
        table: Dict[K, V] = {}
        for key, value in entries:
            if key in table:
                raise ValueError(f"duplicate registry key: {key!r}")
            table[key] = value
        self._table: Mapping[K, V] = MappingProxyType(table)

    def find(self, key: K) -> Optional[V]:
        return self._table.get(key)

    def get_or_default(self, key: K, fallback: V) -> V:
        value = self.find(key)
        return fallback if value is None else value

    def __contains__(self, key) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)

    def items(self):
        return self._table.items()

    def values(self):
        return self._table.values()


def lookup(registry: Registry[K, V], fallback: V, key: K) -> V:
    return registry.get_or_default(key, fallback)


def make_catalog(rows: Iterable[Tuple[int, str, int]]) -> Registry[int, StockItem]:
    '''
    build a stock catalog from (sku, description, unit_price) rows

    Example: [(670, "Apples", 194)] becomes {670: StockItem(670, "Apples", 194)}
    '''
    return Registry((sku, StockItem(sku, desc, price)) for sku, desc, price in rows)


def make_discounts(rows: Iterable[Tuple[int, int, int]]) -> Registry[int, DiscountRule]:
    # rows are (sku, threshold_qty, amount_per_threshold)
    return Registry((sku, DiscountRule(qty, amount)) for sku, qty, amount in rows)


def read_item(catalog: Registry[int, StockItem], sku: int) -> StockItem:
    return lookup(catalog, UNKNOWN_ITEM, sku)


def read_discount(discounts: Registry[int, DiscountRule], sku: int) -> DiscountRule:
    return lookup(discounts, NO_DISCOUNT, sku)


# pricing arithmetic, integer only
def discount_amount(qty: int, threshold_qty: int, amount_per_threshold: int) -> int:
    return (qty // threshold_qty) * amount_per_threshold


def line_amount(qty: int, unit_price: int, discount: int) -> int:
    # not clamped at zero, see DESIGN.md
    return qty * unit_price - discount


@dataclass(frozen=True)
class BillLine:
    sku: int
    quantity: int
    item: StockItem
    discount: DiscountRule

    def discount_total(self) -> int:
        return discount_amount(
            self.quantity, self.discount.threshold_qty, self.discount.amount_per_threshold
        )

    def price(self) -> int:
        # recomputed on every call, nothing is cached
        return line_amount(self.quantity, self.item.unit_price, self.discount_total())


# sku -> BillLine, insertion order = first time the sku was seen in the basket
Bill = Dict[int, BillLine]


def add_to_bill(bill: Bill, sku: int, catalog, discounts) -> Bill:
    """Fold one basket occurrence into the bill and return it."""
    existing = bill.get(sku)
    new_qty = 1 + (existing.quantity if existing is not None else 0)

    item = catalog.find(sku)
    if item is None:
        # unknown SKUs are dropped without telling the caller
        log.debug("dropping unknown SKU %s", sku)
        return bill

    bill[sku] = BillLine(sku, new_qty, item, read_discount(discounts, sku))
    return bill


def aggregate(basket: Iterable[int], catalog, discounts) -> Bill:
    bill: Bill = {}
    for sku in basket:
        bill = add_to_bill(bill, sku, catalog, discounts)
    return bill


def total(bill: Bill) -> int:
    return sum(line.price() for line in bill.values())


# main calculator function
def compute(basket, catalog, discounts):
    """
    do all bill math:
      1) fold the basket into one line per known sku
      2) price each line (multi-buy discount included)
      3) sum the lines into the grand total
    """
    bill = aggregate(basket, catalog, discounts)

    lines = []
    for line in bill.values():
        lines.append(
            {
                "sku": line.sku,
                "quantity": line.quantity,
                "description": line.item.description,
                "unit_price": line.item.unit_price,
                "discount_amount": line.discount_total(),
                "line_total": line.price(),
            }
        )

    return {
        "item_lines": lines,
        "grand_total": total(bill),
        "total_units": sum(line["quantity"] for line in lines),
    }
