"""Order types and the priority rules that rank them in the book."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum


class OrderSide(Enum):
    """Which side of the book an order sits on."""

    BUY = "B"
    SELL = "S"

    @property
    def opposite(self) -> OrderSide:
        return OrderSide.SELL if self is OrderSide.BUY else OrderSide.BUY


@dataclass(eq=False)
class Order:
    """A trading order; a limit price of 0 marks it as a market order.

    Orders compare by identity: two orders with equal fields are still
    different entries in the book.
    """

    order_id: str
    side: OrderSide
    shares: int
    counter: int
    limit_price: float

    def copy(self) -> Order:
        """Return an independent order of the same kind with the same fields."""
        return dataclasses.replace(self)

    def is_market(self) -> bool:
        return self.limit_price == 0


@dataclass(eq=False)
class LimitOrder(Order):
    """An order that trades only at its limit price or better."""


@dataclass(eq=False)
class MarketOrder(Order):
    """An order that trades at whatever price the book offers."""

    limit_price: float = 0.0


def has_lower_priority(order1: Order, order2: Order) -> bool:
    """Return True when ``order1`` ranks below ``order2`` in the book.

    Market orders outrank limit orders. Among limit orders of one side,
    buyers rank by higher price and sellers by lower price. Equal prices
    fall back to arrival order. Orders of different sides with different
    prices are not ranked against each other.
    """
    if order1.is_market() and not order2.is_market():
        return False
    if not order1.is_market() and order2.is_market():
        return True

    if order1.limit_price != order2.limit_price:
        if order1.side is OrderSide.BUY and order2.side is OrderSide.BUY:
            return order1.limit_price < order2.limit_price
        if order1.side is OrderSide.SELL and order2.side is OrderSide.SELL:
            return order1.limit_price > order2.limit_price
        return False

    return order1.counter > order2.counter


def _priority_key(order: Order) -> tuple[bool, bool, float, int]:
    price = order.limit_price if order.side is OrderSide.SELL else -order.limit_price
    return (order.side is OrderSide.SELL, not order.is_market(), price, order.counter)


def priority_sorted(orders) -> list[Order]:
    """Return buy orders then sell orders, each side highest priority first.

    Orders of equal rank keep the order in which they were given.
    """
    return sorted(orders, key=_priority_key)