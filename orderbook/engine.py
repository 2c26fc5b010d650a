"""Order matching engine and the command that replays an order file."""

from __future__ import annotations

import os
import struct
import sys
from dataclasses import dataclass
from typing import Callable

from orderbook.orders import (
    LimitOrder,
    MarketOrder,
    Order,
    OrderSide,
    priority_sorted,
)

_OPEN_ERROR = "Error - unable to open the specified file!"


def _single(value: float) -> float:
    """Round a value to single precision, the precision prices are kept in."""
    return struct.unpack("f", struct.pack("f", value))[0]


@dataclass(frozen=True)
class Fill:
    """One executed trade between a buy order and a sell order."""

    buy_id: str
    buy_shares: int
    sell_id: str
    sell_shares: int
    price: float


def _book_entry(order: Order) -> str:
    if order.is_market():
        return f"{order.order_id} M {order.shares}"
    return f"{order.order_id} {order.limit_price:.2f} {order.shares}"


def _crosses(incoming: Order, resting: Order) -> bool:
    if resting.is_market():
        return True
    if incoming.side is OrderSide.BUY:
        return incoming.limit_price >= resting.limit_price
    return incoming.limit_price <= resting.limit_price


class MatchingEngine:
    """Keeps the pending orders and matches each new order against them.

    ``book_listener``, when set, receives the formatted book every time a
    match is attempted.
    """

    def __init__(self, last_price: float = 0.0) -> None:
        self.last_price = last_price
        self._pending: list[Order] = []
        self.book_listener: Callable[[str], object] | None = None

    def submit(self, order: Order) -> list[Fill]:
        """Add an order to the book and return the trades it produced."""
        self._pending.append(order)
        return self._match(order)

    def pending(self) -> list[Order]:
        """Pending orders: buys then sells, each side highest priority first."""
        return priority_sorted(self._pending)

    def format_book(self) -> str:
        book = self.pending()
        lines = [
            "***** ORDER BOOK OF PENDING TRANSACTIONS *****",
            f"LAST TRADING PRICE: {self.last_price:.2f}",
            "---BUY ORDERS---",
            *(_book_entry(o) for o in book if o.side is OrderSide.BUY),
            "---SELL ORDERS---",
            *(_book_entry(o) for o in book if o.side is OrderSide.SELL),
        ]
        return "\n".join(lines) + "\n\n\n\n"

    def unexecuted(self) -> list[Order]:
        """Pending orders in order of arrival."""
        return sorted(self._pending, key=lambda order: order.counter)

    def _discard(self, order: Order) -> None:
        self._pending = [o for o in self._pending if o is not order]

    def _find_counterparty(self, order: Order) -> Order | None:
        opposite = [o for o in self.pending() if o.side is order.side.opposite]
        if order.is_market():
            return opposite[0] if opposite else None
        return next((o for o in opposite if _crosses(order, o)), None)

    def _execution_price(self, order: Order, other: Order) -> float:
        both_market = order.is_market() and other.is_market()
        if other.limit_price != order.limit_price:
            if other.counter < order.counter or (order.is_market() and not other.is_market()):
                return other.limit_price
            if order.counter < other.counter or (other.is_market() and not order.is_market()):
                return order.limit_price
            return self.last_price
        if both_market:
            return self.last_price
        return order.limit_price

    def _match(self, order: Order) -> list[Fill]:
        if self.book_listener is not None:
            self.book_listener(self.format_book())

        other = self._find_counterparty(order)
        if other is None:
            return []

        self.last_price = self._execution_price(order, other)

        fills: list[Fill] = []
        if other.shares != order.shares:
            if other.shares > order.shares:
                residual = other.copy()
                residual.shares = other.shares - order.shares
                self._pending.append(residual)
                other.shares = order.shares
                self._discard(order)
            else:
                residual = order.copy()
                residual.shares = order.shares - other.shares
                self._pending.append(residual)
                order.shares = other.shares
                self._discard(other)
            fills = self._match(order)

        buy, sell = (order, other) if order.side is OrderSide.BUY else (other, order)
        fills.append(Fill(buy.order_id, buy.shares, sell.order_id, sell.shares, self.last_price))

        self._discard(order)
        self._discard(other)
        return fills


def parse_order_line(line: str, counter: int) -> Order | None:
    """Parse ``ID SIDE SHARES [PRICE]``; return None for lines of another shape.

    Raises ValueError for an unknown side or malformed numbers.
    """
    fields = line.split()
    if len(fields) == 4:
        order_id, side, shares, price = fields
        return LimitOrder(order_id, OrderSide(side), int(shares), counter, _single(float(price)))
    if len(fields) == 3:
        order_id, side, shares = fields
        return MarketOrder(order_id, OrderSide(side), int(shares), counter)
    return None


def format_fill(fill: Fill) -> str:
    return (
        f"order {fill.buy_id} {fill.buy_shares} shares purchased at price {fill.price:.2f}\n"
        f"order {fill.sell_id} {fill.sell_shares} shares sold at price {fill.price:.2f}"
    )


def format_unexecuted(order: Order) -> str:
    return f"order {order.order_id} {order.shares} shares unexecuted"


def output_filename(input_filename: str) -> str:
    """Name of the report: the first five characters replaced by ``output``."""
    return "output" + input_filename[5:]


def run(input_path, stdout=None) -> int:
    """Replay an order file, print the book and append the report file."""
    stdout = sys.stdout if stdout is None else stdout
    path = os.fspath(input_path)
    try:
        source = open(path, encoding="utf-8")
    except OSError:
        stdout.write(_OPEN_ERROR + "\n")
        return 1

    engine = MatchingEngine(0.0)
    engine.book_listener = stdout.write

    with source, open(output_filename(path), "a", encoding="utf-8") as report:
        for counter, line in enumerate(source, start=1):
            fields = line.split()
            if counter == 1 and fields:
                engine.last_price = _single(float(fields[0]))
            order = parse_order_line(line, counter)
            if order is not None:
                for fill in engine.submit(order):
                    report.write(format_fill(fill) + "\n")

        stdout.write(engine.format_book())
        for order in engine.unexecuted():
            report.write(format_unexecuted(order) + "\n")
    return 0


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        sys.stderr.write("usage: orderbook INPUT_FILE\n")
        return 2
    return run(args[0], sys.stdout)


if __name__ == "__main__":
    raise SystemExit(main())