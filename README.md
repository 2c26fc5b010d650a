# orderbook

`orderbook` runs one trading day's orders through a matching engine. Orders
are matched by price first and then by arrival time. Each fill is written to a
report file. So is each order still unexecuted at the end of the day.

## Installation

```
pip install .
```

To install with the test dependencies:

```
pip install .[test]
```

## Input format

The first field of the first line is the previous day's last trading price.
Each later line holds one order, with its fields separated by whitespace:

```
10.00
ord1 B 100 10.50
ord2 S 100 10.25
ord3 B 40 10.00
```

- A line with four fields is a **limit order**: `id side shares price`.
- A line with three fields is a **market order**: `id side shares`.
- `side` is `B` for buy and `S` for sell. Any other side, or a malformed
  number, raises `ValueError`.
- Lines with any other number of fields are ignored.

### Priority

- Market orders rank ahead of limit orders.
- Among buy limit orders, a higher price ranks first.
- Among sell limit orders, a lower price ranks first.
- Orders that are otherwise equal are taken in the order they arrived.

### Matching

An incoming order is matched against the best-ranked resting order on the other
side that crosses its price. An incoming market order takes the best-ranked
opposite order whatever its price.

If the two limit prices differ, the trade executes at the price of the order
that arrived first. If only one of the two is a market order, the trade
executes at the limit order's price. If both are market orders, the last
trading price is kept.

If the two orders are for different quantities, the remaining shares stay in
the book as a new order. That order keeps the original id and arrival position.

## Usage

```
orderbook input_day1.txt
```

You can also run it as `python -m orderbook.engine input_day1.txt`.

Each time the engine tries to match an order, it prints the current order book
to standard output. It prints the book once more at the end. Market orders are
shown with `M` in place of a price:

```
***** ORDER BOOK OF PENDING TRANSACTIONS *****
LAST TRADING PRICE: 10.50
---BUY ORDERS---
ord3 10.00 40
---SELL ORDERS---
```

Results are **appended** to a file named after the input path, with its first
five characters replaced by `output`. For example, `input_day1.txt` becomes
`output_day1.txt`. For the input above the file holds:

```
order ord1 100 shares purchased at price 10.50
order ord2 100 shares sold at price 10.50
order ord3 40 shares unexecuted
```

If the input file cannot be opened, the command prints
`Error - unable to open the specified file!` and exits with status 1. If it is
run without an argument, it prints a usage line and exits with status 2.

## Library use

```python
from orderbook.engine import MatchingEngine, parse_order_line, format_fill

engine = MatchingEngine(last_price=10.0)
for counter, line in enumerate(["a1 B 100 10.50", "a2 S 100 10.25"], start=2):
    order = parse_order_line(line, counter)
    for fill in engine.submit(order):
        print(format_fill(fill))
print(engine.format_book())
```

The `orderbook.engine` module provides the following:

- `MatchingEngine.submit(order)` adds an order and returns the list of `Fill`
  records it produced.
- `MatchingEngine.pending()` returns the resting orders: buys first, then
  sells, each side in priority order.
- `MatchingEngine.unexecuted()` returns the resting orders in arrival order.
- `MatchingEngine.format_book()` returns the book as text.
- `MatchingEngine.last_price` holds the last trading price.
- `MatchingEngine.book_listener`, when set, is called with the formatted book
  each time a match is attempted.
- `format_fill`, `format_unexecuted` and `output_filename` produce the report
  lines and the report file name.
- `run(input_path, stdout)` processes a whole file in the same way as the
  command.

The `orderbook.orders` module provides the following:

- `OrderSide`, `Order`, `LimitOrder` and `MarketOrder`.
- `has_lower_priority(order1, order2)`, the ranking rule between two orders.
- `priority_sorted(orders)`, which sorts orders into book order.

## Limitations

The book lives only in memory for a single run. Nothing is stored between runs.
The engine does not read orders from a network or from a live feed, only from a
file or from calls to `submit`.