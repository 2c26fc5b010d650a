import pytest

from orderbook.orders import (
    LimitOrder,
    MarketOrder,
    OrderSide,
    has_lower_priority,
    priority_sorted,
)

BUY = OrderSide.BUY
SELL = OrderSide.SELL


def test_side_parses_from_letter():
    assert OrderSide("B") is BUY
    assert OrderSide("S") is SELL


def test_side_opposite():
    assert OrderSide("B").opposite is SELL
    assert OrderSide("S").opposite is BUY


def test_unknown_side_rejected():
    with pytest.raises(ValueError):
        OrderSide("X")


def test_market_order_has_zero_price():
    order = MarketOrder("m1", BUY, 10, 2)
    assert order.limit_price == 0
    assert order.is_market()


@pytest.mark.parametrize("price,expected", [(0.0, True), (5.0, False)])
def test_limit_order_is_market_only_at_zero(price, expected):
    assert LimitOrder("l1", SELL, 10, 2, price).is_market() is expected


def test_copy_is_independent_and_same_kind():
    original = LimitOrder("b1", BUY, 100, 3, 10.5)
    duplicate = original.copy()
    assert type(duplicate) is LimitOrder
    assert duplicate is not original
    assert (duplicate.order_id, duplicate.side, duplicate.shares, duplicate.counter, duplicate.limit_price) == (
        "b1", BUY, 100, 3, 10.5)
    duplicate.shares = 40
    assert original.shares == 100


def test_copy_of_market_order_stays_market():
    duplicate = MarketOrder("m1", SELL, 7, 4).copy()
    assert type(duplicate) is MarketOrder
    assert duplicate.is_market()


def test_orders_compare_by_identity():
    a = LimitOrder("b1", BUY, 10, 2, 10.0)
    b = LimitOrder("b1", BUY, 10, 2, 10.0)
    assert a != b
    assert a == a


def test_market_outranks_limit():
    market = MarketOrder("m", BUY, 10, 5)
    limit = LimitOrder("l", BUY, 10, 2, 50.0)
    assert has_lower_priority(limit, market) is True
    assert has_lower_priority(market, limit) is False


def test_buy_limit_higher_price_ranks_higher():
    low = LimitOrder("b1", BUY, 10, 2, 10.0)
    high = LimitOrder("b2", BUY, 10, 3, 11.0)
    assert has_lower_priority(low, high) is True
    assert has_lower_priority(high, low) is False


def test_sell_limit_lower_price_ranks_higher():
    low = LimitOrder("s1", SELL, 10, 3, 10.0)
    high = LimitOrder("s2", SELL, 10, 2, 11.0)
    assert has_lower_priority(high, low) is True
    assert has_lower_priority(low, high) is False


def test_equal_price_falls_back_to_arrival():
    early = LimitOrder("b1", BUY, 10, 2, 10.0)
    late = LimitOrder("b2", BUY, 10, 3, 10.0)
    assert has_lower_priority(late, early) is True
    assert has_lower_priority(early, late) is False


def test_two_market_orders_use_arrival():
    early = MarketOrder("m1", SELL, 10, 2)
    late = MarketOrder("m2", SELL, 10, 3)
    assert has_lower_priority(late, early) is True
    assert has_lower_priority(early, late) is False


def test_opposite_sides_with_different_prices_are_unranked():
    buy = LimitOrder("b1", BUY, 10, 2, 10.0)
    sell = LimitOrder("s1", SELL, 10, 3, 12.0)
    assert has_lower_priority(buy, sell) is False
    assert has_lower_priority(sell, buy) is False


def _sample():
    return [
        LimitOrder("b1", BUY, 10, 2, 10.0),
        LimitOrder("b2", BUY, 10, 3, 11.0),
        MarketOrder("b3", BUY, 10, 4),
        LimitOrder("s1", SELL, 10, 5, 12.0),
        LimitOrder("s2", SELL, 10, 6, 11.5),
        LimitOrder("b4", BUY, 10, 7, 11.0),
    ]


def test_priority_sorted_order():
    assert [o.order_id for o in priority_sorted(_sample())] == ["b3", "b2", "b4", "b1", "s2", "s1"]


def test_priority_sorted_agrees_with_comparator():
    ranked = priority_sorted(_sample())
    for first, second in zip(ranked, ranked[1:]):
        if first.side is second.side:
            assert not has_lower_priority(first, second)


def test_priority_sorted_keeps_ties_in_given_order():
    a = LimitOrder("a", SELL, 10, 4, 10.0)
    b = LimitOrder("b", SELL, 20, 4, 10.0)
    assert priority_sorted([a, b]) == [a, b]
    assert priority_sorted([b, a]) == [b, a]


def test_priority_sorted_keeps_every_order():
    orders = _sample()
    ranked = priority_sorted(orders)
    assert len(ranked) == len(orders)
    assert {id(o) for o in ranked} == {id(o) for o in orders}