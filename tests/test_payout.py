"""Stake-time payout and stake tickets."""

import pytest

from yomirules.errors import PreconditionError, StakeRejected
from yomirules.models import Direction, Market, MarketKind, Outcome, StakeStatus
from yomirules.pricing import build_stake, implied_probability, payout, quote_stake


def _binary(prob_yes=50):
    return Market(
        market_id="b1",
        kind=MarketKind.BINARY,
        outcomes=[
            Outcome(outcome_id="yes", name="YES", probability=prob_yes, is_yes=True),
            Outcome(outcome_id="no", name="NO", probability=100 - prob_yes),
        ],
    )


def _multi():
    return Market(
        market_id="m1",
        kind=MarketKind.MULTI,
        outcomes=[
            Outcome(outcome_id="a", name="A", probability=80),
            Outcome(outcome_id="b", name="B", probability=0.5),
            Outcome(outcome_id="c", name="C", probability=100),
        ],
    )


def test_payout_contract():
    assert payout(100, 50) == 200
    assert payout(100, 25) == 400
    assert payout(100, 100) == 100
    assert payout(100, 30) == 333
    assert payout(10, 40) == 25


def test_payout_is_integer_half_up():
    # 100 / 0.8 = 125 exactly; 5 / 0.4 = 12.5 -> 13
    assert payout(100, 80) == 125
    assert payout(5, 40) == 13


def test_payout_strictly_decreasing_in_probability():
    values = [payout(1000, p) for p in range(1, 101)]
    assert all(a > b for a, b in zip(values, values[1:]))


@pytest.mark.parametrize("prob", [0, -5])
def test_payout_rejects_non_positive_probability(prob):
    with pytest.raises(PreconditionError):
        payout(100, prob)


def test_implied_probability_binary_uses_side_price():
    market = _binary(70)
    assert implied_probability(market, "yes") == 70
    assert implied_probability(market, "no") == 30


def test_implied_probability_binary_rejects_no_direction():
    with pytest.raises(PreconditionError):
        implied_probability(_binary(), "yes", Direction.NO)


def test_implied_probability_multi_polarity():
    market = _multi()
    assert implied_probability(market, "a", Direction.YES) == 80
    assert implied_probability(market, "a", Direction.NO) == 20


def test_implied_probability_unknown_outcome():
    with pytest.raises(PreconditionError):
        implied_probability(_multi(), "zzz")


def test_quote_takes_fee_then_prices():
    quote = quote_stake(_binary(50), "yes", 100)
    assert quote.fee == 2.0
    assert quote.investment == 98.0
    assert quote.odds_at_bet == 2.0
    assert quote.potential_payout == 196


def test_quote_no_on_multi_uses_complement():
    quote = quote_stake(_multi(), "a", 100, Direction.NO)
    assert quote.implied_probability == 20
    assert quote.odds_at_bet == 5.0
    assert quote.potential_payout == 490


def test_quote_clamps_long_shot_odds():
    quote = quote_stake(_multi(), "b", 100)
    assert quote.odds_at_bet == 100.0
    assert quote.potential_payout == 9800


def test_quote_clamps_sure_thing_odds():
    quote = quote_stake(_multi(), "c", 100)
    assert quote.odds_at_bet == 1.01
    assert quote.potential_payout == 99


@pytest.mark.parametrize("amount", [5, 100001])
def test_quote_rejects_amount_outside_limits(amount):
    with pytest.raises(StakeRejected):
        quote_stake(_binary(), "yes", amount)


def test_build_stake_snapshots_quote():
    stake = build_stake(_binary(25), "yes", "u1", 200)
    assert stake.status is StakeStatus.PENDING
    assert stake.direction is Direction.YES
    assert stake.odds_at_bet == 4.0
    assert stake.potential_payout == 784
