import math

import pytest

from risk_engine import assess_portfolio, recent_window, recommend_action, sector_impacts, sector_label


def test_empty_history_is_not_available():
    assert assess_portfolio([]) is None


def test_single_result(make_result):
    impact = assess_portfolio([make_result(0.5, confidence=0.7)])
    assert impact.overall_sentiment == pytest.approx(0.5)
    assert impact.risk_score == pytest.approx(0.0)
    assert impact.confidence == pytest.approx(0.7)
    assert impact.recommended_action == "hold"


def test_risk_score_is_stdev_times_100(make_result):
    impact = assess_portfolio([make_result(0.8), make_result(-0.6)])
    assert impact.overall_sentiment == pytest.approx(0.1)
    assert impact.risk_score == pytest.approx(70.0)


def test_window_keeps_last_ten(make_result):
    history = [make_result(-1.0)] + [make_result(0.5, confidence=0.9) for _ in range(10)]
    impact = assess_portfolio(history)

    # the -1.0 entry is outside the window
    assert impact.overall_sentiment == pytest.approx(0.5)
    assert impact.risk_score == pytest.approx(0.0)
    assert impact.recommended_action == "buy"


def test_eleventh_entry_drops_oldest(make_result):
    history = [make_result(s / 10) for s in range(-5, 5)]
    before = recent_window(history)
    history.append(make_result(0.9))
    after = recent_window(history)

    assert len(before) == len(after) == 10
    assert after == before[1:] + [history[-1]]

    expected = sum(r.score for r in after) / 10
    assert assess_portfolio(history).overall_sentiment == pytest.approx(expected)


def test_window_smaller_than_size(make_result):
    history = [make_result(0.2), make_result(0.4)]
    assert recent_window(history) == history


@pytest.mark.parametrize("avg, conf, expected", [
    (0.31, 0.71, "buy"),
    (0.31, 0.7, "hold"),
    (0.3, 0.9, "hold"),
    (-0.31, 0.71, "sell"),
    (-0.3, 0.9, "hold"),
    (-0.9, 0.5, "hold"),
    (0.0, 1.0, "hold"),
])
def test_recommend_action(avg, conf, expected):
    assert recommend_action(avg, conf) == expected


def test_strong_negative_window_sells(make_result):
    impact = assess_portfolio([make_result(-0.9, confidence=1.0) for _ in range(3)])
    assert impact.recommended_action == "sell"


def test_item_counts_fully_in_each_sector(make_result):
    impacts = sector_impacts([make_result(0.6, sectors=("technology", "finance"))])
    by_name = {s.sector: s for s in impacts}

    assert set(by_name) == {"Technology", "Finance"}
    assert by_name["Technology"].impact == pytest.approx(0.6)
    assert by_name["Finance"].impact == pytest.approx(0.6)


def test_sector_means_and_ordering(make_result):
    window = [
        make_result(0.4, sectors=("technology",)),
        make_result(0.2, sectors=("technology", "energy")),
        make_result(-0.9, sectors=("energy",)),
        make_result(0.05, sectors=("real estate",)),
        make_result(0.9),
    ]
    impacts = sector_impacts(window)

    assert [s.sector for s in impacts] == ["Energy", "Technology", "Real estate"]
    assert impacts[0].impact == pytest.approx(-0.35)
    assert impacts[0].sentiment == "negative"
    assert impacts[1].impact == pytest.approx(0.3)
    assert impacts[1].sentiment == "positive"
    assert impacts[2].sentiment == "neutral"


def test_sector_ties_keep_first_seen_order(make_result):
    impacts = sector_impacts([
        make_result(0.5, sectors=("utilities",)),
        make_result(-0.5, sectors=("telecom",)),
    ])
    assert [s.sector for s in impacts] == ["Utilities", "Telecom"]


@pytest.mark.parametrize("impact, expected", [
    (0.1000001, "positive"),
    (0.1, "neutral"),
    (-0.1, "neutral"),
    (-0.1000001, "negative"),
])
def test_sector_label(impact, expected):
    assert sector_label(impact) == expected


def test_no_sectors(make_result):
    impact = assess_portfolio([make_result(0.4), make_result(0.1)])
    assert impact.impacted_sectors == []
    assert impact.risk_score == pytest.approx(15.0)
    assert not math.isnan(impact.confidence)
