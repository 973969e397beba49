from typing import Any

import pytest
from conftest import make_card

from scrygraph.analysis.graph_transformer import (
    apply_filters,
    calculate_metric,
    group_cards,
    group_key,
    sort_data_points,
    transform,
)
from scrygraph.models.graph import (
    ChartDataPoint,
    GraphAxis,
    GraphConfig,
    GraphFilter,
    GraphMetric,
)
from scrygraph.parsers.card_normalizer import normalize_cards


def _config(
    field: str,
    metric: str = "count",
    filters: tuple[GraphFilter, ...] = (),
    chart_type: str = "bar",
) -> GraphConfig:
    return GraphConfig(
        id="test",
        name="Test",
        x_axis=GraphAxis(field=field, label=f"{field} label"),
        y_axis=GraphMetric(metric=metric, label=f"{metric} label"),
        chart_type=chart_type,
        filters=filters,
    )


def _point(key: str, value: float = 1.0) -> ChartDataPoint:
    return ChartDataPoint(key=key, label=key, value=value, count=1)


class TestFilters:
    def test_no_filters_keeps_everything(self) -> None:
        cards = [make_card("a"), make_card("b")]

        assert apply_filters(cards, []) == cards

    def test_type_in(self) -> None:
        creature = make_card("c", types=("Artifact", "Creature"))
        instant = make_card("i", types=("Instant",))
        f = GraphFilter(field="type", operator="in", value=["Creature", "Sorcery"])

        assert apply_filters([creature, instant], [f]) == [creature]

    def test_type_equals(self) -> None:
        creature = make_card("c", types=("Creature",))
        land = make_card("l", types=("Land",))
        f = GraphFilter(field="type", operator="equals", value="Land")

        assert apply_filters([creature, land], [f]) == [land]

    def test_color_in_intersects(self) -> None:
        red_green = make_card("rg", colors=("R", "G"))
        blue = make_card("u", colors=("U",))
        f = GraphFilter(field="color", operator="in", value=["G"])

        assert apply_filters([red_green, blue], [f]) == [red_green]

    def test_rarity_in_contains_scalar(self) -> None:
        rare = make_card("r", rarity="rare")
        common = make_card("c", rarity="common")
        f = GraphFilter(field="rarity", operator="in", value=["rare", "mythic"])

        assert apply_filters([rare, common], [f]) == [rare]

    def test_cmc_range_inclusive(self) -> None:
        cards = [make_card(str(n), cmc=float(n)) for n in range(6)]
        f = GraphFilter(field="cmc", operator="range", value=[2, 4])

        assert [c.id for c in apply_filters(cards, [f])] == ["2", "3", "4"]

    def test_cmc_equals(self) -> None:
        cards = [make_card("two", cmc=2.0), make_card("three", cmc=3.0)]
        f = GraphFilter(field="cmc", operator="equals", value=3)

        assert [c.id for c in apply_filters(cards, [f])] == ["three"]

    def test_has_price_exists(self) -> None:
        priced = make_card("p", price_usd=0.0)
        unpriced = make_card("u")
        f = GraphFilter(field="hasPrice", operator="exists", value=True)

        assert apply_filters([priced, unpriced], [f]) == [priced]

    def test_exists_false_keeps_everything(self) -> None:
        cards = [make_card("p", power=2.0), make_card("u")]
        f = GraphFilter(field="hasPower", operator="exists", value=False)

        assert apply_filters(cards, [f]) == cards

    def test_filters_are_anded(self) -> None:
        match = make_card("m", types=("Creature",), power=3.0)
        no_power = make_card("n", types=("Creature",))
        not_creature = make_card("x", types=("Artifact",), power=1.0)
        filters = [
            GraphFilter(field="type", operator="in", value=["Creature"]),
            GraphFilter(field="hasPower", operator="exists", value=True),
        ]

        assert apply_filters([match, no_power, not_creature], filters) == [match]

    @pytest.mark.parametrize(
        ("field", "operator", "value"),
        [
            ("keywords", "in", ["flying"]),
            ("type", "range", [1, 2]),
            ("hasPrice", "equals", True),
            ("cmc", "range", "cheap"),
            ("cmc", "range", [1]),
        ],
    )
    def test_unsupported_filters_pass(self, field: str, operator: str, value: Any) -> None:
        cards = [make_card("a"), make_card("b", cmc=9.0)]

        assert apply_filters(cards, [GraphFilter(field, operator, value)]) == cards


class TestGroupKey:
    @pytest.mark.parametrize(
        ("cmc", "expected"),
        [(0.0, "0"), (2.5, "2"), (10.0, "10"), (10.5, "10"), (11.0, "10+"), (16.0, "10+")],
    )
    def test_cmc(self, cmc: float, expected: str) -> None:
        assert group_key(make_card(cmc=cmc), "cmc") == expected

    @pytest.mark.parametrize(
        ("colors", "expected"),
        [
            ((), "Colorless"),
            (("W",), "White"),
            (("U",), "Blue"),
            (("B",), "Black"),
            (("R",), "Red"),
            (("G",), "Green"),
            (("U", "R"), "Multicolor"),
            (("C",), "C"),
        ],
    )
    def test_color(self, colors: tuple[str, ...], expected: str) -> None:
        assert group_key(make_card(colors=colors), "color") == expected

    def test_type(self) -> None:
        assert group_key(make_card(types=("Artifact", "Creature")), "type") == "Artifact"
        assert group_key(make_card(types=()), "type") == "Other"

    def test_rarity_and_set(self) -> None:
        card = make_card(rarity="mythic", set_code="dmu")

        assert group_key(card, "rarity") == "Mythic"
        assert group_key(card, "set") == "DMU"

    @pytest.mark.parametrize(
        ("power", "expected"),
        [
            (None, "N/A"),
            (0.0, "0"),
            (2.0, "2"),
            (1.5, "1.5"),
            (5.0, "5"),
            (6.0, "5+"),
            (-1.0, "-1"),
        ],
    )
    def test_power(self, power: float | None, expected: str) -> None:
        assert group_key(make_card(power=power), "power") == expected

    def test_toughness(self) -> None:
        assert group_key(make_card(toughness=7.0), "toughness") == "5+"
        assert group_key(make_card(), "toughness") == "N/A"

    def test_year(self) -> None:
        assert group_key(make_card(released_at="2023-04-21"), "year") == "2023"
        assert group_key(make_card(released_at=""), "year") == "Unknown"

    @pytest.mark.parametrize(
        ("price", "expected"),
        [
            (None, "No Price"),
            (0.0, "$0-1"),
            (0.99, "$0-1"),
            (1.0, "$1-5"),
            (4.99, "$1-5"),
            (5.0, "$5-10"),
            (10.0, "$10-25"),
            (24.99, "$10-25"),
            (25.0, "$25+"),
            (300.0, "$25+"),
        ],
    )
    def test_price_range(self, price: float | None, expected: str) -> None:
        assert group_key(make_card(price_usd=price), "priceRange") == expected

    def test_zero_usd_price_is_priced(self) -> None:
        """"0.00" from Scryfall is a price, so it is bucketed rather than "No Price"."""
        [card] = normalize_cards([{"id": "z", "prices": {"usd": "0.00"}}])

        assert card.price_usd == 0.0
        assert group_key(card, "priceRange") == "$0-1"

    def test_unknown_field(self) -> None:
        assert group_key(make_card(), "artist") == "Unknown"


class TestMetrics:
    def _single(self, cards: list, metric: str) -> ChartDataPoint:
        points = calculate_metric({"all": cards}, metric)
        assert len(points) == 1
        return points[0]

    def test_count(self) -> None:
        point = self._single([make_card("a"), make_card("b")], "count")

        assert point.value == 2
        assert point.count == 2
        assert point.card_ids == ("a", "b")

    def test_avg_cmc(self) -> None:
        cards = [make_card(str(n), cmc=float(n)) for n in (1, 2, 3)]

        assert self._single(cards, "avgCmc").value == 2.00

    def test_avg_price_skips_missing(self) -> None:
        cards = [make_card("a", price_usd=1.0), make_card("b", price_usd=2.0), make_card("c")]

        assert self._single(cards, "avgPrice").value == 1.5

    def test_avg_price_none_priced_is_zero(self) -> None:
        assert self._single([make_card("a")], "avgPrice").value == 0

    def test_total_price_treats_missing_as_zero(self) -> None:
        cards = [make_card("a", price_usd=1.25), make_card("b", price_usd=2.5), make_card("c")]

        assert self._single(cards, "totalPrice").value == 3.75

    def test_min_max_price(self) -> None:
        cards = [make_card("a", price_usd=4.0), make_card("b", price_usd=0.5), make_card("c")]

        assert self._single(cards, "minPrice").value == 0.5
        assert self._single(cards, "maxPrice").value == 4.0
        assert self._single([make_card("d")], "minPrice").value == 0

    def test_avg_power_and_toughness(self) -> None:
        cards = [
            make_card("a", power=1.0, toughness=1.0),
            make_card("b", power=4.0, toughness=2.0),
            make_card("c"),
        ]

        assert self._single(cards, "avgPower").value == 2.5
        assert self._single(cards, "avgToughness").value == 1.5

    def test_rounds_to_two_decimals(self) -> None:
        cards = [make_card(str(n), cmc=float(n)) for n in (1, 1, 2)]

        assert self._single(cards, "avgCmc").value == 1.33

    def test_rounds_half_up(self) -> None:
        cards = [make_card("a", price_usd=0.125)]

        assert self._single(cards, "totalPrice").value == 0.13

    def test_unknown_metric_is_zero(self) -> None:
        point = self._single([make_card("a")], "medianPrice")

        assert point.value == 0
        assert point.count == 1


class TestSorting:
    def test_numeric_with_sentinel_last(self) -> None:
        points = [_point("10+"), _point("7"), _point("2"), _point("3")]

        keys = [p.key for p in sort_data_points(points, "cmc")]

        assert keys == ["2", "3", "7", "10+"]

    def test_stat_sentinel_and_na(self) -> None:
        points = [_point("N/A"), _point("5+"), _point("1.5"), _point("0"), _point("4")]

        keys = [p.key for p in sort_data_points(points, "power")]

        assert keys == ["0", "1.5", "4", "5+", "N/A"]

    def test_year_ascending(self) -> None:
        points = [_point("2021"), _point("Unknown"), _point("1993"), _point("2004")]

        keys = [p.key for p in sort_data_points(points, "year")]

        assert keys == ["1993", "2004", "2021", "Unknown"]

    def test_rarity_fixed_order(self) -> None:
        points = [_point("Mythic", 9), _point("Special"), _point("Weird"), _point("Common", 2)]

        keys = [p.key for p in sort_data_points(points, "rarity")]

        assert keys == ["Common", "Mythic", "Special", "Weird"]

    def test_color_fixed_order(self) -> None:
        labels = ["Colorless", "Green", "Multicolor", "White", "Red", "Blue", "Black"]

        keys = [p.key for p in sort_data_points([_point(k) for k in labels], "color")]

        assert keys == ["White", "Blue", "Black", "Red", "Green", "Multicolor", "Colorless"]

    @pytest.mark.parametrize("field", ["set", "type", "priceRange", "artist"])
    def test_value_descending(self, field: str) -> None:
        points = [_point("a", 1), _point("b", 5), _point("c", 3), _point("d", 5)]

        keys = [p.key for p in sort_data_points(points, field)]

        assert keys == ["b", "d", "c", "a"]


class TestTransform:
    def test_echoes_labels_and_chart_type(self) -> None:
        chart = transform([make_card()], _config("cmc", chart_type="pie"))

        assert chart.x_label == "cmc label"
        assert chart.y_label == "count label"
        assert chart.chart_type == "pie"

    def test_empty_input(self) -> None:
        chart = transform([], _config("color"))

        assert chart.data == []

    def test_mana_curve_sentinel_last(self) -> None:
        cards = [make_card(str(n), cmc=float(n)) for n in (2, 7, 11, 3)]

        chart = transform(cards, _config("cmc"))

        assert [p.key for p in chart.data] == ["2", "3", "7", "10+"]
        assert chart.data[-1].card_ids == ("11",)

    def test_price_range_with_price_filter(self) -> None:
        cards = [
            make_card("cheap", price_usd=0.50),
            make_card("mid", price_usd=3.00),
            make_card("none"),
        ]
        config = _config(
            "priceRange",
            filters=(GraphFilter(field="hasPrice", operator="exists", value=True),),
        )

        chart = transform(cards, config)

        assert {(p.key, p.count) for p in chart.data} == {("$0-1", 1), ("$1-5", 1)}
        assert all("none" not in p.card_ids for p in chart.data)

    def test_rarity_canonical_order(self) -> None:
        rarities = ["rare", "common", "mythic", "common"]
        cards = [make_card(str(i), rarity=r) for i, r in enumerate(rarities)]

        chart = transform(cards, _config("rarity"))

        assert [(p.label, p.value) for p in chart.data] == [
            ("Common", 2),
            ("Rare", 1),
            ("Mythic", 1),
        ]

    def test_grouping_is_complete(self, scryfall_cards: list[dict[str, Any]]) -> None:
        """Every surviving card lands in exactly one group."""
        cards = normalize_cards(scryfall_cards)
        f = GraphFilter(field="hasPrice", operator="exists", value=True)
        survivors = apply_filters(cards, [f])

        for field in ("cmc", "color", "type", "rarity", "set", "power", "year", "priceRange"):
            chart = transform(cards, _config(field, filters=(f,)))
            ids = [card_id for p in chart.data for card_id in p.card_ids]

            assert sorted(ids) == sorted(c.id for c in survivors), field
            assert sum(p.count for p in chart.data) == len(survivors), field

    def test_fixture_color_chart(self, scryfall_cards: list[dict[str, Any]]) -> None:
        chart = transform(normalize_cards(scryfall_cards), _config("color"))

        assert [(p.key, p.count) for p in chart.data] == [
            ("White", 1),
            ("Blue", 1),
            ("Black", 1),
            ("Red", 3),
            ("Green", 1),
            ("Multicolor", 3),
        ]

    def test_independent_calls_on_growing_prefix(self) -> None:
        cards = [make_card(str(n), cmc=float(n % 3)) for n in range(9)]
        config = _config("cmc")

        partial = transform(cards[:4], config)
        full = transform(cards, config)

        assert [p.count for p in partial.data] == [2, 1, 1]
        assert [p.count for p in full.data] == [3, 3, 3]
        assert transform(cards[:4], config) == partial

    def test_group_cards_preserves_first_seen_order(self) -> None:
        cards = [make_card("a", set_code="b"), make_card("b", set_code="a")]

        assert list(group_cards(cards, "set")) == ["B", "A"]
