"""
Chart a Scryfall query from the command line.

Fetches every card matching a query, then prints one line per data point of
the chosen preset, e.g.:

    python -m scrygraph.jobs.chart_query "t:dragon" --preset color-distribution
"""

import argparse
import asyncio
import logging
import sys
from typing import Any

from scrygraph.analysis.graph_transformer import transform
from scrygraph.analysis.presets import DEFAULT_PRESET_ID, GRAPH_PRESETS, get_preset
from scrygraph.analysis.query_stats import summarize_cards
from scrygraph.models.graph import ChartData, GraphConfig
from scrygraph.parsers.card_normalizer import normalize_cards
from scrygraph.services.scryfall_client import ScryfallClient, ScryfallError

logger = logging.getLogger(__name__)


def _log_progress(cards: list[dict[str, Any]], total: int) -> None:
    logger.info("Fetched %d/%d cards", len(cards), total)


def format_chart(chart: ChartData) -> list[str]:
    """Render chart data as aligned text lines."""
    lines = [f"{chart.x_label} | {chart.y_label} | Cards"]
    width = max((len(point.label) for point in chart.data), default=0)
    for point in chart.data:
        lines.append(f"{point.label:<{width}} | {point.value:g} | {point.count}")
    return lines


async def run_chart_query(
    query: str,
    config: GraphConfig,
    client: ScryfallClient | None = None,
) -> ChartData:
    """
    Fetch, normalize and chart the cards matching a query.

    Raises:
        ScryfallError: If Scryfall cannot be queried
    """
    client = client or ScryfallClient()
    logger.info("Searching Scryfall for %r...", query)

    raw_cards = await client.search_cards(query, on_progress=_log_progress)
    cards = normalize_cards(raw_cards)

    stats = summarize_cards(cards)
    logger.info(
        "Normalized %d cards (avg mana value %.2f, %d priced)",
        stats.total_cards,
        stats.avg_cmc,
        stats.priced_cards,
    )
    return transform(cards, config)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Chart a Scryfall search")
    parser.add_argument("query", nargs="?", help="Scryfall search query")
    parser.add_argument(
        "--preset",
        default=DEFAULT_PRESET_ID,
        help=f"Preset ID (default: {DEFAULT_PRESET_ID})",
    )
    parser.add_argument(
        "--list-presets",
        action="store_true",
        help="List available presets and exit",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_presets:
        for preset in GRAPH_PRESETS:
            print(f"{preset.id:<20} {preset.name} ({preset.category.value})")
        return 0

    if not args.query:
        parser.error("a query is required unless --list-presets is given")

    preset = get_preset(args.preset)
    if preset is None:
        parser.error(f"unknown preset: {args.preset}")

    try:
        chart = asyncio.run(run_chart_query(args.query, preset))
    except ScryfallError as e:
        logger.error("Failed to chart %r: %s", args.query, e.message)
        return 1

    for line in format_chart(chart):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
