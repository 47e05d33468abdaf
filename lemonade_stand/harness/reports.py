# Copyright (c) 2025 Lemonade Stand Contributors
# BSD-3-Clause License

"""
Reporting utilities for Lemonade Stand.

Builds the Lemonsville daily financial report and renders the game's
announcements to the terminal in either the modern or the classic
(green-screen) style.
"""

from typing import Any, Mapping, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..models import WEATHER_LABELS, Weather


GAME_INSTRUCTIONS = [
    "To manage your lemonade stand, you will need to make these decisions every day:\n\n"
    "1. How many glasses of lemonade to make (only one batch is made each morning)\n"
    "2. How many advertising signs to make (the signs cost fifteen cents each)\n"
    "3. What price to charge for each glass\n\n"
    "You will begin with $2.00 cash (assets).\n"
    "Because your mother gave you some sugar, your cost to make lemonade is two cents a glass "
    "(this may change in the future).",
    "Your expenses are the sum of the cost of the lemonade and the cost of the signs.\n\n"
    "Your profits are the difference between the income from sales and your expenses.\n\n"
    "The number of glasses you sell each day depends on the price you charge, "
    "and on the number of advertising signs you use.\n\n"
    "Keep track of your assets, because you can't spend more money than you have!",
]

WELCOME = (
    "Hi! Welcome to Lemonsville, California!\n\n"
    "In this small town, you are in charge of running your own lemonade stand. "
    "You can compete with as many other people as you wish, but how much profit "
    "you make is up to you. If you make the most money, you're the winner!"
)

THUNDERSTORM_NOTICE = (
    "WEATHER REPORT: A SEVERE THUNDERSTORM HIT LEMONSVILLE EARLIER TODAY, "
    "JUST AS THE LEMONADE STANDS WERE BEING SET UP.\n\n"
    "UNFORTUNATELY, EVERYTHING WAS RUINED!!"
)

BANKRUPT_NOTICE = "...YOU DON'T HAVE ENOUGH MONEY LEFT TO STAY IN BUSINESS. YOU'RE BANKRUPT!"

REPORT_TITLE = "$$ LEMONSVILLE DAILY FINANCIAL REPORT $$"


def money(cents: int) -> str:
    """Format cents as dollars, e.g. 130 -> '$1.30'."""
    sign = "-" if cents < 0 else ""
    return f"{sign}${abs(cents) / 100:.2f}"


def weather_label(weather: str) -> str:
    return WEATHER_LABELS.get(Weather(weather), weather.upper())


def format_stand_report(result: Mapping[str, Any]) -> str:
    """Figures block for one stand that is still in business."""
    pad = " " * 24
    lines = [
        f"DAY {result['day']:<6}STAND {result['player_id'] + 1}",
        "",
        f"{result['glasses_sold']} GLASSES SOLD",
        "",
        f"{money(result['price'])} PER GLASS{'':<16}INCOME {money(result['income'])}",
        "",
        f"{result['glasses_made']} GLASSES MADE",
        "",
        f"{result['signs_made']} SIGNS MADE{'':<14}EXPENSES {money(result['expenses'])}",
        "",
        f"{pad}PROFIT {money(result['profit'])}",
        "",
        f"{pad}ASSETS {money(result['assets'])}",
        "-------------------------------------",
    ]
    return "\n".join(lines)


def format_daily_report(results: Sequence[Mapping[str, Any]], num_players: int) -> str:
    """
    Build the daily financial report for every stand.

    Stands without a result were already bankrupt before the day started.

    Args:
        results: Settlement results (as dicts) for the stands that played
        num_players: Total number of stands in the game

    Returns:
        The report text, one block per stand in stand order
    """
    by_player = {r["player_id"]: r for r in results}
    report = [REPORT_TITLE, ""]

    for player_id in range(num_players):
        result = by_player.get(player_id)
        if result is None:
            report.append(f"STAND {player_id + 1}: BANKRUPT")
        elif result["newly_bankrupt"]:
            report.append(f"STAND {player_id + 1}")
            report.append(BANKRUPT_NOTICE)
        else:
            report.append(format_stand_report(result))
        report.append("")

    return "\n".join(report).rstrip() + "\n"


class ReportRenderer:
    """
    Renders the game to a rich console.

    Subclasses choose the look; the text is the same in every style.
    """

    name = "modern"
    accent = "bold yellow"
    text = "white"
    dim = "dim"
    good = "green"
    bad = "red"
    warning = "yellow"
    panel_style = "yellow"

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def _panel(self, body: str, title: str, border_style: str | None = None) -> Panel:
        return Panel(
            escape(body),
            title=f"[{self.accent}]{escape(title)}[/{self.accent}]",
            border_style=border_style or self.panel_style,
            style=self.text,
        )

    def title(self) -> None:
        self.console.print(f"\n[{self.accent}]🍋 LEMONADE STAND[/{self.accent}]\n")

    def welcome(self) -> None:
        self.console.print(self._panel(WELCOME, "Lemonsville"))

    def instructions(self) -> None:
        for page in GAME_INSTRUCTIONS:
            self.console.print(self._panel(page, "Game Instructions"))

    def weather(self, day: int, weather: str, multiplier: float) -> None:
        icon = {
            "sunny": "☀️",
            "hot_dry": "🔥",
            "cloudy": "☁️",
            "thunderstorm": "⛈️",
        }.get(weather, "🌡️")
        self.console.print(
            f"[{self.accent}]📅 Day {day}:[/{self.accent}] {icon} "
            f"LEMONSVILLE WEATHER REPORT: {weather_label(weather)}"
        )
        self.console.print(f"   [{self.dim}]Demand multiplier: x{multiplier:g}[/{self.dim}]")

    def announcement(self, text: str) -> None:
        self.console.print(self._panel(text, "News Flash", border_style=self.warning))

    def turn_header(self, day: int, player_id: int, assets: int, lemonade_cost: int, sign_cost: int) -> None:
        self.console.print(f"\n[{self.accent}]Day {day} - Stand {player_id + 1}[/{self.accent}]")
        self.console.print(f"[{self.text}]Assets: {money(assets)}[/{self.text}]")
        self.console.print(f"[{self.text}]Cost per glass of lemonade: {money(lemonade_cost)}[/{self.text}]")
        self.console.print(f"[{self.dim}]Advertising signs cost {money(sign_cost)} each[/{self.dim}]")

    def thunderstorm(self) -> None:
        self.console.print(self._panel(THUNDERSTORM_NOTICE, "Thunderstorm!", border_style=self.bad))

    def daily_report(self, results: Sequence[Mapping[str, Any]], num_players: int) -> None:
        self.console.print(
            Panel(
                escape(format_daily_report(results, num_players)),
                border_style=self.panel_style,
                style=self.text,
            )
        )

    def error(self, message: str) -> None:
        self.console.print(f"[{self.bad}]{escape(message)}[/{self.bad}]")

    def winner(self, message: str, final_assets: Sequence[int]) -> None:
        self.console.print()
        self.console.print(f"[{self.accent}]" + "═" * 50 + f"[/{self.accent}]")
        self.console.print(f"[{self.good}]🏆 GAME OVER! {escape(message)}[/{self.good}]")
        self.console.print(f"[{self.accent}]" + "═" * 50 + f"[/{self.accent}]")
        self.console.print(standings_table(final_assets, self))


class ClassicRenderer(ReportRenderer):
    """The 80's green-screen look: lime on black, no colours, no emoji."""

    name = "classic"
    accent = "bold green1 on black"
    text = "green1 on black"
    dim = "green4 on black"
    good = "bold green1 on black"
    bad = "bold green1 on black"
    warning = "green1 on black"
    panel_style = "green1 on black"

    def title(self) -> None:
        self.console.print(f"\n[{self.accent}]LEMONADE STAND[/{self.accent}]\n")

    def weather(self, day: int, weather: str, multiplier: float) -> None:
        self.console.print(f"[{self.accent}]DAY {day}  LEMONSVILLE WEATHER REPORT: {weather_label(weather)}[/{self.accent}]")

    def winner(self, message: str, final_assets: Sequence[int]) -> None:
        self.console.print()
        self.console.print(f"[{self.accent}]GAME OVER  {escape(message.upper())}[/{self.accent}]")
        self.console.print(standings_table(final_assets, self))


RENDERERS = {
    "modern": ReportRenderer,
    "classic": ClassicRenderer,
}


def get_renderer(theme: str, console: Console | None = None) -> ReportRenderer:
    """
    Pick the renderer for a theme.

    Raises:
        ValueError: If the theme is unknown
    """
    renderer_class = RENDERERS.get(theme)
    if renderer_class is None:
        raise ValueError(f"Unknown theme: {theme}. Must be one of: {', '.join(RENDERERS)}")
    return renderer_class(console)


def standings_table(final_assets: Sequence[int], renderer: ReportRenderer | None = None) -> Table:
    """Final assets per stand, richest first."""
    renderer = renderer or ReportRenderer()
    table = Table(title="Final Standings", style=renderer.text)
    table.add_column("Rank", style=renderer.dim, width=4)
    table.add_column("Stand", style=renderer.accent)
    table.add_column("Assets", style=renderer.good, justify="right")

    ranked = sorted(enumerate(final_assets), key=lambda item: item[1], reverse=True)
    for rank, (player_id, assets) in enumerate(ranked, 1):
        table.add_row(f"#{rank}", f"Stand {player_id + 1}", money(assets))

    return table
