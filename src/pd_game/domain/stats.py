"""Per-user game statistics, aggregated over the full game history."""

from collections.abc import Iterable

from src.pd_common.money import round_money
from src.pd_game.domain.models import GameRecord, GameStats


def aggregate(records: Iterable[GameRecord]) -> GameStats:
    total_games = 0
    games_won = 0
    total_bet = 0.0
    total_won = 0.0
    for record in records:
        total_games += 1
        if record.won:
            games_won += 1
        total_bet += record.bet_amount
        total_won += record.win_amount

    # Sums keep full precision; only the reported figures are rounded
    win_rate = round_money(games_won / total_games * 100) if total_games else 0.0
    return GameStats(
        total_games=total_games,
        games_won=games_won,
        games_lost=total_games - games_won,
        win_rate=win_rate,
        total_bet=round_money(total_bet),
        total_won=round_money(total_won),
        net_profit=round_money(total_won - total_bet),
    )
