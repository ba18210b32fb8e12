# euchre_engine/game_log.py
from __future__ import annotations

import csv
from typing import Any, Dict, List, Optional

from .game import Game

FIELDNAMES = [
    "game_id",
    "round_index",
    "dealer_id",
    "trump_suit",
    "maker_id",
    "maker_team",
    "alone",
    "maker_tricks",
    "defender_tricks",
    "outcome",
    "team0_delta",
    "team1_delta",
    "team0_score",
    "team1_score",
    "target_score",
]


def _outcome(result) -> str:
    if result.is_misdeal:
        return "misdeal"
    if result.was_euchred:
        return "euchre"
    if result.was_march:
        return "march"
    return "made"


def build_round_score_rows(
    game: Game,
    game_id: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Build a list of rows summarizing each finished round for CSV export.

    Each row corresponds to one round and has keys in FIELDNAMES. Running team
    scores are recomputed from the round deltas, so they match `game.scores`
    after the last row.
    """
    running = [0, 0]
    rows: List[Dict[str, Any]] = []

    for round_index, result in enumerate(game.round_history):
        update = result.score_update()
        running[0] += update.team0_delta
        running[1] += update.team1_delta

        rows.append(
            {
                "game_id": game_id,
                "round_index": round_index,
                "dealer_id": result.dealer,
                "trump_suit": None if result.is_misdeal else result.trump.name,
                "maker_id": result.maker,
                "maker_team": result.maker_team,
                "alone": result.was_alone,
                "maker_tricks": result.maker_tricks,
                "defender_tricks": result.defender_tricks,
                "outcome": _outcome(result),
                "team0_delta": update.team0_delta,
                "team1_delta": update.team1_delta,
                "team0_score": running[0],
                "team1_score": running[1],
                "target_score": game.target_score,
            }
        )

    return rows


def write_round_scores_csv(
    game: Game,
    path,
    game_id: Optional[str] = None,
) -> None:
    """
    Write per-round scores to a CSV file.

    `path` can be a string or any path-like object accepted by `open`.
    """
    rows = build_round_score_rows(game, game_id=game_id)

    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        for row in rows:
            writer.writerow({field: row.get(field) for field in FIELDNAMES})
