# euchre_engine/results.py
from __future__ import annotations

import numpy as np
import pandas as pd

OUTCOMES = ["made", "march", "euchre", "misdeal"]


def load_round_scores(path) -> pd.DataFrame:
    """Load a CSV written by game_log.write_round_scores_csv."""
    return pd.read_csv(path)


def final_scores(df: pd.DataFrame) -> pd.DataFrame:
    """
    One row per game: final team scores and the winning team.

    `winner_team` is the first team at or above `target_score`, and <NA> for
    games that stopped before either team got there.
    """
    last = (
        df.sort_values(["game_id", "round_index"])
        .groupby("game_id", dropna=False)
        .tail(1)
    )
    out = last[
        ["game_id", "team0_score", "team1_score", "target_score"]
    ].reset_index(drop=True)
    out["rounds"] = (
        df.groupby("game_id", dropna=False)["round_index"].count().to_numpy()
    )
    team0_won = (out["team0_score"] >= out["target_score"]).to_numpy()
    team1_won = (out["team1_score"] >= out["target_score"]).to_numpy()
    winners = np.select([team0_won, team1_won], [0, 1], default=-1)
    out["winner_team"] = pd.array(
        [None if w < 0 else int(w) for w in winners], dtype="Int64"
    )
    return out


def outcome_rates(df: pd.DataFrame) -> pd.DataFrame:
    """
    Share of rounds ending in each outcome, with a 95% confidence interval.

    ci95 = 1.96 * sqrt(p * (1 - p) / n)
    """
    n = len(df)
    counts = df["outcome"].value_counts().reindex(OUTCOMES, fill_value=0)
    stats = counts.rename("count").to_frame()
    stats["rate"] = stats["count"] / n if n else 0.0
    stats["ci95"] = (
        1.96 * np.sqrt(stats["rate"] * (1 - stats["rate"]) / n) if n else 0.0
    )
    return stats
