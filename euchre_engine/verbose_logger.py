# euchre_engine/verbose_logger.py
from __future__ import annotations

from pathlib import Path
from threading import Lock
from typing import Any, Dict, List, Optional


class VerboseGameLogger:
    """Accumulates a turn-by-turn transcript of applied actions."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._entries: List[str] = []
        self._lock = Lock()

    @property
    def entries(self) -> List[str]:
        with self._lock:
            return list(self._entries)

    def log_action(
        self,
        *,
        agent_label: str,
        game_id: Optional[str],
        round_index: Optional[int],
        phase: Optional[str],
        action: Dict[str, Any],
        hand: Optional[List[str]] = None,
        note: Optional[str] = None,
    ) -> None:
        header_parts = [f"Agent: {agent_label}"]
        if game_id is not None:
            header_parts.append(f"Game: {game_id}")
        if round_index is not None:
            header_parts.append(f"Round: {round_index}")
        if phase is not None:
            header_parts.append(f"Phase: {phase}")
        header = " | ".join(header_parts)

        lines = [f"=== {header} ==="]
        if hand is not None:
            lines.append(f"Hand: {' '.join(hand)}")
        lines.append(f"Action: {action!r}")
        if note:
            lines.append(f"Note: {note}")

        entry = "\n".join(lines).strip()
        with self._lock:
            self._entries.append(entry)

    def log_round_result(
        self,
        *,
        game_id: Optional[str],
        round_index: int,
        summary: str,
        scores: List[int],
    ) -> None:
        header_parts = ["Round result"]
        if game_id is not None:
            header_parts.append(f"Game: {game_id}")
        header_parts.append(f"Round: {round_index}")
        entry = "\n".join(
            [
                f"=== {' | '.join(header_parts)} ===",
                summary,
                f"Scores: {scores[0]}-{scores[1]}",
            ]
        )
        with self._lock:
            self._entries.append(entry)

    def flush(self) -> None:
        with self._lock:
            if not self._entries:
                return
            to_write = "\n\n".join(self._entries)
            self._entries.clear()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(to_write + "\n\n")
