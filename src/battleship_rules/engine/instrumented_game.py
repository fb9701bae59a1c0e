"""Game subclass with match-level telemetry hooks."""

from __future__ import annotations

import time
from typing import Any

from battleship_rules.engine.errors import RulesError
from battleship_rules.engine.game import Game
from battleship_rules.engine.types import Player, ShootOutcome
from battleship_rules.telemetry import (
    get_logger,
    get_tracer,
    observe_engine_metric,
    record_engine_metric,
)


class InstrumentedGame(Game):
    """Wraps Game with a match-long span, shot metrics and completion logging.

    Select it with ``PreGame.start(game_cls=InstrumentedGame)``.
    """

    _match_counter = 0

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._logger = get_logger("battleship_rules.engine")
        self._tracer = get_tracer("battleship_rules.engine")
        self._match_span = None
        self._shots_fired = 0
        type(self)._match_counter += 1
        self._match_id = type(self)._match_counter
        self._start_match_span()

    @property
    def match_id(self) -> int:
        return self._match_id

    def __enter__(self) -> InstrumentedGame:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    def close(self) -> None:
        """End the match span of a match abandoned before anyone won."""
        if self._match_span is None:
            return
        self._match_span.set_attribute("abandoned", True)
        self._match_span.set_attribute("shots", self._shots_fired)
        record_engine_metric("battleship_rules_matches_abandoned_total", 1)
        self._logger.info(
            "Match %d abandoned after %d shots", self._match_id, self._shots_fired
        )
        self._close_match_span()

    def shoot(self, shooter: Player, x: int, y: int) -> ShootOutcome:
        with self._tracer.start_as_current_span("battleship_rules.engine.shoot") as span:
            span.set_attribute("match.id", self._match_id)
            span.set_attribute("shooter", shooter.name)
            span.set_attribute("coord.x", x)
            span.set_attribute("coord.y", y)

            try:
                outcome = super().shoot(shooter, x, y)
            except RulesError as exc:
                record_engine_metric(
                    "battleship_rules_rejected_shots_total",
                    1,
                    {"player": shooter.name, "reason": type(exc).__name__},
                )
                span.record_exception(exc)
                span.set_attribute("error", True)
                self._logger.warning(
                    "Rejected shot from %s at (%d,%d): %s", shooter.name, x, y, exc
                )
                raise

            self._shots_fired += 1
            span.set_attribute("shot_outcome", outcome.name)
            record_engine_metric(
                "battleship_rules_shots_total",
                1,
                {"player": shooter.name, "outcome": outcome.name},
            )
            self._logger.info(
                "shoot player=%s coord=(%d,%d) outcome=%s", shooter.name, x, y, outcome.name
            )

            if outcome is ShootOutcome.WINNING_SHOT:
                span.set_attribute("winner", shooter.name)
                self._finish_match()
            return outcome

    def _start_match_span(self) -> None:
        self._match_start_time = time.perf_counter()
        # Spans the whole match, so it is never made the current span.
        self._match_span = self._tracer.start_span("battleship_rules.engine.match")
        self._match_span.set_attribute("match.id", self._match_id)
        self._match_span.set_attribute("match.width", self.width)
        self._match_span.set_attribute("match.height", self.height)

    def _finish_match(self) -> None:
        duration = time.perf_counter() - self._match_start_time
        winner = self.winner.name if self.winner else "unknown"

        record_engine_metric("battleship_rules_matches_completed_total", 1, {"winner": winner})
        observe_engine_metric(
            "battleship_rules_match_duration_seconds", duration, {"winner": winner}
        )

        if self._match_span is not None:
            self._match_span.set_attribute("winner", winner)
            self._match_span.set_attribute("shots", self._shots_fired)
            self._match_span.set_attribute("duration_ms", duration * 1000)

        self._logger.info(
            "Match %d finished. Winner=%s shots=%d duration_s=%.3f",
            self._match_id,
            winner,
            self._shots_fired,
            duration,
        )
        self._close_match_span()

    def _close_match_span(self) -> None:
        if self._match_span is not None:
            self._match_span.end()
            self._match_span = None
