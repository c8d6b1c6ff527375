"""Headless playback: drive a game from an input source on simulated time."""

import logging
import random
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from piece_control.clock import ManualClock
from piece_control.config import ControllerConfig
from piece_control.game import TetrisGame
from piece_control.inputs import Action, InputBuffer

logger = logging.getLogger(__name__)

# Script tokens for the soft drop hold, alongside Action names
SOFT_DROP_PRESS = "SOFT_DROP_PRESS"
SOFT_DROP_RELEASE = "SOFT_DROP_RELEASE"


class InputSource(ABC):
    """Something that presses buttons once per frame."""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def feed(self, tick: int, inputs: InputBuffer) -> None:
        """Deliver this frame's input events.

        Args:
            tick: Frame number about to be played
            inputs: Buffer to press into
        """
        pass

    def on_episode_start(self, seed: int) -> None:
        """Called before the first frame of an episode."""
        pass


def apply_event(event: str, inputs: InputBuffer) -> None:
    """Press a named event into the buffer.

    Args:
        event: An Action name, SOFT_DROP_PRESS or SOFT_DROP_RELEASE

    Raises:
        ValueError: If the name is unknown
    """
    if event == SOFT_DROP_PRESS:
        inputs.press_soft_drop()
    elif event == SOFT_DROP_RELEASE:
        inputs.release_soft_drop()
    else:
        try:
            action = Action[event]
        except KeyError:
            raise ValueError(f"Invalid input event: {event}")
        inputs.press(action)


class ScriptedInput(InputSource):
    """Replays a fixed frame -> events script."""

    def __init__(self, script: Dict[int, Iterable[str]]):
        super().__init__(name="Scripted")
        self.script = {tick: list(events) for tick, events in script.items()}

    def feed(self, tick: int, inputs: InputBuffer) -> None:
        for event in self.script.get(tick, []):
            apply_event(event, inputs)


class RandomInput(InputSource):
    """Mashes buttons at random. A baseline for smoke runs."""

    ACTIONS = [Action.LEFT, Action.RIGHT, Action.ROTATE_LEFT, Action.ROTATE_RIGHT, Action.HARD_DROP]

    def __init__(self, seed: Optional[int] = None, press_chance: float = 0.1):
        """Initialize random input.

        Args:
            seed: Random seed for reproducibility (optional)
            press_chance: Probability of pressing something on a given frame
        """
        super().__init__(name="Random")
        self.seed = seed
        self.press_chance = press_chance
        self.rng = random.Random(seed)

    def on_episode_start(self, seed: int) -> None:
        self.rng = random.Random(seed if self.seed is None else self.seed)

    def feed(self, tick: int, inputs: InputBuffer) -> None:
        if self.rng.random() < self.press_chance:
            inputs.press(self.rng.choice(self.ACTIONS))

        # Occasionally toggle the soft drop hold
        if self.rng.random() < self.press_chance / 4:
            if inputs.soft_drop_held:
                inputs.release_soft_drop()
            else:
                inputs.press_soft_drop()


@dataclass
class EpisodeStats:
    """Statistics for a single episode."""

    source: str
    seed: int
    ticks: int
    simulated_seconds: float
    pieces_spawned: int
    lines_total: int
    top_outs: int
    max_height: int
    duration_seconds: float
    final_board_state: List[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "source": self.source,
            "seed": self.seed,
            "ticks": self.ticks,
            "simulated_seconds": self.simulated_seconds,
            "pieces_spawned": self.pieces_spawned,
            "lines_total": self.lines_total,
            "top_outs": self.top_outs,
            "max_height": self.max_height,
            "duration_seconds": self.duration_seconds,
        }


class Runner:
    """Plays games frame by frame on a simulated clock.

    With the default ``ControllerConfig`` (``early_step_lock=True`` and a step
    delay longer than the lock delay) a piece left alone locks on its first
    gravity step, high on the board, so idle or sparse input tops out often.
    Pass ``ControllerConfig(early_step_lock=False)`` for pieces that fall
    until they land.
    """

    FRAMES_PER_SECOND = 60

    def __init__(
        self,
        config: Optional[ControllerConfig] = None,
        frames_per_second: int = FRAMES_PER_SECOND,
    ):
        """Initialize runner.

        Args:
            config: Controller timing configuration
            frames_per_second: Simulated frame rate

        Raises:
            ValueError: If frames_per_second is not positive
        """
        if frames_per_second <= 0:
            raise ValueError(f"frames_per_second must be positive, got {frames_per_second}")
        self.config = config or ControllerConfig()
        self.frames_per_second = frames_per_second

    def run_episode(self, source: InputSource, seed: int, max_ticks: int) -> EpisodeStats:
        """Play one game for a fixed number of frames.

        Args:
            source: Input source pressing buttons
            seed: Seed for the piece bag
            max_ticks: Number of frames to play

        Returns:
            Episode statistics
        """
        clock = ManualClock()
        game = TetrisGame(seed=seed, config=self.config, clock=clock)
        frame = 1.0 / self.frames_per_second

        source.on_episode_start(seed)
        game.start()
        start_time = time.time()

        logger.info(f"[Runner] Starting: source={source.name}, seed={seed}, ticks={max_ticks}")

        for tick in range(max_ticks):
            source.feed(tick, game.inputs)
            clock.advance(frame)
            game.tick()

        duration = time.time() - start_time
        board = game.board

        stats = EpisodeStats(
            source=source.name,
            seed=seed,
            ticks=game.tick_count,
            simulated_seconds=clock.now,
            pieces_spawned=board.pieces_spawned,
            lines_total=board.lines_total,
            top_outs=board.top_outs,
            max_height=max(board.get_column_heights()),
            duration_seconds=duration,
            final_board_state=board.to_list(),
        )

        logger.info(
            f"[Runner] Episode {seed}: {stats.pieces_spawned} pieces, "
            f"{stats.lines_total} lines, {stats.top_outs} top outs "
            f"({stats.simulated_seconds:.1f}s simulated, {duration:.2f}s wall)"
        )

        return stats

    def run_benchmark(
        self, source: InputSource, seeds: List[int], max_ticks: int
    ) -> List[EpisodeStats]:
        """Run one episode per seed."""
        return [self.run_episode(source, seed, max_ticks) for seed in seeds]
