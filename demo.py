#!/usr/bin/env python3
"""Demo script: play headless games on simulated time."""

import logging
import sys

from piece_control.config import ControllerConfig
from piece_control.runner import RandomInput, Runner, ScriptedInput


# Rotate, shuffle left, hard drop; then hold soft drop for a while and drop again.
DEMO_SCRIPT = {
    10: ["ROTATE_RIGHT"],
    20: ["LEFT"],
    25: ["LEFT"],
    40: ["HARD_DROP"],
    60: ["RIGHT", "ROTATE_LEFT"],
    70: ["SOFT_DROP_PRESS"],
    150: ["SOFT_DROP_RELEASE"],
    160: ["HARD_DROP"],
    200: ["RESTART"],
}


def main():
    """Run the demo."""
    verbose = "-v" in sys.argv
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)

    # Late lock check: pieces fall until they land instead of locking on the
    # first gravity step, which would top out idle games
    runner = Runner(ControllerConfig(early_step_lock=False))

    if len(sys.argv) > 1 and sys.argv[1] == "random":
        print("\nRandom input, 3 episodes of 60 simulated seconds...")
        results = runner.run_benchmark(RandomInput(seed=42), seeds=[0, 1, 2], max_ticks=3600)
        for stats in results:
            print(f"  seed {stats.seed}: {stats.pieces_spawned} pieces, {stats.lines_total} lines, "
                  f"{stats.top_outs} top outs")
    else:
        print("\nScripted input, 5 simulated seconds...")
        stats = runner.run_episode(ScriptedInput(DEMO_SCRIPT), seed=42, max_ticks=300)
        print(f"  {stats.pieces_spawned} pieces spawned, max height {stats.max_height}")

        print("\nTry these commands:")
        print("  python demo.py random     - Random button mashing")
        print("  python demo.py random -v  - Same, with per-move logging")


if __name__ == "__main__":
    main()
