# /experiments/sanity_rollout.py
"""
Sanity rollouts for GapJumpEnv:
- Runs RANDOM and/or TINY-HEURISTIC policies over fixed seeds
- Writes an episodes CSV for notebook analysis
- Optionally saves per-episode action sequences for exact replay

Usage examples (from repo root):
  # Both policies over 20 default seeds, frame_skip=4, save traces:
  python -m experiments.sanity_rollout --policies both --save-traces

  # Only heuristic, custom seeds:
  python -m experiments.sanity_rollout --policies heuristic --seeds 111,222,333

  # Watch the heuristic play (collisions only highlight, episode keeps going):
  python -m experiments.sanity_rollout --policies heuristic --seeds 101 --render --keep-going
"""

from __future__ import annotations
import argparse
import csv
from pathlib import Path
from typing import List, Tuple

import numpy as np

from gapjump.env.gj_env import GapJumpEnv
from gapjump.game.config import DIM, HEIGHT


# ------------------------ Policies ------------------------

def random_policy_init(action_seed: int, jump_prob: float = 0.08):
    rng = np.random.RandomState(action_seed)
    def act(_obs: np.ndarray) -> int:
        return int(rng.random_sample() < jump_prob)
    return act

def tiny_heuristic_policy_init(dim_frac: float = DIM / HEIGHT, margin: float = 0.03):
    """
    Jump whenever the player's centre has sunk below the centre of the next
    opening and it is not already rising.
    """
    def act(obs: np.ndarray) -> int:
        y_norm, vy_norm, _dx, gap_top, gap_bottom = (float(v) for v in obs)
        center = y_norm * (1.0 - dim_frac) + dim_frac / 2.0
        target = (gap_top + gap_bottom) / 2.0
        return 1 if (center > target + margin and vy_norm >= 0.0) else 0
    return act


# ------------------------ Rollout core ------------------------

def ensure_dir(p: Path):
    p.mkdir(parents=True, exist_ok=True)

def write_episode_row(csv_path: Path, header: List[str], row: List):
    exists = csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.writer(f)
        if not exists:
            w.writerow(header)
        w.writerow(row)

def run_one_episode(policy_name: str,
                    seed: int,
                    frame_skip: int,
                    steps_limit: int,
                    end_on_collision: bool,
                    render: bool,
                    save_traces: bool,
                    out_dir: Path) -> Tuple[int, float, int, bool, bool, int]:
    """
    Returns: (ep_len, ret_sum, ticks, terminated, truncated, hit_steps)
    """
    env = GapJumpEnv(render_mode="human" if render else None,
                     frame_skip=frame_skip,
                     end_on_collision=end_on_collision)

    if policy_name == "random":
        action_seed = 10_000 + seed
        policy = random_policy_init(action_seed)
    elif policy_name == "heuristic":
        action_seed = -1
        policy = tiny_heuristic_policy_init()
    else:
        raise ValueError(f"Unknown policy {policy_name!r}")

    actions: List[int] = []
    ret_sum = 0.0
    ep_len = 0
    hit_steps = 0
    term = trunc = False
    info = {}

    try:
        obs, info = env.reset(seed=seed)
        for _ in range(steps_limit):
            a = policy(obs)
            actions.append(int(a))
            obs, r, term, trunc, info = env.step(a)
            ret_sum += float(r)
            ep_len += 1
            hit_steps += int(bool(info.get("hit", False)))
            if term or trunc:
                break
    finally:
        env.close()

    if save_traces:
        trace_dir = out_dir / "traces" / policy_name
        ensure_dir(trace_dir)
        np.save(trace_dir / f"{seed}_actions.npy", np.asarray(actions, dtype=np.int8))
        meta_lines = [
            f"seed={seed}",
            f"frame_skip={frame_skip}",
            f"policy={policy_name}",
            f"action_rng_seed={action_seed}",
            f"end_on_collision={int(end_on_collision)}",
        ]
        (trace_dir / f"{seed}_meta.txt").write_text("\n".join(meta_lines), encoding="utf-8")

    return ep_len, ret_sum, int(info.get("tick", 0)), bool(term), bool(trunc), hit_steps


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", type=str, default="both",
                    choices=["random", "heuristic", "both"])
    ap.add_argument("--seeds", type=str, default="",
                    help="Comma-separated seeds. If empty, uses 20 defaults: 101..120")
    ap.add_argument("--frame-skip", type=int, default=4)
    ap.add_argument("--steps", type=int, default=10_000,
                    help="Hard cap on decision steps (env may truncate earlier)")
    ap.add_argument("--keep-going", action="store_true",
                    help="Do not end episodes on collision (baseline game behaviour)")
    ap.add_argument("--render", action="store_true")
    ap.add_argument("--out-dir", type=str, default="experiments/runs")
    ap.add_argument("--save-traces", action="store_true")
    args = ap.parse_args()

    out_dir = Path(args.out_dir)
    ensure_dir(out_dir)

    if args.seeds.strip():
        seeds = [int(s) for s in args.seeds.split(",") if s.strip()]
    else:
        seeds = list(range(101, 121))

    episodes_csv = out_dir / "episodes.csv"
    header = [
        "policy_name", "seed", "frame_skip", "end_on_collision",
        "episode_len_decisions", "return_sum", "ticks",
        "terminated", "truncated", "hit_steps",
    ]

    to_run = ["random", "heuristic"] if args.policies == "both" else [args.policies]
    print(f"Running policies={to_run} on {len(seeds)} seeds (frame_skip={args.frame_skip})")
    print(f"Writing summaries to {episodes_csv}")

    for policy_name in to_run:
        for seed in seeds:
            ep_len, ret_sum, ticks, terminated, truncated, hit_steps = run_one_episode(
                policy_name=policy_name,
                seed=seed,
                frame_skip=args.frame_skip,
                steps_limit=args.steps,
                end_on_collision=not args.keep_going,
                render=args.render,
                save_traces=args.save_traces,
                out_dir=out_dir,
            )
            write_episode_row(episodes_csv, header, [
                policy_name, seed, args.frame_skip, int(not args.keep_going),
                ep_len, f"{ret_sum:.1f}", ticks,
                int(terminated), int(truncated), hit_steps,
            ])
            print(f"[{policy_name}] seed={seed}  len={ep_len}  ticks={ticks}  "
                  f"ret={ret_sum:.1f}  term={terminated} trunc={truncated}  hits={hit_steps}")

    print("✓ Sanity rollouts complete")


if __name__ == "__main__":
    main()
