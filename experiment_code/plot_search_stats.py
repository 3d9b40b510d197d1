import sys

import pandas as pd
import matplotlib.pyplot as plt

# Path to a move_stats.csv written by batch_play.py
STATS_PATH = sys.argv[1] if len(sys.argv) > 1 else "../logs_batch/move_stats.csv"

df = pd.read_csv(STATS_PATH)

# Average over games, per player and turn
per_turn = df.groupby(["player", "turn"])[["depth", "nodes"]].mean().reset_index()

plt.style.use("seaborn-v0_8-darkgrid")

fig, axes = plt.subplots(2, 1, figsize=(12, 10), sharex=True)

for player, rows in per_turn.groupby("player"):
    axes[0].plot(rows["turn"], rows["depth"], label=player, linewidth=2)
    axes[1].plot(rows["turn"], rows["nodes"], label=player, linewidth=2)

axes[0].set_title("Search depth reached per turn", fontsize=16)
axes[0].set_ylabel("Depth", fontsize=14)

axes[1].set_title("Leaf evaluations per turn", fontsize=16)
axes[1].set_ylabel("Nodes", fontsize=14)
axes[1].set_yscale("log")
axes[1].set_xlabel("Turn", fontsize=14)

for ax in axes:
    ax.legend(fontsize=12)

plt.tight_layout()
plt.savefig("search_stats_per_turn.png", dpi=200)
plt.show()
