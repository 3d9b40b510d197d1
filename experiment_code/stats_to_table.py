import sys

import pandas as pd
import matplotlib.pyplot as plt

# 1. Load the per-move statistics from batch_play.py
file_path = sys.argv[1] if len(sys.argv) > 1 else "../logs_batch/move_stats.csv"
df = pd.read_csv(file_path)

# 2. One row per player: how deep and how fast it searched
summary = (
    df.groupby("player")
    .agg(
        moves=("turn", "count"),
        mean_depth=("depth", "mean"),
        max_depth=("depth", "max"),
        mean_nodes=("nodes", "mean"),
        mean_seconds=("seconds", "mean"),
    )
    .reset_index()
    .sort_values(by="mean_depth", ascending=False)
)
summary = summary.round({"mean_depth": 2, "mean_nodes": 0, "mean_seconds": 3})

# 3. Setup the plot
fig, ax = plt.subplots(figsize=(9, 1 + 0.6 * len(summary)))
ax.axis('tight')
ax.axis('off')

# 4. Create the table
table = ax.table(cellText=summary.values,
                 colLabels=summary.columns,
                 cellLoc='center',
                 loc='center')

table.auto_set_font_size(False)
table.set_fontsize(14)
table.scale(1.2, 2.5)

# 5. Header row styling
for (row, col), cell in table.get_celld().items():
    if row == 0:
        cell.set_text_props(weight='bold', color='white')
        cell.set_facecolor('#40466e')
    else:
        cell.set_facecolor('#e6f2ff')

# 6. Save
plt.title("Search statistics per player", fontweight="bold", y=1.05)
plt.savefig("search_stats_table.png", bbox_inches='tight', dpi=300)
plt.show()
