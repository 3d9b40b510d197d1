import argparse
import csv
import importlib
import logging
import os
from datetime import datetime

from hexgame.Colour import Colour
from hexgame.Game import DEFAULT_TURN_TIME, Game
from hexgame.Player import Player

STATS_FIELDS = ["game", "turn", "player", "colour", "x", "y", "depth", "nodes", "seconds"]


def create_agent(agent_spec: str, colour: Colour, depth: int):
    """
    Dynamically import and construct an agent from a spec string.

    agent_spec format:
        "module.path.ClassName ClassName"

    Example:
        "agents.PathMinimax.PathMinimaxIDAgent PathMinimaxIDAgent"
        "agents.PathMinimax.PathMinimaxAgent PathMinimaxAgent"

    Fixed-depth PathMinimaxAgent gets `depth`; every other agent is built
    with just its colour.
    """
    module_path, class_name = agent_spec.split()
    module = importlib.import_module(module_path)
    cls = getattr(module, class_name)

    if class_name == "PathMinimaxAgent":
        return cls(colour, depth=depth)
    return cls(colour)


def play_one_game(
    game_idx: int,
    log_dir: str,
    p1_spec: str,
    p1_name: str,
    p2_spec: str,
    p2_name: str,
    swap_colours: bool,
    board_size: int,
    turn_time: float,
    depth: int,
) -> tuple[str, list[dict]]:
    """
    Play a single game between two agents.

    Parameters
    ----------
    game_idx : int
        Index of the game (1-based) for logging.
    log_dir : str
        Directory where the per-game log file will be stored.
    p1_spec, p2_spec : str
        Agent spec strings: 'module.path.ClassName ClassName'.
    p1_name, p2_name : str
        Display names for player 1 and player 2.
    swap_colours : bool
        If False: p1 = RED, p2 = BLUE.
        If True:  p1 = BLUE, p2 = RED.
    board_size : int
        Hex board size.
    turn_time : float
        Seconds per turn before the agent is cancelled.
    depth : int
        Depth for fixed-depth agents.

    Returns
    -------
    (str, list[dict])
        Name of the winner and the per-move statistics of the game.
    """
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, f"game_{game_idx:03d}.log")

    if not swap_colours:
        p1_colour, p2_colour = Colour.RED, Colour.BLUE
    else:
        p1_colour, p2_colour = Colour.BLUE, Colour.RED

    player1 = Player(name=p1_name, agent=create_agent(p1_spec, p1_colour, depth))
    player2 = Player(name=p2_name, agent=create_agent(p2_spec, p2_colour, depth))

    with open(log_path, "w") as log_file:
        print(f"[LOG] Starting game {game_idx} log at {log_path}", file=log_file)
        print(
            f"[LOG] Player1={p1_name}({p1_colour.name}), "
            f"Player2={p2_name}({p2_colour.name})",
            file=log_file,
        )

        g = Game(
            player1=player1,
            player2=player2,
            board_size=board_size,
            turn_time_seconds=turn_time,
            silent=True,
            logDest=log_file,
            verbose=False,
        )
        result = g.run()

    records = [{"game": game_idx, **record} for record in g.move_records]
    return result["winner"], records


def write_stats(path: str, records: list[dict]) -> None:
    with open(path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=STATS_FIELDS)
        writer.writeheader()
        writer.writerows(records)


def parse_args():
    parser = argparse.ArgumentParser(description="Batch play Hex games between two agents.")

    parser.add_argument(
        "-p1", "--player1",
        type=str,
        default="agents.PathMinimax.PathMinimaxIDAgent PathMinimaxIDAgent",
        help="Player 1 agent spec: 'module.path.ClassName ClassName'.",
    )
    parser.add_argument("-p1Name", "--player1Name", type=str, default="P1",
                        help="Player 1 display name (used in logs and results).")
    parser.add_argument(
        "-p2", "--player2",
        type=str,
        default="agents.PathMinimax.PathMinimaxAgent PathMinimaxAgent",
        help="Player 2 agent spec: 'module.path.ClassName ClassName'.",
    )
    parser.add_argument("-p2Name", "--player2Name", type=str, default="P2",
                        help="Player 2 display name (used in logs and results).")
    parser.add_argument("-n", "--num_games", type=int, default=10,
                        help="Number of games to run in the batch.")
    parser.add_argument("--no-alt-colours", action="store_true",
                        help="Disable colour alternation between games.")
    parser.add_argument("-b", "--board_size", type=int, default=7,
                        help="Hex board size (default: 7).")
    parser.add_argument("-t", "--turn_time", type=float, default=DEFAULT_TURN_TIME,
                        help=f"Seconds per turn (default: {DEFAULT_TURN_TIME}).")
    parser.add_argument("-d", "--depth", type=int, default=2,
                        help="Depth for fixed-depth agents (default: 2).")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level for agent diagnostics.")

    return parser.parse_args()


def main():
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.num_games < 1:
        raise SystemExit("num_games must be at least 1")

    timestamp = datetime.now().strftime("%Y_%m_%d_%H_%M_%S")
    log_dir = f"logs_batch_{timestamp}"

    p1_name = args.player1Name
    p2_name = args.player2Name
    alt_colours = not args.no_alt_colours

    print(
        f"Running {args.num_games} games:\n"
        f"  P1: {p1_name} = {args.player1}\n"
        f"  P2: {p2_name} = {args.player2}\n"
        f"  Alt colours: {alt_colours}\n"
        f"  Board size: {args.board_size}, turn time: {args.turn_time}s\n"
        f"  Logs in: {log_dir}\n"
    )

    p1_wins = 0
    p2_wins = 0
    all_records: list[dict] = []

    for game_idx in range(1, args.num_games + 1):
        swap_colours = alt_colours and game_idx % 2 == 0

        winner, records = play_one_game(
            game_idx=game_idx,
            log_dir=log_dir,
            p1_spec=args.player1,
            p1_name=p1_name,
            p2_spec=args.player2,
            p2_name=p2_name,
            swap_colours=swap_colours,
            board_size=args.board_size,
            turn_time=args.turn_time,
            depth=args.depth,
        )
        all_records.extend(records)

        if winner == p1_name:
            p1_wins += 1
        else:
            p2_wins += 1
        print(f"Game {game_idx:03d}: {winner} wins")

    stats_path = os.path.join(log_dir, "move_stats.csv")
    write_stats(stats_path, all_records)

    total = p1_wins + p2_wins
    print("\n====== BATCH EXPERIMENT SUMMARY ======")
    print(f"Total games:   {total}")
    print(f"{p1_name} wins: {p1_wins}")
    print(f"{p2_name} wins: {p2_wins}")
    print(f"{p1_name} win rate: {p1_wins / total:.3f}")
    print(f"{p2_name} win rate: {p2_wins / total:.3f}")
    print(f"Move statistics: {stats_path}")


if __name__ == "__main__":
    main()
