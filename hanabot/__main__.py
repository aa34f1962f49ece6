import argparse
import logging

from .game import HanabiGame


def main(args):
    logging.basicConfig(
        level=logging.DEBUG if args.verbose > 1 else logging.INFO if args.verbose else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )
    game = HanabiGame(args.players, args.seed, args.max_turns)
    score = game.play()
    print(game.get_observation(0))
    print(f"Final score: {score}/{game.config.max_score}")


def parse_args():
    parser = argparse.ArgumentParser(prog="hanabot", description="Run a self-play Hanabi game.")
    parser.add_argument("--players", type=int, default=2)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--max_turns", type=int, default=200)
    parser.add_argument("--verbose", type=int, default=1)
    return parser.parse_args()


if __name__ == "__main__":
    main(parse_args())
