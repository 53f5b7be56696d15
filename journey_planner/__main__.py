"""Entry point: python -m journey_planner"""

from journey_planner.cli import cli

if __name__ == "__main__":
    cli()
