"""
Command-line entry point for running postless from a source checkout.

    python run.py               # interactive session in the current directory
    python run.py -w ./demo info
"""

from postless.cli import cli


if __name__ == "__main__":
    cli()
