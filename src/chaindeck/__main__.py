"""Allow ``python -m chaindeck``."""

from chaindeck.cli import cli

if __name__ == "__main__":
    cli()
