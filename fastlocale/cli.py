import logging

import click

from fastlocale import __version__
from fastlocale.commands.catalogs import catalogs

LOG_FORMAT = '%(levelname)s - %(name)s - %(message)s'


def log_level(verbose: int) -> int:
    """Map the -v count to a logging level: WARNING, -v INFO, -vv DEBUG"""
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


@click.group()
@click.option('--verbose', '-v', count=True, help='Show more logs (-v for INFO, -vv for DEBUG)')
@click.version_option(version=__version__, prog_name="fastlocale")
def fastlocale(verbose):
    """Locale resolution tooling for FastAPI applications."""

    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(log_level(verbose))


fastlocale.add_command(catalogs)


def main():
    fastlocale()


if __name__ == "__main__":
    main()
