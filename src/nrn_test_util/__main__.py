"""Entry point for running nrn_test_util as a module.

This allows the package to be executed as:
    python -m nrn_test_util
"""

from nrn_test_util.cli.main import cli

if __name__ == "__main__":
    cli()
