from __future__ import annotations

import typer

from .base import configure_logging
from .commands.dataset import app as dataset_app
from .commands.features import app as features_app

configure_logging()
app = typer.Typer(
    help="Bird-call MFCC feature extraction CLI",
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(features_app, name="features")
app.add_typer(dataset_app, name="dataset")


def main() -> None:
    """Main entry point for package CLI.

    Invokes the Typer application, which handles command parsing and
    execution.
    """
    app()


if __name__ == "__main__":
    main()
