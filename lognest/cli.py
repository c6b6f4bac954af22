"""
Management commands for Lognest API.
"""

from pathlib import Path

import click
from alembic import command
from alembic.config import Config

from lognest.core.config import Settings
from lognest.core.logging import get_logger, setup_logging


logger = get_logger(__name__)

DEFAULT_ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def build_alembic_config(settings: Settings, ini_path: Path = DEFAULT_ALEMBIC_INI) -> Config:
    """Alembic config bound to ``settings`` instead of alembic.ini's URL."""
    alembic_cfg = Config(str(ini_path))
    alembic_cfg.set_main_option("script_location", str(ini_path.parent / "alembic"))
    alembic_cfg.attributes["settings"] = settings
    alembic_cfg.attributes["skip_logging"] = True
    return alembic_cfg


@click.group()
@click.pass_context
def cli(ctx: click.Context):
    """Lognest API management."""
    settings = Settings()
    setup_logging(settings)
    ctx.obj = settings


@cli.command()
@click.option("--fresh", is_flag=True, help="Drop every table before migrating")
@click.option(
    "--config",
    "ini_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=DEFAULT_ALEMBIC_INI,
    show_default=True,
    help="Path to alembic.ini",
)
@click.pass_obj
def migrate(settings: Settings, fresh: bool, ini_path: Path):
    """Apply database migrations up to the latest revision."""
    alembic_cfg = build_alembic_config(settings, ini_path)

    if fresh:
        logger.warning("migrate_fresh_dropping_schema")
        command.downgrade(alembic_cfg, "base")

    command.upgrade(alembic_cfg, "head")
    logger.info("migrate_completed", fresh=fresh)
    click.echo("Migrations applied")


@cli.command()
@click.option("--host", default=None, help="Bind address (defaults to API_HOST)")
@click.option("--port", type=int, default=None, help="Port (defaults to API_PORT)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
@click.pass_obj
def serve(settings: Settings, host: str | None, port: int | None, reload: bool):
    """Run the API server."""
    import uvicorn

    reload = reload or settings.api_reload
    uvicorn.run(
        "lognest.main:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        workers=1 if reload else settings.api_workers,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    cli()
