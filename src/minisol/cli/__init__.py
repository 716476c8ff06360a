"""CLI package for MiniSol."""

from __future__ import annotations

import logging
from importlib import metadata

import typer

from minisol.core import MiniSolConfig
from minisol.solana import Cluster

from .branding import render_banner, themed_console
from .commands import register_builtin_commands
from .types import CLIState, RPCBackend

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Mini Solana CLI for blockchain interactions",
    no_args_is_help=False,
    pretty_exceptions_show_locals=False,
)

CLI_CONSOLE = themed_console()
ERROR_CONSOLE = themed_console(stderr=True)


def styled_echo(message: str = "", *, nl: bool = True) -> None:
    """Print using the MiniSol themed console."""
    CLI_CONSOLE.print(message, end="" if not nl else "\n", markup=False, soft_wrap=True)


def _configure_logging(verbose: bool) -> None:
    root_logger = logging.getLogger()
    if verbose:
        if not root_logger.handlers:
            logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
        root_logger.setLevel(logging.DEBUG)
    else:
        if root_logger.handlers:
            root_logger.setLevel(logging.WARNING)
        else:
            logging.basicConfig(level=logging.WARNING, format="%(message)s")


def build_rpc_client(config: MiniSolConfig) -> RPCBackend:
    """Create the RPC handle for this invocation; no network I/O happens here."""
    return config.rpc_client()


@app.callback()
def cli(
    ctx: typer.Context,
    cluster: Cluster = typer.Option(  # noqa: B008
        Cluster.DEVNET, "--cluster", "-c", case_sensitive=False, help="Cluster to talk to"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),  # noqa: B008
) -> None:
    """Mini Solana CLI for blockchain interactions."""
    _configure_logging(verbose)
    config = MiniSolConfig.for_cluster(cluster)

    render_banner(CLI_CONSOLE, cluster=config.cluster.value, url=config.rpc_url)
    logger.debug("Using %s at %s (timeout %.0fs)", config.cluster.value, config.rpc_url, config.timeout)
    ctx.obj = CLIState(
        config=config,
        rpc_client=build_rpc_client(config),
        console=CLI_CONSOLE,
        error_console=ERROR_CONSOLE,
    )


@app.command()
def version() -> None:
    """Show CLI version."""
    try:
        pkg_version = metadata.version("minisol")
    except metadata.PackageNotFoundError:
        pkg_version = "0.0.0"
    styled_echo(f"MiniSol CLI version {pkg_version}")


register_builtin_commands(app)


def main() -> None:
    """Poetry entrypoint."""
    app(prog_name="minisol")


__all__ = ["app", "build_rpc_client", "main"]
