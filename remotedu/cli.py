"""
CLI entry point for remotedu.
Reports the disk usage of paths on a remote directory server, like du(1).
"""
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import click

from .config import Config, DEFAULT_LOG_LEVEL, LOG_FORMAT, load_config
from .dir_client import DirClient, HTTPDirClient, glob_all
from .du import DiskUsage
from .errors import DuError, ListingError, MissingArgumentError, NoCredentialsError
from .models import DirEntry
from .render import render
from .utils.columns import align_columns


logger = logging.getLogger(__name__)

LOG_LEVELS = ['debug', 'info', 'warning', 'error', 'critical']


def setup_logging(log_level: str, log_file: Optional[Path] = None) -> None:
    """Configure logging with the specified level. Logs go to stderr, the report to stdout."""
    level = getattr(logging, log_level.upper(), logging.WARNING)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
    logger.debug(f"Logging initialized at level {log_level}")


def load_client_config(config_path: Optional[Path]) -> Config:
    """
    Load the config, accepting one without credentials.
    
    Raises:
        ConfigError: For anything other than missing credentials
    """
    try:
        return load_config(config_path)
    except NoCredentialsError as e:
        logger.info(f"{e}; continuing without credentials")
        return e.config


def report_error(error: Exception) -> None:
    logger.debug("Failure details", exc_info=error)
    click.echo(f"remotedu: {error}", err=True)


def run(
    client: DirClient,
    patterns: Sequence[str],
    human: bool = False,
    depth: int = -1,
    keep_going: bool = False,
) -> int:
    """
    Compute and print disk usage for every root matched by ``patterns``.
    
    Each root is traversed and printed before the next one starts.
    
    Args:
        client: Directory client
        patterns: Path patterns, in argument order
        human: Print human-scaled sizes
        depth: Directory depth limit; negative prints every entry
        keep_going: Report listing failures and continue with the next root
        
    Returns:
        Exit status: 0 on success, 1 if any root failed under ``keep_going``
        
    Raises:
        MissingArgumentError: No pattern was given
        DuError: Any failure when ``keep_going`` is off
    """
    if not patterns or not patterns[0]:
        raise MissingArgumentError("must supply a path")
    
    status = 0
    if keep_going:
        roots: List[DirEntry] = []
        for pattern in patterns:
            try:
                roots.extend(glob_all(client, [pattern]))
            except ListingError as e:
                report_error(e)
                status = 1
    else:
        roots = glob_all(client, patterns)
    
    engine = DiskUsage(client)
    for entry in roots:
        try:
            node = engine.build_root(entry)
        except ListingError as e:
            if not keep_going:
                raise
            report_error(e)
            status = 1
            continue
        
        for line in align_columns(render(node, engine.sizes, human, depth)):
            click.echo(line)
    
    return status


@click.command(context_settings={"help_option_names": ["--help"]})
@click.argument('paths', nargs=-1, metavar='PATH...')
@click.option('-h', '--human', is_flag=True, help='Print sizes in human readable format')
@click.option('-d', '--depth', type=int, default=-1, show_default=True,
              help='Depth to recur in directories (negative lists every entry)')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              help='Config file (default: ~/.remotedu/config.json)')
@click.option('--log-level', type=click.Choice(LOG_LEVELS), default=DEFAULT_LOG_LEVEL,
              show_default=True, help='Set the logging level')
@click.option('--log-file', type=click.Path(dir_okay=False, path_type=Path),
              help='Also write logs to this file')
@click.option('--keep-going', is_flag=True,
              help='Report a failing path and continue with the remaining ones')
def main(paths, human, depth, config_path, log_level, log_file, keep_going):
    """Tell the disk usage of remote directories you can access."""
    setup_logging(log_level, log_file)
    
    try:
        config = load_client_config(config_path)
        if not paths:
            raise MissingArgumentError("must supply a path")
        
        client = HTTPDirClient.from_config(config)
        try:
            status = run(client, paths, human=human, depth=depth, keep_going=keep_going)
        finally:
            client.close()
    
    except DuError as e:
        report_error(e)
        sys.exit(1)
    
    except Exception as e:
        logger.exception("Error in remotedu")
        click.echo(f"remotedu: {e}", err=True)
        sys.exit(1)
    
    sys.exit(status)


if __name__ == "__main__":
    main()
