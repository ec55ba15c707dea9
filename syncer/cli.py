"""
Syncer CLI

Command line tool for trying out the synchronizer on simulated operations
"""

import asyncio
import json
import random
import sys

import click
import yaml

from .config import (
    SyncerConfig,
    configure_logging,
    load_config_from_env,
    load_config_from_file,
    validate_config,
)
from .synchronizer import Synchronizer


def _load_config(config_path) -> SyncerConfig:
    if config_path:
        return load_config_from_file(config_path)
    return load_config_from_env()


def _dump(data, fmt: str) -> str:
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False, default=repr)
    return yaml.safe_dump(data, allow_unicode=True, sort_keys=False)


async def _operation(index: int, delay: float, fail: bool):
    await asyncio.sleep(delay)
    if fail:
        raise RuntimeError(f"operation {index} failed")
    return index


@click.group()
@click.version_option(version="0.1.0")
def cli():
    """Syncer - track in-flight asyncio operations"""
    pass


@cli.command()
@click.option("--count", "-n", type=click.IntRange(min=0), default=5, help="Number of operations")
@click.option(
    "--fail-rate",
    type=click.FloatRange(0.0, 1.0),
    default=0.2,
    help="Probability that an operation fails",
)
@click.option(
    "--max-delay",
    type=click.FloatRange(min=0.0),
    default=0.5,
    help="Upper bound of each operation's duration in seconds",
)
@click.option(
    "--interval",
    type=click.FloatRange(min=0.0),
    default=0.1,
    help="Seconds between pending snapshots",
)
@click.option("--seed", type=int, default=None, help="Random seed")
@click.option(
    "--format", "fmt",
    type=click.Choice(["json", "yaml"]),
    default="json",
    help="Output format",
)
@click.option("--config", "config_path", type=click.Path(exists=True), help="Config file")
def demo(count, fail_rate, max_delay, interval, seed, fmt, config_path):
    """Run simulated operations and report the pending set over time"""
    try:
        config = _load_config(config_path)
    except ValueError as e:
        click.echo(f"Config error: {e}", err=True)
        sys.exit(1)
    errors = validate_config(config)
    if errors:
        for error in errors:
            click.echo(f"Config error: {error}", err=True)
        sys.exit(1)
    configure_logging(config)
    rng = random.Random(seed)

    async def _run():
        syncer = Synchronizer(config)
        records = []
        for index in range(1, count + 1):
            delay = rng.uniform(0.0, max_delay)
            fail = rng.random() < fail_rate
            task = asyncio.ensure_future(_operation(index, delay, fail))
            syncer.sync(task)
            records.append(syncer.lookup(task))

        snapshots = [[record.id for record in syncer.pending()]]
        while len(syncer):
            await asyncio.sleep(interval)
            snapshots.append([record.id for record in syncer.pending()])
        await syncer.drain()

        return {
            "snapshots": snapshots,
            "records": [record.summary() for record in records],
            "stats": syncer.stats(),
        }

    result = asyncio.run(_run())
    click.echo(_dump(result, fmt))


@cli.command()
@click.option("--config", "config_path", type=click.Path(exists=True), help="Config file")
@click.option(
    "--format", "fmt",
    type=click.Choice(["json", "yaml"]),
    default="yaml",
    help="Output format",
)
def config(config_path, fmt):
    """Show the effective configuration"""
    try:
        cfg = _load_config(config_path)
    except ValueError as e:
        click.echo(f"Config error: {e}", err=True)
        sys.exit(1)

    click.echo(_dump(cfg.to_dict(), fmt))

    errors = validate_config(cfg)
    if errors:
        click.echo("Invalid configuration:", err=True)
        for error in errors:
            click.echo(f"  - {error}", err=True)
        sys.exit(1)


def main():
    cli()


if __name__ == "__main__":
    main()
