#!/usr/bin/env python3
"""
EBS Resize - CLI
Grow an EC2 instance's EBS volume by snapshot, restore and swap
"""

import click

from ebs_resize import __version__
from ebs_resize.jobs.resize_volume import ResizeVolumeJob
from ebs_resize.utils.decorators import resize_operation
from ebs_resize.utils.logger import setup_logger


def setup_logging(verbose: bool = False):
    level = "DEBUG" if verbose else "INFO"
    return setup_logger("ebs_resize_cli", "cli.log", level)


@click.group()
@click.option("--region", default=None, help="AWS region (defaults to configuration)")
@click.option("--profile", default=None, help="AWS named profile")
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory holding settings.yaml",
)
@click.pass_context
def cli(ctx, region, profile, config_dir):
    """EBS Resize - grow an instance volume through snapshot and restore"""
    ctx.ensure_object(dict)

    ctx.obj["region"] = region
    ctx.obj["profile"] = profile
    ctx.obj["config_dir"] = config_dir


@cli.command()
@click.option("--instance-name", "-n", help="Name tag of the instance")
@click.option("--instance-id", "-i", help="ID of the instance")
@click.option(
    "--size",
    "-s",
    type=click.IntRange(min=1),
    required=True,
    help="New volume size in GiB, larger than the current size",
)
@click.option("--volume-id", "-v", help="Volume to grow (defaults to the root volume)")
@click.option("--force", is_flag=True, help="Skip confirmation prompts")
@click.option("--dry-run", is_flag=True, help="Resolve and check without changing anything")
@click.option("--verbose", is_flag=True, help="Enable verbose output")
@click.option("--output", type=click.Path(dir_okay=False), help="Write the run summary to this CSV file")
@click.option("--generate-report", is_flag=True, help="Write the run summary to the report directory")
@click.pass_context
@resize_operation(ResizeVolumeJob)
def resize_volume(
    ctx,
    instance_name,
    instance_id,
    size,
    volume_id,
    force,
    dry_run,
    verbose,
    output,
    generate_report,
):
    """Grow an instance's EBS volume

    Stops the instance, snapshots the volume, restores the snapshot into a
    larger volume in the same zone, swaps it in at the same device and starts
    the instance again. The snapshot and old volume are kept for review.
    """
    setup_logging(verbose)
    # All processing logic is handled by the decorator


@cli.command()
def version():
    """Show version information"""
    click.echo(f"EBS Resize {__version__}")
    click.echo("Grow EC2 instance volumes through snapshot and restore")


if __name__ == "__main__":
    cli()
