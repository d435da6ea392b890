"""Decorator and top-level error handling for the resize command."""

import click
from datetime import datetime
from functools import wraps
from typing import Any, Callable, Dict, Optional, Type

from ebs_resize.core.processors.report_generator import CSVReportGenerator
from ebs_resize.core.constants import REPORT_TIMESTAMP_FORMAT
from ebs_resize.jobs.base import BaseJob
from ebs_resize.utils.config import ConfigManager
from ebs_resize.utils.exceptions import (
    CLIError,
    OperationCancelled,
    ResizeError,
    ValidationRules,
)
from ebs_resize.utils.logger import set_log_level, setup_logger

# Exit status for an operator interrupt, as a shell reports SIGINT
INTERRUPTED_EXIT_CODE = 130


def validate_selectors(
    instance_name: Optional[str], instance_id: Optional[str], volume_id: Optional[str]
) -> None:
    """Exactly one instance selector; IDs must be well formed.

    Raises:
        CLIError: If the selector combination or an ID format is invalid
    """
    if bool(instance_name) == bool(instance_id):
        raise CLIError("Provide exactly one of --instance-name or --instance-id")
    if instance_id and not ValidationRules.validate_instance_id(instance_id):
        raise CLIError(f"Invalid instance ID: {instance_id}")
    if volume_id and not ValidationRules.validate_volume_id(volume_id):
        raise CLIError(f"Invalid volume ID: {volume_id}")


def handle_operation_error(operation_name: str, error: Exception) -> None:
    """Centralized error handling for operations.

    Args:
        operation_name: Name of the operation that failed
        error: Exception that occurred
    """
    resource_id = getattr(error, "resource_id", None)
    resource = f" [{resource_id}]" if resource_id else ""
    error_msg = f"Error in {operation_name}{resource}: {str(error)}"
    click.echo(error_msg, err=True)

    logger = setup_logger("ebs_resize.errors", "errors.log")
    logger.error(
        error_msg,
        extra={"operation": operation_name, "error_type": type(error).__name__},
    )


def report_resources(resources: Dict[str, str]) -> None:
    """Tell the operator which remote resources exist after an early stop."""
    created = {role: rid for role, rid in resources.items() if role != "old_volume"}
    if not created:
        return
    click.echo("Resources left in place (no automatic cleanup):", err=True)
    for role, resource_id in resources.items():
        click.echo(f"  {role}: {resource_id}", err=True)


def handle_output(result, output_path: Optional[str] = None, report_dir: str = "results") -> None:
    """Echo the run summary and optionally write it as a CSV report."""
    logger = setup_logger("ebs_resize.output", "operations.log")

    if result.status == "dry_run":
        click.echo(
            f"[DRY RUN] Would replace {result.old_volume_id} ({result.old_size} GiB) at "
            f"{result.device} on {result.instance_name} ({result.instance_id}) with a "
            f"{result.new_size} GiB volume"
        )
    else:
        click.echo(
            f"Resized {result.instance_name} ({result.instance_id}): {result.device} is now "
            f"{result.new_volume_id} ({result.new_size} GiB)"
        )
        click.echo(result.cleanup_message())

    logger.info(
        f"[{result.correlation_id or 'N/A'}] Operation completed: {result.status} "
        f"in {result.metrics.operation_duration:.2f}s"
    )

    if output_path:
        generator = CSVReportGenerator(report_dir)
        path = generator.generate_report([result.to_dict()], output_path)
        if path:
            click.echo(f"Results saved to {path}")


def resize_operation(job_class: Type[BaseJob]):
    """Run ``job_class`` behind a click command as the single top-level handler.

    Declined confirmations end the command cleanly; resize errors are
    reported and exit with status 1; an interrupt exits with status 130.
    The wrapped function runs first for per-command setup.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(ctx, **kwargs) -> Any:
            operation_name = func.__name__
            func(ctx, **kwargs)

            output = kwargs.pop("output", None)
            if kwargs.pop("generate_report", False) and not output:
                output = default_report_name()
            verbose = kwargs.pop("verbose", False)

            try:
                validate_selectors(
                    kwargs.get("instance_name"),
                    kwargs.get("instance_id"),
                    kwargs.get("volume_id"),
                )
            except CLIError as e:
                raise click.UsageError(str(e), ctx=ctx)

            config = ConfigManager(ctx.obj.get("config_dir"))
            job = job_class(
                config_manager=config,
                region=ctx.obj.get("region"),
                profile=ctx.obj.get("profile"),
                **ctx.obj.get("job_options", {}),
            )
            if verbose:
                set_log_level(job.logger, "DEBUG")

            try:
                result = job.execute(**kwargs)
            except OperationCancelled:
                click.echo("Operation cancelled by user.")
                report_resources(getattr(job, "resources", {}))
                return None
            except (ResizeError, CLIError) as e:
                handle_operation_error(operation_name, e)
                report_resources(getattr(job, "resources", {}))
                ctx.exit(1)
            except (KeyboardInterrupt, click.Abort):
                click.echo("\nInterrupted.", err=True)
                report_resources(getattr(job, "resources", {}))
                ctx.exit(INTERRUPTED_EXIT_CODE)

            handle_output(result, output, config.get_report_path())
            return result

        return wrapper

    return decorator


def default_report_name(prefix: str = "resize") -> str:
    """Report file name stamped with the current time."""
    return f"{prefix}_{datetime.now().strftime(REPORT_TIMESTAMP_FORMAT)}.csv"
