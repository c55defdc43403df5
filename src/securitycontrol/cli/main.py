"""securitycontrol - Security Control Validation Engine.

Wires user commands to the control registry and the control test registry.
"""

from __future__ import annotations

from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..core.catalog import create_common_control_tests, create_common_controls
from ..core.config import get_effective_config, get_scoring_config, get_testing_config
from ..core.control_tests import ControlTestRegistry
from ..core.controls import ControlRegistry, get_exit_code
from ..formatters.junit import export_junit_results
from ..formatters.report import export_results_json, generate_control_report, generate_validation_report
from ..models.control import EffectivenessStatus

console = Console()

STATUS_COLORS = {
    EffectivenessStatus.EFFECTIVE: "green",
    EffectivenessStatus.PARTIALLY_EFFECTIVE: "yellow",
    EffectivenessStatus.INEFFECTIVE: "red",
}


def _config_error(ctx: click.Context, section: str, error: ValidationError) -> None:
    console.print(
        f"  [red]ERROR[/red] Invalid configuration: "
        f"{error.error_count()} problem(s) in '{section}'"
    )
    for item in error.errors():
        loc = ".".join(str(part) for part in item["loc"])
        console.print(f"    [dim]{section}.{escape(loc)}: {escape(item['msg'])}[/dim]")
    ctx.exit(11)


def _control_registry(ctx: click.Context) -> ControlRegistry:
    """Build a control registry seeded with the built-in controls."""
    try:
        scoring = get_scoring_config(ctx.obj)
    except ValidationError as e:
        _config_error(ctx, "scoring", e)
    registry = ControlRegistry(config=scoring)
    for control in create_common_controls():
        registry.add_control(control)
    return registry


def _test_registry(ctx: click.Context) -> ControlTestRegistry:
    try:
        testing = get_testing_config(ctx.obj)
    except ValidationError as e:
        _config_error(ctx, "testing", e)
    registry = ControlTestRegistry(config=testing)
    for test in create_common_control_tests():
        registry.add_control_test(test)
    return registry


@click.group()
@click.pass_context
@click.option(
    "--project", "-p",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Directory holding .securitycontrol/config.yaml",
)
def cli(ctx: click.Context, project: str) -> None:
    """securitycontrol - Security Control Validation Engine."""
    ctx.obj = get_effective_config(Path(project))


@cli.command()
@click.pass_context
@click.option("--ci", is_flag=True, help="CI mode: exit with the verdict code")
@click.option("--output-format", "-f", type=click.Choice(["text", "json"]), help="Output format")
def validate(ctx: click.Context, ci: bool, output_format: str | None) -> None:
    """Validate all security controls.

    Example: securitycontrol validate --ci
    """
    registry = _control_registry(ctx)
    output_format = output_format or ctx.obj["output"].get("format", "text")

    if output_format == "json":
        results = registry.validate_all()
        click.echo(export_results_json(results, []))
    else:
        console.print("[bold cyan]Security Control Validation[/bold cyan]")
        click.echo("==========================")
        click.echo()

        click.echo("Controls to Validate:")
        for i, control in enumerate(registry.get_controls(), start=1):
            click.echo(f"  [{i}] {control.name} ({control.category.value})")
        click.echo()

        click.echo("Running Validation...")
        click.echo()

        results = registry.validate_all()
        for result in results:
            color = STATUS_COLORS[result.status]
            console.print(f"[{color}]{escape('[' + result.status.value + ']')}[/{color}] {escape(result.control_name)}")
            click.echo(f"    Effectiveness: {result.effectiveness * 100:.1f}%")
            click.echo(f"    Confidence: {result.confidence * 100:.1f}%")
            if result.issues:
                click.echo(f"    Issues: {len(result.issues)}")
            click.echo()

        click.echo(generate_control_report(registry.get_validation_results()))

    if ci:
        exit_code = get_exit_code(results, ctx.obj["ci"]["exit_codes"])
        if output_format != "json":
            console.print(f"  CI Mode: Exiting with code {exit_code}")
        ctx.exit(exit_code)


@cli.command("test")
@click.pass_context
@click.argument("test_id")
def run_control_test(ctx: click.Context, test_id: str) -> None:
    """Test a specific control.

    Example: securitycontrol test test-001
    """
    registry = _test_registry(ctx)
    test = registry.get_test(test_id)
    if test is None:
        console.print(f"  [red]ERROR[/red] Control test not found: {escape(test_id)}")
        ctx.exit(1)
        return

    click.echo(f"Testing Control: {test_id}")
    click.echo()
    click.echo(f"Test: {test.name}")
    click.echo(f"Description: {test.description}")
    click.echo(f"Method: {test.method.value}")
    click.echo()

    result = registry.validate_test(test)
    click.echo(f"Result: {result.result.value}")
    click.echo(f"Effectiveness: {result.effectiveness * 100:.1f}%")
    click.echo(f"Risk Remaining: {result.risk_remaining * 100:.1f}%")

    if result.recommendations:
        click.echo()
        click.echo("Recommendations:")
        for rec in result.recommendations:
            click.echo(f"  - {rec}")


@cli.command()
@click.pass_context
def controls(ctx: click.Context) -> None:
    """List available controls."""
    registry = _control_registry(ctx)

    console.print("[bold cyan]Available Security Controls[/bold cyan]")
    click.echo("===========================")
    click.echo()
    click.echo("Controls by Category:")
    click.echo()

    for category, members in registry.group_by_category().items():
        click.echo(f"{category.value} Controls:")
        for i, control in enumerate(members, start=1):
            click.echo(f"  [{i}] {control.name} ({control.status.value})")
            click.echo(f"      Risk Reduction: {control.risk_reduction * 100:.1f}%")
            click.echo(f"      Owner: {control.owner}")
            click.echo()

    click.echo(f"Total Controls: {len(registry.get_controls())}")


@cli.command()
@click.pass_context
@click.option(
    "--output-format", "-f",
    type=click.Choice(["text", "json", "junit"]),
    help="Output format",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    default="securitycontrol-results.xml",
    show_default=True,
    help="JUnit output file",
)
def report(ctx: click.Context, output_format: str | None, output: str) -> None:
    """Generate the validation report for controls and control tests."""
    control_registry = _control_registry(ctx)
    test_registry = _test_registry(ctx)
    output_format = output_format or ctx.obj["output"].get("format", "text")

    control_results = control_registry.validate_all()
    test_results = test_registry.validate()

    if output_format == "json":
        click.echo(export_results_json(control_results, test_results))
        return

    if output_format == "junit":
        summary = export_junit_results(test_results, Path(output))
        console.print(
            f"  [green]OK[/green] JUnit: {summary['total_tests']} tests, "
            f"{summary['failures']} failures -> {escape(summary['path'])}"
        )
        return

    console.print("[bold cyan]Generate Validation Report[/bold cyan]")
    click.echo("=========================")
    click.echo()

    click.echo("=== Control Validation Report ===")
    click.echo(generate_control_report(control_results))

    click.echo("\n=== Test Validation Report ===")
    click.echo(generate_validation_report(test_results))


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Check control status."""
    registry = _control_registry(ctx)

    console.print("[bold cyan]Security Control Status[/bold cyan]")
    click.echo("=======================")
    click.echo()

    click.echo("Control Status Summary:")
    click.echo()
    for control_status, count in registry.status_counts().items():
        click.echo(f"{control_status.value}: {count}")
    click.echo()

    click.echo("Controls by Effectiveness:")
    click.echo()
    for result in registry.validate_all():
        click.echo(
            f"[{result.status.value}] {result.effectiveness * 100:.1f}% effective - "
            f"{result.control_name}"
        )


@cli.command()
def version() -> None:
    """Show version information."""
    click.echo(f"securitycontrol version {__version__}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
