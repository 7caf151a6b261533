"""Click CLI with analyze and serve subcommands."""

import asyncio
import json
from dataclasses import asdict
from pathlib import Path

import click

from cycle_breaker import __version__
from cycle_breaker.application.use_cases.analyze_circular_dependencies import (
    AnalyzeCircularDependenciesUseCase,
    CycleAnalysis,
)
from cycle_breaker.domain.entities.break_plan import BreakStrategy
from cycle_breaker.domain.exceptions import GraphError
from cycle_breaker.domain.services.scc_detector import SccDetector
from cycle_breaker.infrastructure.api.dependencies import (
    get_analyze_circular_dependencies_use_case,
    get_apply_break_plans_use_case,
    get_validate_break_plans_use_case,
)
from cycle_breaker.infrastructure.api.routes.cycles import to_analysis_request
from cycle_breaker.infrastructure.api.schemas.cycle_analysis_schema import (
    CycleAnalysisApiRequest,
)
from cycle_breaker.infrastructure.config import get_settings
from cycle_breaker.infrastructure.observability.logging import configure_logging

# Exit code for unreadable or malformed graph input
EXIT_INVALID_GRAPH = 2

STRATEGY_ALIASES = {
    "auto": None,
    "lazy": BreakStrategy.LAZY_INJECTION,
    "interface": BreakStrategy.INTERFACE_EXTRACTION,
    "extract": BreakStrategy.METHOD_EXTRACTION,
    "manual": BreakStrategy.MANUAL,
}

_STRATEGY_COLORS = {
    BreakStrategy.LAZY_INJECTION.value: "green",
    BreakStrategy.INTERFACE_EXTRACTION.value: "cyan",
    BreakStrategy.METHOD_EXTRACTION.value: "yellow",
    BreakStrategy.MANUAL.value: "red",
}


def _fail(ctx: click.Context, message: str) -> None:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    ctx.exit(EXIT_INVALID_GRAPH)


def load_graph_request(graph_file: Path) -> CycleAnalysisApiRequest:
    """Read a graph file with `components` and `edges` arrays.

    Raises:
        ValueError: If the file is not valid JSON or does not match the schema
            (pydantic's ValidationError is a ValueError)
    """
    return CycleAnalysisApiRequest.model_validate_json(graph_file.read_text())


@click.group()
@click.version_option(version=__version__)
def cli():
    """cycle-breaker: Find circular dependencies and plan how to break them."""


@cli.command()
@click.argument(
    "graph_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    "--strategy",
    "-s",
    type=click.Choice(list(STRATEGY_ALIASES)),
    default="auto",
    show_default=True,
    help="Force one strategy for every cycle instead of the priority order",
)
@click.option(
    "--max-cycles",
    type=click.IntRange(min=1),
    default=None,
    help="Stop enumerating an SCC after this many cycles",
)
@click.option("--verbose", "-v", is_flag=True, help="List every cycle and debug logs")
@click.option("--short-names", is_flag=True, help="Show only the last dotted segment of ids")
@click.option("--json", "as_json", is_flag=True, help="Print the analysis as JSON")
@click.option(
    "--apply/--dry-run",
    default=False,
    show_default=True,
    help="Hand the plans to the registered transformers and check them",
)
@click.pass_context
def analyze(
    ctx: click.Context,
    graph_file: Path,
    strategy: str,
    max_cycles: int | None,
    verbose: bool,
    short_names: bool,
    as_json: bool,
    apply: bool,
):
    """Analyze GRAPH_FILE and print the break plans."""
    configure_logging(level="DEBUG" if verbose else "WARNING", json_format=False)

    try:
        api_request = load_graph_request(graph_file)
    except ValueError as e:
        _fail(ctx, f"{graph_file}: {e}")

    request = to_analysis_request(api_request)
    forced = STRATEGY_ALIASES[strategy]
    if forced is not None:
        request.forced_strategy = forced.value
    if max_cycles is not None:
        request.max_cycles = max_cycles

    detector = SccDetector()
    analyze_use_case = get_analyze_circular_dependencies_use_case(detector=detector)

    try:
        analysis = asyncio.run(analyze_use_case.analyze(request))
    except GraphError as e:
        _fail(ctx, f"invalid dependency graph: {e}")
    except ValueError as e:
        _fail(ctx, str(e))

    apply_response = asyncio.run(
        get_apply_break_plans_use_case().execute(analysis.plans, dry_run=not apply)
    )

    if as_json:
        payload = asdict(analyze_use_case.to_response(analysis))
        payload["fixes"] = asdict(apply_response)
        click.echo(json.dumps(payload, indent=2))
        return

    _print_analysis(analysis, analyze_use_case, verbose, short_names)
    if not analysis.plans:
        return

    click.echo(f"\nRecommended fixes ({len(apply_response.fixes)} total):")
    for fix in apply_response.fixes:
        target = fix.edge or " -> ".join(fix.cycle)
        click.echo(f"  - {target} -> {fix.description}")

    if not apply:
        click.echo("\nDry run mode - no changes made")
        return

    click.echo(
        f"\nApplied {apply_response.applied} fix(es), "
        f"{apply_response.failed} failed, {apply_response.manual} need manual review"
    )

    click.echo("\nValidating break plans...")
    validate_use_case = get_validate_break_plans_use_case(
        analyze_use_case=analyze_use_case, detector=detector
    )
    validation = validate_use_case.validate(analysis.graph, analysis.plans)
    if validation.all_automated_cycles_broken:
        click.echo(
            click.style(
                "Removing the planned edges breaks every automatable cycle",
                fg="green",
            )
        )
    else:
        click.echo(
            click.style(
                f"{len(validation.uncovered_sccs)} SCC(s) still contain cycles "
                "with the planned edges removed:",
                fg="yellow",
            )
        )
        for members in validation.uncovered_sccs:
            click.echo(f"   {{{', '.join(members)}}}")
        click.echo("   Consider manual review or using a different strategy.")


def _print_analysis(
    analysis: CycleAnalysis,
    use_case: AnalyzeCircularDependenciesUseCase,
    verbose: bool,
    short_names: bool,
) -> None:
    click.echo(
        f"Found {len(analysis.graph)} component(s), "
        f"{analysis.graph.edge_count} edge(s)"
    )
    if not analysis.enumerations:
        click.echo(click.style("\nNo circular dependencies detected!", fg="green"))
        return

    click.echo(
        click.style(
            f"\nFound {len(analysis.enumerations)} strongly connected "
            f"component(s) with cycles:",
            fg="yellow",
        )
    )
    for enumeration in analysis.enumerations:
        marker = " (truncated)" if enumeration.truncated else ""
        click.echo(
            f"   {{{', '.join(enumeration.scc.member_ids)}}}: "
            f"{len(enumeration.cycles)} cycle(s){marker}"
        )
    click.echo(f"   Total elementary cycles: {analysis.cycle_count}")

    if verbose:
        click.echo("\nCycle details:")
        number = 0
        for enumeration in analysis.enumerations:
            for cycle in enumeration.cycles:
                number += 1
                click.echo(f"  {number}. {cycle.format(short_names=short_names)}")

    click.echo(f"\nBreak plans ({len(analysis.plans)} total):")
    for plan in analysis.plans:
        strategy = click.style(
            plan.strategy.value, fg=_STRATEGY_COLORS[plan.strategy.value]
        )
        click.echo(f"  [{strategy}] {plan.cycle.format(short_names=short_names)}")
        click.echo(f"      {plan.rationale}")

    for warning in use_case.to_response(analysis).warnings:
        click.echo(click.style(f"Warning: {warning}", fg="yellow"), err=True)


@cli.command()
@click.option("--host", "-h", default=None, help="Bind address (default: API_HOST)")
@click.option("--port", "-p", type=int, default=None, help="Port (default: API_PORT)")
def serve(host: str | None, port: int | None):
    """Start the HTTP API."""
    import uvicorn

    api = get_settings().api
    host = host or api.host
    port = port or api.port

    click.echo(f"Starting cycle-breaker API at http://{host}:{port}")
    uvicorn.run(
        "cycle_breaker.infrastructure.api.main:app",
        host=host,
        port=port,
        workers=api.workers,
        log_level="info",
    )


if __name__ == "__main__":
    cli()
