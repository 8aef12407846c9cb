"""
GHIS CLI - browse the catalog and run simulations from the terminal
"""
import json

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from ghis.catalog import list_interventions, list_regions
from ghis.config import get_config
from ghis.simulation.engine import simulate as run_simulate
from ghis.simulation.models import InterventionSelection
from ghis.simulation.regional_comparison import compare_regional_baselines
from ghis.utils import GHISError, get_logger, setup_logging

console = Console()
logger = get_logger(__name__)


def _parse_selection(value: str) -> InterventionSelection:
    """Parse ``ID=INTENSITY`` (or bare ``ID`` for the default intensity 50)."""
    ident, sep, raw = value.partition("=")
    intensity = 50
    if sep:
        try:
            intensity = int(raw)
        except ValueError:
            raise click.BadParameter(f"intensity must be an integer: {value}") from None
    try:
        return InterventionSelection(id=ident.strip(), intensity=intensity)
    except ValidationError:
        raise click.BadParameter(f"expected ID=INTENSITY with intensity 0-100: {value}") from None


# ═══════════════════════════════════════════════════════════════════
# MAIN CLI GROUP
# ═══════════════════════════════════════════════════════════════════

@click.group()
@click.version_option(version='0.1.0')
@click.option('--log-level', default=None, help='Override configured log level')
def main(log_level):
    """
    GHIS - Global Health Impact Simulator

    Deterministic 5-year health and economic projections for policy
    interventions against a business-as-usual baseline.
    """
    config = get_config()
    setup_logging(log_level or config.log_level, config.log_file)


# ═══════════════════════════════════════════════════════════════════
# CATALOG COMMANDS
# ═══════════════════════════════════════════════════════════════════

@main.command()
def regions():
    """List catalog regions"""
    table = Table(title="Regions")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Population", justify="right")
    table.add_column("Mortality /1k", justify="right")
    table.add_column("GDP per capita", justify="right")
    table.add_column("Countries", justify="right")

    for region in list_regions():
        table.add_row(
            region.id,
            region.name,
            f"{region.population:,}",
            f"{region.baseline_mortality:g}",
            f"${region.baseline_gdp:,.0f}",
            str(len(region.countries)),
        )
    console.print(table)


@main.command()
def interventions():
    """List catalog interventions"""
    table = Table(title="Interventions")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Category", style="magenta")
    table.add_column("Description")

    for intervention in list_interventions():
        table.add_row(
            intervention.id,
            intervention.name,
            intervention.category.value,
            intervention.description,
        )
    console.print(table)


@main.command()
@click.option('--sort', 'sort_by', type=click.Choice(['mortality', 'gdp']), default='mortality')
@click.option('--include-global', is_flag=True, help='Include the global aggregate row')
def baselines(sort_by, include_global):
    """Compare regional baselines side by side"""
    table = Table(title="Regional Baselines (year 0)")
    table.add_column("Region", style="bold")
    table.add_column("Mortality /1k", justify="right")
    table.add_column("GDP per capita", justify="right")
    table.add_column("Life exp.", justify="right")
    table.add_column("Disease %", justify="right")
    table.add_column("Access %", justify="right")
    table.add_column("Econ index", justify="right")

    for row in compare_regional_baselines(sort_by=sort_by, include_global=include_global):
        table.add_row(
            row.name,
            f"{row.mortality:g}",
            f"${row.gdp_per_capita:,.0f}",
            f"{row.life_expectancy:.1f}",
            f"{row.disease_prevalence:.1f}",
            f"{row.healthcare_access:.1f}",
            f"{row.economic_index:.1f}",
        )
    console.print(table)


# ═══════════════════════════════════════════════════════════════════
# SIMULATION COMMANDS
# ═══════════════════════════════════════════════════════════════════

@main.command()
@click.argument('region')
@click.option('--intervention', '-i', 'raw_selections', multiple=True,
              help='ID=INTENSITY, repeatable (e.g. -i vax_expanded=80)')
@click.option('--strictness', type=click.Choice(['conservative', 'standard', 'aggressive']),
              default=None, help='Effect strictness (defaults to config)')
@click.option('--json', 'as_json', is_flag=True, help='Print the result payload as JSON')
@click.pass_context
def simulate(ctx, region, raw_selections, strictness, as_json):
    """Run a 5-year simulation for REGION (catalog id, name, or any place name)"""
    selections = [_parse_selection(s) for s in raw_selections]
    logger.debug("CLI simulate %s with %d selection(s)", region, len(selections))

    try:
        result = run_simulate(region, selections, strictness=strictness)
    except GHISError as e:
        console.print(f"\n[red]✗ Error: {e}[/red]")
        ctx.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_payload(), indent=2))
        return

    console.print(f"\n[bold blue]{result.region_name}[/bold blue]")
    if result.estimated_baseline is not None:
        console.print(f"[yellow]Estimated baseline:[/yellow] {result.estimated_baseline.description}")
    console.print(f"\n{result.summary}\n")

    table = Table(title="Projected vs Baseline")
    table.add_column("Year", justify="right", style="cyan")
    table.add_column("Mortality", justify="right")
    table.add_column("Life exp.", justify="right")
    table.add_column("Disease %", justify="right")
    table.add_column("Access %", justify="right")
    table.add_column("Econ index", justify="right")

    for row in result.yearly:
        table.add_row(
            str(row.year),
            f"{row.mortality_rate:.1f} / {row.mortality_baseline:.1f}",
            f"{row.life_expectancy:.1f} / {row.life_expectancy_baseline:.1f}",
            f"{row.disease_prevalence:.1f} / {row.disease_baseline:.1f}",
            f"{row.healthcare_access:.1f} / {row.healthcare_baseline:.1f}",
            f"{row.economic_index:.1f} / {row.economic_baseline:.1f}",
        )
    console.print(table)

    headline = Table(title="Impact")
    headline.add_column("Metric", style="cyan")
    headline.add_column("Value", style="magenta")
    headline.add_row("Impact score", f"{result.impact_score:.1f} / 100")
    headline.add_row("Lives saved", f"{result.lives_saved:,}")
    headline.add_row("Economic ROI", f"{result.economic_roi:.2f}x")
    for contribution in result.intervention_impact:
        headline.add_row(
            f"  {contribution.name} ({contribution.category.value})",
            f"{contribution.score:.1f}%",
        )
    console.print(headline)

    for insight in result.key_insights:
        console.print(f"  • {insight}")
    console.print()
    for rec in result.recommendations:
        console.print(f"  → {rec}")


if __name__ == '__main__':
    main()
