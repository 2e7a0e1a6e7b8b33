"""
Command-Line Interface for GoalPlan.

Purpose
-------
Runs the household goal projections on plan snapshot files without writing
Python code.

Commands
--------
- project: Derived values and required monthly payment of every goal
- schedule: Year-by-year stacked contributions against household income
- income: Expected total income until retirement per earner
- amortize: Monthly amortization table of a loan-repayment goal
- plan: Create, validate, export and summarize plan snapshot files

Example Usage
-------------
    # Start from the default household
    $ goalplan plan create plan.json --template default

    # Goal table with totals row
    $ goalplan project --config plan.json

    # Yearly cash flows, also written to CSV
    $ goalplan schedule --config plan.json --output schedule.csv

    # Show version
    $ goalplan --version
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import AppSettings
from .exceptions import GoalPlanError
from .log import setup_logging
from .schedule import goal_label
from .utils import finite_or_zero, format_amount

# Version
__version__ = "0.1.0"


def _load(path: Path):
    """Load a plan or exit with status 1."""
    from .serialization import load_plan

    try:
        return load_plan(path)
    except (GoalPlanError, OSError) as e:
        click.echo(f"Error loading plan: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="goalplan")
@click.option("--quiet", "-q", is_flag=True, help="Plain output instead of rich tables")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (default: GOALPLAN_LOG_LEVEL or WARNING)"
)
@click.pass_context
def main(ctx: click.Context, quiet: bool, log_level: Optional[str]) -> None:
    """
    GoalPlan - Household financial goal planner.

    Projects what each goal will cost, what the savings already set aside
    will be worth, and the monthly contribution that closes the gap.

    Use 'goalplan COMMAND --help' for command-specific help.
    """
    settings = AppSettings()
    setup_logging(log_level or settings.effective_log_level)

    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["console"] = Console()
    ctx.obj["symbol"] = settings.currency_symbol


@main.command()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Path to plan snapshot file (JSON)"
)
@click.option("--format", "-f", "fmt", type=click.Choice(["table", "json"]), default="table")
@click.pass_context
def project(ctx: click.Context, config: Path, fmt: str) -> None:
    """
    Project every goal of a plan.

    Shows future cost, future value of current savings, shortfall and the
    required monthly payment per goal. The totals row sums current savings
    and the payments of goals whose saving starts now.

    Example:
        goalplan project -c plan.json --format json
    """
    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)
    symbol = ctx.obj.get("symbol", "")

    plan = _load(config)
    derived = plan.derive()
    totals = plan.totals()

    if fmt == "json":
        payload = {
            "goals": [
                {
                    "id": d.id,
                    "name": d.name,
                    "category": d.goal.category.value,
                    "futureValueRequired": finite_or_zero(d.future_value_required),
                    "futureValueCurrent": finite_or_zero(d.future_value_current),
                    "shortfall": finite_or_zero(d.shortfall),
                    "holdingPeriod": d.holding_period,
                    "monthlyPayment": finite_or_zero(d.monthly_payment),
                }
                for d in derived
            ],
            "totals": {
                "currentSavings": finite_or_zero(totals.current_savings),
                "monthlyPayment": finite_or_zero(totals.monthly_payment),
            },
            "totalSavingsPrincipal": finite_or_zero(plan.total_savings_principal()),
        }
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    if console and not quiet:
        table = Table(title="Goal Projection", show_header=True)
        table.add_column("Goal", style="cyan")
        table.add_column("Year", justify="right")
        table.add_column("FV Required", justify="right")
        table.add_column("FV Savings", justify="right")
        table.add_column("Shortfall", justify="right")
        table.add_column("Hold", justify="right")
        table.add_column("Monthly", style="green", justify="right")

        for i, d in enumerate(derived):
            table.add_row(
                goal_label(d.name, i),
                f"{d.goal.timing:g}",
                format_amount(d.future_value_required, symbol=symbol),
                format_amount(d.future_value_current, symbol=symbol),
                format_amount(d.shortfall, symbol=symbol),
                f"{d.holding_period:g}",
                format_amount(d.monthly_payment, symbol=symbol),
            )
        table.add_section()
        table.add_row(
            "[bold]Total[/bold]", "", "",
            format_amount(totals.current_savings, symbol=symbol),
            "", "",
            format_amount(totals.monthly_payment, symbol=symbol),
        )
        console.print(table)
    else:
        for i, d in enumerate(derived):
            click.echo(
                f"{goal_label(d.name, i)}: "
                f"required={format_amount(d.future_value_required, symbol=symbol)} "
                f"savings={format_amount(d.future_value_current, symbol=symbol)} "
                f"shortfall={format_amount(d.shortfall, symbol=symbol)} "
                f"monthly={format_amount(d.monthly_payment, symbol=symbol)}"
            )
        click.echo(f"Total current savings: {format_amount(totals.current_savings, symbol=symbol)}")
        click.echo(f"Total monthly payment: {format_amount(totals.monthly_payment, symbol=symbol)}")


@main.command()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Path to plan snapshot file (JSON)"
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the schedule to this CSV file"
)
@click.pass_context
def schedule(ctx: click.Context, config: Path, output: Optional[Path]) -> None:
    """
    Year-by-year cash-flow schedule.

    For every year until the last goal, lists the total monthly payment due,
    the goals saving that year and the household's monthly income.

    Example:
        goalplan schedule -c plan.json -o schedule.csv
    """
    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)
    symbol = ctx.obj.get("symbol", "")

    plan = _load(config)
    cash_flows = plan.schedule()

    if console and not quiet:
        table = Table(title="Cash-Flow Schedule", show_header=True)
        table.add_column("Year", justify="right", style="cyan")
        table.add_column("Payment", justify="right")
        table.add_column("Income", justify="right", style="green")
        table.add_column("Goals")
        for year in cash_flows:
            names = ", ".join(
                f"[{c.color}]{escape(c.name)}[/]" for c in year.contributions.values()
            )
            table.add_row(
                str(year.year),
                format_amount(year.total_payment, symbol=symbol),
                format_amount(year.household_income, symbol=symbol),
                names,
            )
        console.print(table)
        console.print(
            f"Peak payment: {format_amount(cash_flows.max_payment, symbol=symbol)}  "
            f"Peak income: {format_amount(cash_flows.max_income, symbol=symbol)}"
        )
    else:
        for year in cash_flows:
            click.echo(
                f"{year.year}: payment={format_amount(year.total_payment, symbol=symbol)} "
                f"income={format_amount(year.household_income, symbol=symbol)}"
            )

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        cash_flows.to_dataframe().to_csv(output)
        if not quiet:
            click.echo(f"Schedule saved to {output}")


@main.command()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Path to plan snapshot file (JSON)"
)
@click.pass_context
def income(ctx: click.Context, config: Path) -> None:
    """
    Expected total income until retirement.

    Example:
        goalplan income -c plan.json
    """
    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)
    symbol = ctx.obj.get("symbol", "")

    plan = _load(config)
    totals = plan.expected_income()

    if console and not quiet:
        table = Table(title="Expected Income", show_header=True)
        table.add_column("Earner", style="cyan")
        table.add_column("Working Years", justify="right")
        table.add_column("Total Income", justify="right", style="green")
        for role, earner in plan.personal_info.earners.items():
            table.add_row(role, str(earner.working_years), format_amount(totals[role], symbol=symbol))
        console.print(table)
    else:
        for role, value in totals.items():
            click.echo(f"{role}: {format_amount(value, symbol=symbol)}")


@main.command()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Path to plan snapshot file (JSON)"
)
@click.option("--goal", "-g", "goal_id", type=int, required=True, help="Goal id")
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the amortization table to this CSV file"
)
@click.pass_context
def amortize(ctx: click.Context, config: Path, goal_id: int, output: Optional[Path]) -> None:
    """
    Amortization table of a loan-repayment goal.

    Example:
        goalplan amortize -c plan.json --goal 4
    """
    from .contribution import amortization_schedule
    from .goals import GoalBook, GoalCategory

    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)
    symbol = ctx.obj.get("symbol", "")

    plan = _load(config)
    try:
        goal = GoalBook(plan.goals).get(goal_id)
    except GoalPlanError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    if goal.category is not GoalCategory.LOAN_REPAYMENT:
        click.echo(f"Error: goal {goal_id} is not a loan-repayment goal", err=True)
        sys.exit(1)

    table_df = amortization_schedule(
        goal.required_funds, plan.assumptions.loan_interest_rate, goal.saving_period
    )

    if console and not quiet:
        payment = table_df["payment"].iloc[0] if len(table_df) else 0.0
        console.print(Panel(
            f"Principal: {format_amount(goal.required_funds, symbol=symbol)}\n"
            f"Rate: {plan.assumptions.loan_interest_rate:g}%\n"
            f"Months: {len(table_df)}\n"
            f"Monthly payment: {format_amount(payment, symbol=symbol, decimals=2)}\n"
            f"Total interest: {format_amount(table_df['interest'].sum(), symbol=symbol)}",
            title=goal.name or f"Goal {goal_id}",
        ))
    else:
        click.echo(f"months={len(table_df)} interest={format_amount(table_df['interest'].sum(), symbol=symbol)}")

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        table_df.to_csv(output)
        if not quiet:
            click.echo(f"Amortization table saved to {output}")


# ---------------------------------------------------------------------------
# Plan files
# ---------------------------------------------------------------------------

@main.group()
def plan() -> None:
    """
    Plan file management commands.

    Create, validate, export and summarize plan snapshot files.
    """
    pass


@plan.command("create")
@click.argument("output_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--template", "-t", type=click.Choice(["default", "empty"]), default="default")
@click.pass_context
def plan_create(ctx: click.Context, output_file: Path, template: str) -> None:
    """
    Create a new plan file from template.

    Example:
        goalplan plan create my_plan.json --template default
    """
    from .serialization import plan_template, save_plan

    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)

    save_plan(plan_template(template), output_file)

    if not quiet:
        if console:
            console.print(f"[green]Created plan file: {output_file}[/green]")
        else:
            click.echo(f"Created plan file: {output_file}")


@plan.command("validate")
@click.argument("plan_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def plan_validate(ctx: click.Context, plan_file: Path) -> None:
    """
    Validate a plan file.

    Checks that the file is valid JSON and conforms to the snapshot schema.

    Example:
        goalplan plan validate plan.json
    """
    from .serialization import load_plan

    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)

    try:
        loaded = load_plan(plan_file)
    except (GoalPlanError, OSError) as e:
        click.echo(f"Plan validation failed: {e}", err=True)
        sys.exit(1)

    if console and not quiet:
        client = loaded.personal_info.client
        spouse = loaded.personal_info.spouse
        info = (
            "[bold]Plan Valid[/bold]\n\n"
            f"[cyan]Client:[/cyan] age {client.age:g}, retires at {client.retirement_age:g}\n"
            f"[cyan]Spouse:[/cyan] age {spouse.age:g}, retires at {spouse.retirement_age:g}\n"
            f"[cyan]Goals ({len(loaded.goals)}):[/cyan]\n"
        )
        for g in loaded.goals:
            info += f"  - {g.name or g.id}: {g.category.value}, year {g.timing:g}\n"
        console.print(Panel(info, title="Plan Summary", border_style="green"))
    else:
        click.echo("Plan is valid")
        click.echo(f"Goals: {len(loaded.goals)}")


@plan.command("export")
@click.argument("plan_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Destination snapshot file (JSON)"
)
@click.pass_context
def plan_export(ctx: click.Context, plan_file: Path, output: Path) -> None:
    """
    Re-save a plan in the current snapshot format.

    Records goal categories explicitly and the recomputed total savings
    principal.

    Example:
        goalplan plan export old_plan.json -o plan.json
    """
    from .serialization import save_plan

    quiet = ctx.obj.get("quiet", False)
    symbol = ctx.obj.get("symbol", "")

    loaded = _load(plan_file)
    save_plan(loaded, output)

    if not quiet:
        click.echo(
            f"Exported plan to {output} "
            f"(total savings principal {format_amount(loaded.total_savings_principal(), symbol=symbol)})"
        )


@plan.command("totals")
@click.argument("plan_files", nargs=-1, type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def plan_totals(ctx: click.Context, plan_files: Tuple[Path, ...]) -> None:
    """
    Saved total savings principal of each plan file.

    Files that are missing or unreadable are listed as not saved.

    Example:
        goalplan plan totals plan_1.json plan_2.json plan_3.json
    """
    from .serialization import read_saved_total

    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)
    symbol = ctx.obj.get("symbol", "")

    rows = [(path, read_saved_total(path)) for path in plan_files]

    if console and not quiet:
        table = Table(title="Saved Plans", show_header=True)
        table.add_column("File", style="cyan")
        table.add_column("Savings Principal", justify="right")
        for path, total in rows:
            table.add_row(str(path), "not saved" if total is None else format_amount(total, symbol=symbol))
        console.print(table)
    else:
        for path, total in rows:
            click.echo(f"{path}: {'not saved' if total is None else format_amount(total, symbol=symbol)}")


if __name__ == "__main__":
    main()
