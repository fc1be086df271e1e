"""Package comparison CLI command."""

import json
from pathlib import Path

import click
import yaml


def load_request(path: Path) -> dict:
    """Read a YAML or JSON request file.

    A bare list of packages is accepted as shorthand for {"packages": [...]}.
    """
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise click.ClickException(f"Could not parse {path}: {e}")

    if isinstance(data, list):
        data = {"packages": data}
    if not isinstance(data, dict):
        raise click.ClickException(f"{path}: expected a mapping with a 'packages' list")
    return data


def _money(amount: float) -> str:
    return f"${amount:,.2f}"


def print_calculation(name: str, calc, is_best: bool = False) -> None:
    """Print one package's breakdown."""
    title = f"{name} ({calc.regime})"
    if is_best:
        click.secho(f"{title}  << best", fg="green", bold=True)
    else:
        click.secho(title, bold=True)

    click.echo(f"  Monthly gross        {_money(calc.monthly_gross):>16}")
    if calc.flat_tax_rate is not None:
        click.echo(f"  ISR ({calc.flat_tax_rate:.2%} flat)     {_money(calc.isr_monthly):>16}")
    else:
        click.echo(f"  ISR                  {_money(calc.isr_monthly):>16}")
        click.echo(f"  Employment subsidy   {_money(calc.subsidy_monthly):>16}")
        click.echo(f"  IMSS (worker)        {_money(calc.imss_worker_monthly):>16}")
    click.echo(f"  Net monthly          {_money(calc.net_monthly):>16}")

    if calc.benefits:
        click.echo("  Benefits:")
        for b in calc.benefits:
            click.echo(
                f"    {b.name:<22} {b.cadence:<8} gross {_money(b.gross):>14}  "
                f"isr {_money(b.isr):>12}  net {_money(b.net):>14}"
            )
    if calc.savings_fund_withheld_monthly:
        click.echo(
            f"  Savings fund withheld {_money(calc.savings_fund_withheld_monthly):>15}/month"
        )
    if calc.unpaid_rest_days:
        click.echo(
            f"  Unpaid rest days     {calc.unpaid_rest_days:>4} "
            f"(-{_money(calc.unpaid_rest_day_loss)}/year)"
        )

    click.echo(f"  Annual gross (base)  {_money(calc.annual_base_gross):>16}")
    click.echo(f"  Annual gross (total) {_money(calc.annual_total_gross):>16}")
    click.echo(f"  Annual net           {_money(calc.annual_net):>16}")
    click.echo(f"  Monthly adjusted     {_money(calc.monthly_adjusted):>16}")

    if calc.employer.imss_annual or calc.employer.infonavit_annual:
        click.echo(
            f"  Employer IMSS {_money(calc.employer.imss_annual)}/year, "
            f"Infonavit {_money(calc.employer.infonavit_annual)}/year"
        )

    if calc.equity:
        total = calc.equity.total_over_horizon
        click.echo(
            f"  Equity over {calc.equity.vesting_years} years: "
            f"{_money(total.low)} - {_money(total.high)}"
        )
    click.echo()


@click.command("compare")
@click.argument("request", type=click.Path(exists=True, dir_okay=False))
@click.option("--year", type=int, help="Fiscal year. Defaults to the most recent available.")
@click.option("--exchange-rate", type=float, help="Default USD/MXN rate for this run.")
@click.option("--workers", type=int, default=1, show_default=True, help="Compute packages in parallel.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def compare(request, year, exchange_rate, workers, as_json):
    """Compare compensation packages.

    REQUEST is a YAML or JSON file with a 'packages' list.

    \b
    Examples:
      totalcomp compare offers.yaml
      totalcomp compare offers.yaml --year 2025 --json
      totalcomp compare offers.json --exchange-rate 18.75
    """
    from totalcomp.sdk import TotalCompError, compare_request, load_fiscal_year, with_exchange_rate

    payload = load_request(Path(request))

    try:
        config = load_fiscal_year(year)
        if exchange_rate is not None:
            config = with_exchange_rate(config, exchange_rate)
        result = compare_request(payload, config=config, max_workers=workers)
    except TotalCompError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
        return

    meta = result.fiscal_year
    click.echo(
        f"Fiscal year {meta.year} (UMA monthly {_money(meta.uma_monthly)}, "
        f"USD/MXN {meta.usd_mxn_rate:.2f})\n"
    )
    for entry in result.results:
        print_calculation(entry.package_name, entry.calculation, entry.index == result.best.index)

    click.secho(
        f"Best package: {result.best.package_name} "
        f"({_money(result.best.calculation.monthly_adjusted)}/month adjusted)",
        fg="green",
    )
