"""Fiscal-year table CLI commands."""

import json

import click


@click.group("fiscal-year")
def fiscal_year():
    """Fiscal-year table commands.

    Tables are bundled with the package. Drop a <year>.yaml file into
    ~/.config/totalcomp/fiscal-years/ to override one or add a new year.
    """
    pass


@fiscal_year.command("list")
def fiscal_year_list():
    """List years with a fiscal-year table."""
    from totalcomp.sdk import available_years, find_fiscal_year_file

    years = available_years()
    if not years:
        click.echo("No fiscal-year tables found.")
        return

    for year in years:
        click.echo(f"  {year}  {find_fiscal_year_file(year)}")


@fiscal_year.command("show")
@click.option("--year", type=int, help="Fiscal year. Defaults to the most recent available.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def fiscal_year_show(year, as_json):
    """Show the values and tables of a fiscal year."""
    from totalcomp.sdk import ConfigError, load_fiscal_year

    try:
        config = load_fiscal_year(year)
    except ConfigError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps(config.model_dump(mode="json"), indent=2))
        return

    click.secho(f"Fiscal year {config.year}", bold=True)
    click.echo(f"  UMA daily/monthly/annual  {config.uma_daily:,.2f} / "
               f"{config.uma_monthly:,.2f} / {config.uma_annual:,.2f}")
    border = config.minimum_wage_border_daily
    click.echo(f"  Minimum wage (daily)      {config.minimum_wage_daily:,.2f}"
               + (f" (border {border:,.2f})" if border else ""))
    click.echo(f"  USD/MXN default rate      {config.usd_mxn_rate:.2f}")
    click.echo(f"  Days per month            {config.days_per_month}")

    click.echo("\n  ISR monthly table:")
    for b in config.isr_brackets:
        click.echo(f"    from {b.lower_bound:>12,.2f}  quota {b.fixed_quota:>12,.2f}  "
                   f"rate {b.marginal_rate:.2%}")

    click.echo("\n  Employment subsidy:")
    if not config.subsidy_table:
        click.echo("    (none)")
    for row in config.subsidy_table:
        click.echo(f"    [{row.lower_bound:,.2f}, {row.upper_bound:,.2f})  "
                   f"credit {row.credit_amount:,.2f}")

    click.echo("\n  Simplified regime (RESICO) bands:")
    for b in config.simplified_brackets:
        click.echo(f"    up to {b.upper_bound:>14,.2f}  rate {b.rate:.2%}")

    ss = config.social_security
    click.echo(f"\n  IMSS: integration factor {ss.integration_factor}, "
               f"cap {ss.cap_in_uma} UMA, Infonavit {ss.infonavit_employer_rate:.0%}")
