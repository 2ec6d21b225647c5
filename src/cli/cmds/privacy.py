#!/usr/bin/env python3
"""
Privacy Admin CLI - Raw data anonymization commands.

Irreversibly anonymizes or unsets some of the stored raw log data. Only
"some" data: personal data may also be present in places that cannot be
detected automatically, such as page URLs or page titles, and those are
left untouched.
"""

import sys
import click

from cli.core.context import Context
from cli.core.logging_utils import setup_logging
from cli.core.utils import EXIT_CONNECTION_ERROR, parse_comma_list
from cli.privacy.commands import AnonymizeRawDataCommand, ListColumnsCommand
from privacy.period import default_date_range


pass_context = click.make_pass_decorator(Context, ensure=True)
CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])


def _parse_id_sites(click_ctx, param, value):
    """Turn '1,2,2' into [1, 2]; no option means all sites."""
    if value is None or value == '':
        return None

    id_sites = []
    for item in parse_comma_list(value):
        try:
            id_site = int(item)
        except ValueError:
            raise click.BadParameter(f"'{item}' is not a site id")
        if id_site < 1:
            raise click.BadParameter(f"site ids must be positive, got {id_site}")
        if id_site not in id_sites:
            id_sites.append(id_site)

    if not id_sites:
        raise click.BadParameter("no site ids given")
    return id_sites


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging and tracebacks')
@click.option('--log-file', type=click.Path(dir_okay=False), help='Also write log records to this file')
@pass_context
def cli(ctx: Context, verbose: bool, log_file: str):
    """Anonymize stored raw log data"""
    ctx.verbose = verbose
    setup_logging(log_file=log_file, verbose=verbose)

    # Initialize database connection
    try:
        from privacy.config import PrivacyConfig
        from privacy.session import create_privacy_engine
        ctx.config = PrivacyConfig()
        engine, SessionLocal = create_privacy_engine(ctx.config.connection_string)
        ctx.session = SessionLocal()
    except Exception as e:
        ctx.stderr_console.print(f"Error connecting to database: {e}", style="bold red", markup=False)
        sys.exit(EXIT_CONNECTION_ERROR)

    click.get_current_context().call_on_close(ctx.session.close)


@cli.command('anonymize-some-raw-data')
@click.option('--date', default=default_date_range, show_default='2008-01-01,<today>',
              help='Date or date range to anonymize log data for (UTC). Either a date like '
                   '"2015-01-03" or a range like "2015-01-05,2015-02-12". By default, all data '
                   'including today will be anonymized.')
@click.option('--unset-visit-columns', default='',
              help='Comma separated list of log_visit columns to unset. Each value for that '
                   'column will be set to its default value. This action cannot be undone.')
@click.option('--unset-link-visit-action-columns', default='',
              help='Comma separated list of log_link_visit_action columns to unset. Each value '
                   'for that column will be set to its default value. This action cannot be undone.')
@click.option('--anonymize-ip', is_flag=True,
              help='Anonymize the IP with a mask of at least 2 bytes. This action cannot be undone.')
@click.option('--anonymize-location', is_flag=True,
              help='Re-evaluate the location based on the anonymized IP. This action cannot be undone.')
@click.option('--idsites', callback=_parse_id_sites,
              help='Comma separated list of site ids to restrict to. By default, the data of all '
                   'sites will be anonymized or unset.')
@click.option('--no-interaction', '-n', is_flag=True,
              help='Do not ask for confirmation; every requested operation is applied.')
@pass_context
def anonymize_some_raw_data(ctx: Context, date, unset_visit_columns, unset_link_visit_action_columns,
                            anonymize_ip, anonymize_location, idsites, no_interaction):
    """Anonymize some of the stored raw data (logs)."""
    command = AnonymizeRawDataCommand(ctx)
    exit_code = command.execute(
        date,
        visit_columns=parse_comma_list(unset_visit_columns),
        action_columns=parse_comma_list(unset_link_visit_action_columns),
        id_sites=idsites,
        anonymize_ip=anonymize_ip,
        anonymize_location=anonymize_location,
        non_interactive=no_interaction
    )
    sys.exit(exit_code)


@cli.command('list-columns')
@pass_context
def list_columns(ctx: Context):
    """List the log table columns that can be unset."""
    command = ListColumnsCommand(ctx)
    sys.exit(command.execute())


if __name__ == '__main__':
    cli()
