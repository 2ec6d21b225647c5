"""Privacy command classes."""

from typing import Callable, Iterable, List, Optional

from cli.core.base import BasePrivacyCommand
from cli.core.context import Context
from cli.core.utils import EXIT_SUCCESS
from cli.privacy.confirm import ConfirmationGate
from cli.privacy.display import (
    display_applied,
    display_done,
    display_no_op,
    display_period,
    display_skipped,
    display_started,
    display_unsettable_columns,
)
from cli.privacy.operations import (
    AnonymizationOperation,
    AnonymizationRequest,
    OperationOutcome,
)
from privacy.logs import LogLinkVisitAction, LogVisit
from privacy.period import Period, resolve_period


class AnonymizeRawDataCommand(BasePrivacyCommand):
    """Anonymize IPs/locations and unset columns of stored raw data."""

    def __init__(self, ctx: Context, anonymizer=None, ask: Optional[Callable[[str], str]] = None):
        super().__init__(ctx)
        self.anonymizer = anonymizer
        self.ask = ask

    def execute(self, date: str, visit_columns: Iterable[str] = (),
                action_columns: Iterable[str] = (), id_sites: Optional[Iterable[int]] = None,
                anonymize_ip: bool = False, anonymize_location: bool = False,
                non_interactive: bool = False) -> int:
        try:
            request = AnonymizationRequest(
                date=date,
                id_sites=frozenset(id_sites) if id_sites is not None else None,
                visit_columns=tuple(visit_columns),
                action_columns=tuple(action_columns),
                anonymize_ip=anonymize_ip,
                anonymize_location=anonymize_location,
                non_interactive=non_interactive,
            )
            self.run(request)
            return EXIT_SUCCESS
        except Exception as e:
            return self.handle_exception(e)

    def run(self, request: AnonymizationRequest) -> List[OperationOutcome]:
        """
        Resolve the period, then confirm and apply each operation in turn.

        Returns:
            Outcomes for the IP/location, log_visit column and
            log_link_visit_action column operations, in that order.

        Raises:
            InvalidPeriod: Before anything is prompted or modified
            Any error from the anonymizer, aborting the remaining operations
        """
        period = resolve_period(request.date)
        display_period(self.ctx, period)

        if self.anonymizer is None:
            self.anonymizer = self.get_anonymizer()

        gate = ConfirmationGate(self.console, non_interactive=request.non_interactive, ask=self.ask)

        outcomes = []
        for operation in self.build_operations(request, period):
            outcomes.append(self._process(operation, gate, period))

        display_done(self.ctx)
        return outcomes

    def build_operations(self, request: AnonymizationRequest, period: Period) -> List[AnonymizationOperation]:
        anonymizer = self.anonymizer
        id_sites = request.id_sites
        start, end = period.start, period.end
        visit_table = LogVisit.__tablename__
        action_table = LogLinkVisitAction.__tablename__

        return [
            AnonymizationOperation(
                name='visit_information',
                description='anonymize visit IP and/or location',
                requested=request.anonymize_ip or request.anonymize_location,
                apply=lambda: anonymizer.anonymize_visit_information(
                    id_sites, start, end, request.anonymize_ip, request.anonymize_location),
                start_message='Anonymizing visit IP and/or location. This may take a long time.',
                applied_message=f'Amount of {visit_table} rows that were anonymized: {{rows}}',
                skipped_message='SKIPPING anonymizing IP and/or location.',
                no_op_message='Neither IP nor Location will be anonymized.',
            ),
            AnonymizationOperation(
                name='visit_columns',
                description=f'unset the {visit_table} columns "{", ".join(request.visit_columns)}"',
                requested=bool(request.visit_columns),
                apply=lambda: anonymizer.unset_log_visit_table_columns(
                    id_sites, start, end, list(request.visit_columns)),
                start_message=f'Starting to unset {visit_table} columns. This may take a long time.',
                applied_message=f'Amount of {visit_table} rows that were updated: {{rows}}',
                skipped_message=f'SKIPPING unset {visit_table} columns.',
                no_op_message=f'No column in {visit_table} will be unset.',
            ),
            AnonymizationOperation(
                name='link_visit_action_columns',
                description=f'unset the {action_table} columns "{", ".join(request.action_columns)}"',
                requested=bool(request.action_columns),
                apply=lambda: anonymizer.unset_log_link_visit_action_columns(
                    id_sites, start, end, list(request.action_columns)),
                start_message=f'Starting to unset {action_table} columns. This may take a long time.',
                applied_message=f'Amount of {action_table} rows that were updated: {{rows}}',
                skipped_message=f'SKIPPING unset {action_table} columns.',
                no_op_message=f'No column in {action_table} will be unset.',
            ),
        ]

    def _process(self, operation: AnonymizationOperation, gate: ConfirmationGate,
                 period: Period) -> OperationOutcome:
        if not operation.requested:
            display_no_op(self.ctx, operation)
            return OperationOutcome.no_op(operation.name)

        decision = gate.confirm(operation.description, period.start_string, period.end_string)
        if not decision.is_approved:
            display_skipped(self.ctx, operation)
            return OperationOutcome.skipped(operation.name)

        display_started(self.ctx, operation)
        rows_affected = operation.apply()
        display_applied(self.ctx, operation, rows_affected)
        return OperationOutcome.applied(operation.name, rows_affected)


class ListColumnsCommand(BasePrivacyCommand):
    """List the columns of each log table that may be unset."""

    def execute(self) -> int:
        try:
            anonymizer = self.get_anonymizer()
            display_unsettable_columns(self.ctx, LogVisit.__tablename__,
                                       anonymizer.get_available_visit_columns_to_unset())
            display_unsettable_columns(self.ctx, LogLinkVisitAction.__tablename__,
                                       anonymizer.get_available_link_visit_action_columns_to_unset())
            return EXIT_SUCCESS
        except Exception as e:
            return self.handle_exception(e)
