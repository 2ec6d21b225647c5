"""
Unit tests for the operator confirmation gate.
"""

import io
import pytest
from unittest.mock import MagicMock

from rich.console import Console

from cli.privacy.confirm import ConfirmationGate, Decision, ScriptedAnswers


START = '2015-01-05 00:00:00'
END = '2015-02-12 23:59:59'


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200)


class TestNonInteractive:

    def test_approves_without_asking(self, console):
        ask = MagicMock()
        gate = ConfirmationGate(console, non_interactive=True, ask=ask)

        assert gate.confirm('anonymize visit IP and/or location', START, END) is Decision.APPROVED
        ask.assert_not_called()
        assert console.file.getvalue() == ''


class TestInteractive:

    def test_exact_token_approves(self, console):
        gate = ConfirmationGate(console, ask=ScriptedAnswers(['OK']))
        assert gate.confirm('unset the log_visit columns "location_ip"', START, END).is_approved

    @pytest.mark.parametrize('answer', ['', 'ok', 'Ok', 'OK ', ' OK', 'yes', 'NOPE', 'OKAY'])
    def test_anything_else_declines(self, console, answer):
        gate = ConfirmationGate(console, ask=ScriptedAnswers([answer]))
        assert gate.confirm('unset the log_visit columns "location_ip"', START, END) is Decision.DECLINED

    def test_end_of_input_declines(self, console):
        gate = ConfirmationGate(console, ask=ScriptedAnswers([]))
        assert gate.confirm('anonymize visit IP and/or location', START, END) is Decision.DECLINED

    def test_prompt_names_action_and_window(self, console):
        answers = ScriptedAnswers(['OK'])
        gate = ConfirmationGate(console, ask=answers)
        gate.confirm('unset the log_visit columns "location_ip, location_latitude"', START, END)

        prompt = answers.prompts[0]
        assert 'unset the log_visit columns "location_ip, location_latitude"' in prompt
        assert f'between "{START}" to "{END}"' in prompt
        assert 'This action cannot be undone' in prompt
        assert 'Type "OK" to confirm this section.' in prompt

    def test_calls_are_independent(self, console):
        """A decline has no bearing on the following prompt."""
        answers = ScriptedAnswers(['NOPE', 'OK', ''])
        gate = ConfirmationGate(console, ask=answers)

        decisions = [gate.confirm(f'action {i}', START, END) for i in range(3)]

        assert decisions == [Decision.DECLINED, Decision.APPROVED, Decision.DECLINED]
        assert len(answers.prompts) == 3

    def test_defaults_to_console_input(self):
        console = MagicMock()
        console.input.return_value = 'OK'
        gate = ConfirmationGate(console)

        assert gate.confirm('anonymize visit IP and/or location', START, END).is_approved
        console.input.assert_called_once()
