"""
Tests for the CLI.

CRITICAL TESTS:
1. test_convert_to_file - Records land in the output file
2. test_convert_unknown_call - Unknown calls fail unless skipped
3. test_config_validate - Validation exit codes
"""

import json

import pytest

from typer.testing import CliRunner

from dumpi_ascii import __version__
from dumpi_ascii.cli.main import app


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def events_file(write_events):
    """Three-call trace."""
    return write_events([
        json.dumps({'call': 'MPI_Init', 'params': {'argc': 1, 'argv': ['a.out']}}),
        json.dumps({'call': 'MPI_Keyval_create', 'params': {
            'copyfunc': '0x400a10', 'delfunc': '0x400b20', 'key': 12}}),
        json.dumps({'call': 'MPI_Finalize'}),
    ])


@pytest.fixture
def address_file(tmp_path):
    path = tmp_path / 'addresses.txt'
    path.write_text('0x400a10 copy_attr\n0x400b20 delete_attr\n')
    return path


class TestVersion:
    """Test version command."""

    def test_version(self, runner):
        result = runner.invoke(app, ['version'])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestConvert:
    """Test convert command."""

    def test_convert_to_file(self, runner, events_file, tmp_path):
        """One record per event in the output file."""
        output = tmp_path / 'trace.txt'
        result = runner.invoke(app, ['convert', str(events_file), '-o', str(output), '-q'])
        assert result.exit_code == 0

        lines = output.read_text().splitlines()
        assert len(lines) == 3
        assert lines[0].startswith('{"event":"MPI_Init",')
        assert '"argv": ["a.out"],' in lines[0]
        assert lines[2].startswith('{"event":"MPI_Finalize",')

    def test_convert_to_stdout(self, runner, events_file):
        result = runner.invoke(app, ['convert', str(events_file), '-q'])
        assert result.exit_code == 0
        assert '{"event":"MPI_Finalize",' in result.stdout

    def test_convert_with_addresses(self, runner, events_file, address_file, tmp_path):
        """Callback pointers are named from the address table."""
        output = tmp_path / 'trace.txt'
        result = runner.invoke(app, [
            'convert', str(events_file), '-o', str(output), '-a', str(address_file), '-q',
        ])
        assert result.exit_code == 0
        keyval = output.read_text().splitlines()[1]
        assert '"copyfunc": {"value":4196880, "label": "copy_attr"},' in keyval
        assert '"delfunc": {"value":4197152, "label": "delete_attr"},' in keyval

    def test_convert_without_addresses(self, runner, events_file, tmp_path):
        """Without a table callback labels are null."""
        output = tmp_path / 'trace.txt'
        runner.invoke(app, ['convert', str(events_file), '-o', str(output), '-q'])
        assert '"copyfunc": {"value":4196880, "label": null},' in output.read_text()

    def test_convert_summary(self, runner, events_file, tmp_path):
        """A summary table follows a non-quiet run."""
        output = tmp_path / 'trace.txt'
        result = runner.invoke(app, ['convert', str(events_file), '-o', str(output)])
        assert result.exit_code == 0
        assert 'Records' in result.output

    def test_convert_unknown_call(self, runner, write_events, tmp_path):
        """Unknown calls fail unless skipped."""
        events = write_events([
            '{"call": "MPI_Frobnicate"}',
            '{"call": "MPI_Finalize"}',
        ], name='unknown.jsonl')
        output = tmp_path / 'trace.txt'

        result = runner.invoke(app, ['convert', str(events), '-o', str(output), '-q'])
        assert result.exit_code == 1
        assert 'E1002' in result.output

        result = runner.invoke(app, ['convert', str(events), '-o', str(output), '-q', '--skip-unknown'])
        assert result.exit_code == 0
        assert len(output.read_text().splitlines()) == 1

    def test_convert_bad_address_table(self, runner, events_file, tmp_path):
        table = tmp_path / 'bad.txt'
        table.write_text('not-an-address\n')
        result = runner.invoke(app, ['convert', str(events_file), '-a', str(table), '-q'])
        assert result.exit_code == 1

    def test_convert_bad_array_value(self, runner, write_events, tmp_path):
        """Malformed parameters are reported as an error, not a traceback."""
        events = write_events([
            json.dumps({'call': 'MPI_Group_incl', 'params': {'count': 1, 'ranks': 5}}),
        ], name='bad.jsonl')
        result = runner.invoke(app, ['convert', str(events), '-o', str(tmp_path / 'trace.txt'), '-q'])
        assert result.exit_code == 1
        assert 'E1001' in result.output
        assert not isinstance(result.exception, TypeError)

    def test_convert_missing_config(self, runner, events_file, tmp_path):
        """An explicit config path must exist."""
        result = runner.invoke(app, ['convert', str(events_file), '-c', str(tmp_path / 'missing.yml'), '-q'])
        assert result.exit_code == 1
        assert 'Config not found' in result.output

    def test_convert_missing_input(self, runner, tmp_path):
        result = runner.invoke(app, ['convert', str(tmp_path / 'missing.jsonl')])
        assert result.exit_code != 0

    def test_convert_uses_config(self, runner, events_file, address_file, tmp_path):
        """Address table and symbol names can come from the config file."""
        config = tmp_path / 'config.yml'
        config.write_text(
            f'input:\n  address_table: {address_file}\n'
            'symbols:\n  keyval:\n    12: my_key\n'
        )
        output = tmp_path / 'trace.txt'
        result = runner.invoke(app, [
            'convert', str(events_file), '-o', str(output), '-c', str(config), '-q',
        ])
        assert result.exit_code == 0
        text = output.read_text()
        assert '"label": "copy_attr"' in text
        assert '"key": {"value":12, "label": "my_key"},' in text


class TestSymbols:
    """Test symbols command."""

    def test_list(self, runner):
        result = runner.invoke(app, ['symbols', 'comm'])
        assert result.exit_code == 0
        assert 'MPI_COMM_WORLD' in result.output

    def test_single_value(self, runner):
        result = runner.invoke(app, ['symbols', 'datatype', '--value', '9'])
        assert result.exit_code == 0
        assert '9\tMPI_INT' in result.output

    def test_flag_value(self, runner):
        result = runner.invoke(app, ['symbols', 'filemode', '--value', '9'])
        assert 'MPI_MODE_CREATE|MPI_MODE_RDWR' in result.output

    def test_unknown_category(self, runner):
        result = runner.invoke(app, ['symbols', 'bogus'])
        assert result.exit_code == 1

    def test_missing_config(self, runner, tmp_path):
        """An explicit config path must exist."""
        result = runner.invoke(app, ['symbols', 'comm', '-c', str(tmp_path / 'missing.yml')])
        assert result.exit_code == 1
        assert 'Config not found' in result.output

    def test_config_names(self, runner, tmp_path):
        config = tmp_path / 'config.yml'
        config.write_text('symbols:\n  comm:\n    7: solver_comm\n')
        result = runner.invoke(app, ['symbols', 'comm', '--value', '7', '-c', str(config)])
        assert result.exit_code == 0
        assert '7\tsolver_comm' in result.output


class TestConfigCommand:
    """Test config command."""

    def test_config_init(self, runner):
        result = runner.invoke(app, ['config', 'init'])
        assert result.exit_code == 0
        assert 'version: 1' in result.output

    def test_config_validate(self, runner, tmp_path):
        """Validation exit codes."""
        good = tmp_path / 'good.yml'
        good.write_text('version: 1\nlogging:\n  level: INFO\n')
        result = runner.invoke(app, ['config', 'validate', str(good)])
        assert result.exit_code == 0

        bad = tmp_path / 'bad.yml'
        bad.write_text('version: 3\n')
        result = runner.invoke(app, ['config', 'validate', str(bad)])
        assert result.exit_code == 1
        assert 'Unsupported config version' in result.output

    def test_config_validate_requires_path(self, runner):
        result = runner.invoke(app, ['config', 'validate'])
        assert result.exit_code == 1

    def test_config_dump(self, runner, tmp_path):
        path = tmp_path / 'c.yml'
        path.write_text('input:\n  skip_unknown: true\n')
        result = runner.invoke(app, ['config', 'dump', str(path)])
        assert result.exit_code == 0
        assert 'skip_unknown: true' in result.output

    def test_unknown_action(self, runner):
        result = runner.invoke(app, ['config', 'explode'])
        assert result.exit_code == 1
