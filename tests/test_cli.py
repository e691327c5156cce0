"""
Tests for the shellplate command line interface.
"""

import json
import io
from unittest.mock import patch

import pytest
import yaml

from shellplate.cli.main import main
from shellplate.cli.commands.run import EXIT_CANCELLED, EXIT_SPAWN_FAILURE, exit_code_for


@pytest.fixture
def script_file(tmp_path):
    path = tmp_path / "create_user.sh"
    path.write_text('echo "user $(usuario) at $(empresa) ($(usuario))"\n')
    return path


class TestPlaceholdersCommand:
    """Test `shellplate placeholders`."""

    def test_lists_names_one_per_line(self, script_file, capsys):
        assert main(['placeholders', str(script_file)]) == 0
        assert capsys.readouterr().out == "usuario\nempresa\n"

    def test_json_output(self, script_file, capsys):
        assert main(['placeholders', str(script_file), '--json']) == 0
        assert json.loads(capsys.readouterr().out) == ["usuario", "empresa"]

    def test_missing_script(self, tmp_path):
        assert main(['placeholders', str(tmp_path / "missing.sh")]) == 1


class TestRenderCommand:
    """Test `shellplate render`."""

    def test_renders_with_vars(self, script_file, capsys):
        code = main(['render', str(script_file), '--var', 'usuario=jdoe', '--var', 'empresa=acme'])
        assert code == 0
        assert capsys.readouterr().out == 'echo "user jdoe at acme (jdoe)"\n'

    def test_partial_render_keeps_markers(self, script_file, capsys):
        assert main(['render', str(script_file), '--var', 'usuario=jdoe']) == 0
        assert capsys.readouterr().out == 'echo "user jdoe at $(empresa) (jdoe)"\n'

    def test_vars_file_overridden_by_var(self, script_file, tmp_path, capsys):
        vars_file = tmp_path / "vars.json"
        vars_file.write_text(json.dumps({"usuario": "file-user", "empresa": "file-co"}))

        code = main(['render', str(script_file), '--vars-file', str(vars_file), '--var', 'empresa=cli-co'])

        assert code == 0
        assert capsys.readouterr().out == 'echo "user file-user at cli-co (file-user)"\n'

    def test_value_may_contain_equals(self, tmp_path, capsys):
        script = tmp_path / "s.sh"
        script.write_text("$(filter)")
        assert main(['render', str(script), '--var', 'filter=a=b']) == 0
        assert capsys.readouterr().out == "a=b"

    def test_empty_name_binding(self, tmp_path, capsys):
        script = tmp_path / "s.sh"
        script.write_text("x$()y")
        assert main(['render', str(script), '--var', '=z']) == 0
        assert capsys.readouterr().out == "xzy"

    def test_invalid_var_format(self, script_file):
        assert main(['render', str(script_file), '--var', 'novalue']) == 2

    def test_vars_file_must_be_object(self, script_file, tmp_path):
        vars_file = tmp_path / "vars.json"
        vars_file.write_text("[1, 2]")
        assert main(['render', str(script_file), '--vars-file', str(vars_file)]) == 2


class TestRunCommand:
    """Test `shellplate run`."""

    def test_runs_rendered_script(self, script_file, capsys):
        code = main(['run', str(script_file), '--var', 'usuario=jdoe', '--var', 'empresa=acme'])
        assert code == 0
        assert capsys.readouterr().out == "user jdoe at acme (jdoe)\n\n"

    def test_json_result(self, tmp_path, capsys):
        script = tmp_path / "fail.sh"
        script.write_text("echo $(msg) >&2; exit 4")

        code = main(['run', str(script), '--var', 'msg=broken', '--json'])

        assert code == 4
        assert json.loads(capsys.readouterr().out) == {
            "output": "",
            "exitCode": 4,
            "success": False,
            "error": "broken\n",
        }

    def test_no_output_message(self, tmp_path, capsys):
        script = tmp_path / "quiet.sh"
        script.write_text("true")
        assert main(['run', str(script)]) == 0
        assert capsys.readouterr().out == "Command executed successfully (no output)\n"

    def test_dry_run_does_not_execute(self, tmp_path, capsys):
        marker = tmp_path / "marker"
        script = tmp_path / "touch.sh"
        script.write_text(f"touch {marker} $(x)")

        assert main(['run', str(script), '--var', 'x=y', '--dry-run']) == 0
        assert capsys.readouterr().out == f"touch {marker} y"
        assert not marker.exists()

    def test_spawn_failure_exit_code(self, script_file):
        code = main(['run', str(script_file), '--interpreter', '/nonexistent/pwsh -Command'])
        assert code == EXIT_SPAWN_FAILURE

    def test_cancel_after_exit_code(self, tmp_path, capsys):
        script = tmp_path / "slow.sh"
        script.write_text("sleep 30")

        code = main(['run', str(script), '--cancel-after', '0.2', '--json'])

        assert code == EXIT_CANCELLED
        assert json.loads(capsys.readouterr().out)["kind"] == "cancelled"

    def test_config_file_applied(self, tmp_path, capsys):
        config_file = tmp_path / "runner.yaml"
        with open(config_file, 'w') as f:
            yaml.dump({'interpreter': ['sh', '-c'], 'env': {'GREETING': 'hola'}}, f)
        script = tmp_path / "greet.sh"
        script.write_text('echo "$GREETING $(name)"')

        code = main(['run', str(script), '--config', str(config_file), '--var', 'name=ana'])

        assert code == 0
        assert capsys.readouterr().out == "hola ana\n\n"

    def test_invalid_config_exit_code(self, tmp_path, script_file):
        config_file = tmp_path / "runner.yaml"
        config_file.write_text("unknown_key: 1\n")
        assert main(['run', str(script_file), '--config', str(config_file)]) == 2

    def test_signal_exit_codes_mapped(self):
        assert exit_code_for(0) == 0
        assert exit_code_for(2) == 2
        assert exit_code_for(-9) == 137


class TestRequestCommand:
    """Test `shellplate request`."""

    def test_request_from_file(self, tmp_path, capsys):
        request_file = tmp_path / "request.json"
        request_file.write_text(json.dumps({
            'scriptContent': 'echo $(word)',
            'variables': [{'name': 'word', 'value': 'ok'}],
        }))

        assert main(['request', str(request_file)]) == 0
        assert json.loads(capsys.readouterr().out) == {"output": "ok\n", "exitCode": 0, "success": True}

    def test_request_from_stdin(self, capsys):
        body = json.dumps({'scriptContent': ''})
        with patch('sys.stdin', io.StringIO(body)):
            code = main(['request', '-'])

        assert code == 1
        assert json.loads(capsys.readouterr().out) == {"error": "Script content is required"}

    def test_unreadable_request(self, tmp_path):
        request_file = tmp_path / "request.json"
        request_file.write_text("{not json")
        assert main(['request', str(request_file)]) == 2


class TestParser:
    """Test top-level parser behaviour."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out
