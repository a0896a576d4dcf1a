"""Tests for the CLI module."""

import json

import pytest

from ai_kernel.cli import DEFAULT_REPLAY_PROMPT, create_parser, main


def write_replay(tmp_path, records):
    path = tmp_path / "replay.jsonl"
    path.write_text("\n".join(json.dumps(record) for record in records) + "\n")
    return str(path)


HELLO_EVENTS = [
    {"type": "message_chunk", "data": {"chunk": "Hello"}},
    {"type": "message_chunk", "data": {"chunk": " world"}},
]


@pytest.fixture
def quiet_config(clean_env, env_file):
    """Config file that keeps logging to warnings."""
    return env_file(LOG_LEVEL="WARNING", LOG_FORMAT="text")


class TestCreateParser:
    """Tests for argument parsing."""

    def test_replay_defaults(self):
        """replay defaults to text output and a fixed prompt."""
        args = create_parser().parse_args(["replay", "events.jsonl"])

        assert args.command == "replay"
        assert args.file == "events.jsonl"
        assert args.format == "text"
        assert args.prompt == DEFAULT_REPLAY_PROMPT

    def test_tool_schema_mime_types(self):
        """--mime-type can be repeated."""
        args = create_parser().parse_args(
            ["tool-schema", "--mime-type", "text/html", "--mime-type", "image/png"]
        )

        assert args.mime_types == ["text/html", "image/png"]

    def test_invalid_format_rejected(self):
        """Only text and json formats are accepted."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["replay", "events.jsonl", "--format", "xml"])


class TestMain:
    """Tests for main()."""

    def test_no_command_prints_help(self, capsys):
        """Without a command, help is printed and the exit code is 1."""
        assert main([]) == 1
        assert "usage: ai-kernel" in capsys.readouterr().out

    def test_configuration_error(self, clean_env, env_file, capsys):
        """Invalid configuration is reported before running a command."""
        config_path = env_file(AI_PROVIDER_ID="claude")

        assert main(["--config", config_path, "tool-schema"]) == 1
        assert "Configuration error:" in capsys.readouterr().err


class TestReplayCommand:
    """Tests for the replay command."""

    def test_replay_json(self, tmp_path, quiet_config, capsys):
        """JSON output lists the operations and the reply."""
        replay = write_replay(tmp_path, HELLO_EVENTS)

        exit_code = main(["--config", quiet_config, "replay", replay, "--format", "json"])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["reply"] == {"status": "ok", "execution_count": 1, "user_expressions": {}}
        assert [op["kind"] for op in output["operations"]] == [
            "display_data",
            "update_display_data",
        ]
        final = output["operations"][-1]["display"]
        assert final["data"]["text/markdown"] == "Hello world"
        assert final["transient"] == {"display_id": "response-0"}

    def test_replay_text(self, tmp_path, quiet_config, capsys):
        """Text output renders the final markdown."""
        replay = write_replay(tmp_path, HELLO_EVENTS)

        assert main(["--config", quiet_config, "replay", replay]) == 0
        assert "Hello world" in capsys.readouterr().out

    def test_replay_failure_exits_1(self, tmp_path, quiet_config, capsys):
        """A scripted failure yields an AIError reply and exit code 1."""
        replay = write_replay(tmp_path, [*HELLO_EVENTS, {"raise": "network down"}])

        exit_code = main(["--config", quiet_config, "replay", replay, "--format", "json"])

        assert exit_code == 1
        output = json.loads(capsys.readouterr().out)
        assert output["reply"]["ename"] == "AIError"
        assert output["reply"]["evalue"] == "network down"
        assert output["operations"][-1]["stream"] == {
            "name": "stderr",
            "text": "Error: network down\n",
        }

    def test_replay_text_failure_reports_error(self, tmp_path, quiet_config, capsys):
        """Text output names the error on stderr."""
        replay = write_replay(tmp_path, [{"raise": "network down"}])

        assert main(["--config", quiet_config, "replay", replay]) == 1
        assert "AIError: network down" in capsys.readouterr().err

    def test_replay_missing_file(self, tmp_path, quiet_config, capsys):
        """A missing replay file is an error."""
        missing = str(tmp_path / "missing.jsonl")

        assert main(["--config", quiet_config, "replay", missing]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_replay_invalid_event(self, tmp_path, quiet_config, capsys):
        """An invalid replay line is reported with its line number."""
        replay = write_replay(tmp_path, [{"type": "bogus", "data": {}}])

        assert main(["--config", quiet_config, "replay", replay]) == 1
        assert "Line 1: Unknown event type" in capsys.readouterr().err


class TestInfoCommand:
    """Tests for the info command."""

    def test_info_with_provider(self, clean_env, env_file, capsys):
        """info prints the kernel spec names and kernel info."""
        config_path = env_file(
            AI_PROVIDER_ID="claude",
            AI_PROVIDER_NAME="Anthropic",
            AI_MODEL="claude-sonnet-4-5",
            AI_API_KEY="sk-test",
            LOG_LEVEL="WARNING",
        )

        assert main(["--config", config_path, "info"]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output["kernel_name"] == "ai-claude"
        assert output["display_name"] == "AI: Anthropic (claude-sonnet-4-5)"
        assert output["configured"] is True
        assert output["kernel_info"]["banner"] == "AI Kernel - Anthropic (claude-sonnet-4-5)"

    def test_info_without_provider(self, quiet_config, capsys):
        """info requires a configured provider."""
        assert main(["--config", quiet_config, "info"]) == 1
        assert "No AI provider configured" in capsys.readouterr().err


class TestToolSchemaCommand:
    """Tests for the tool-schema command."""

    def test_tool_schema(self, quiet_config, capsys):
        """tool-schema prints the display_data declaration."""
        assert main(["--config", quiet_config, "tool-schema", "--mime-type", "text/html"]) == 0
        declaration = json.loads(capsys.readouterr().out)
        assert declaration["name"] == "display_data"
        assert "Available MIME types: text/html" in declaration["description"]
        assert "anyOf" in declaration["parameters"]
