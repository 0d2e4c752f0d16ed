"""Tests for the runner and its stdin/stdout entry point."""

import io
import json

from switch_kit import InMemoryAdaptor, Switch
from switch_kit.runner import Runner, RunnerInput
from switch_kit.runner.__main__ import main


def _seeded():
    return InMemoryAdaptor({"checkout-v2": Switch(value="on", metadata={"rollout": 25})})


class TestRunner:
    """Tests for Runner.run()."""

    async def test_get(self):
        runner = Runner(adaptor=_seeded())
        output = await runner.run(RunnerInput(operation="get", key="checkout-v2"))

        assert output.success
        assert output.switch.value == "on"
        assert output.switch.metadata == {"rollout": 25}

    async def test_get_missing(self):
        runner = Runner(adaptor=InMemoryAdaptor())
        output = await runner.run(RunnerInput(operation="get", key="missing"))

        assert not output.success
        assert output.error_type == "SwitchNotFound"

    async def test_set(self):
        adaptor = InMemoryAdaptor()
        runner = Runner(adaptor=adaptor)
        output = await runner.run(
            RunnerInput(operation="set", key="k", value="off", metadata={"owner": "ops"})
        )

        assert output.success
        assert output.switch.value == "off"
        assert (await adaptor.get("k")).value == Switch(value="off", metadata={"owner": "ops"})

    async def test_set_requires_value(self):
        runner = Runner(adaptor=InMemoryAdaptor())
        output = await runner.run(RunnerInput(operation="set", key="k"))

        assert not output.success
        assert output.error_type == "ValueError"

    async def test_set_failure(self, adaptor):
        adaptor.fail_set = True
        runner = Runner(adaptor=adaptor)
        output = await runner.run(RunnerInput(operation="set", key="k", value="on"))

        assert not output.success
        assert output.error_type == "SwitchWriteError"

    async def test_init_failure(self, adaptor):
        adaptor.fail_init = True
        runner = Runner(adaptor=adaptor)
        output = await runner.run(RunnerInput(operation="get", key="key"))

        assert not output.success
        assert output.error_type == "NotInitializedError"

    async def test_config_error(self):
        output = await Runner().run(
            RunnerInput.model_validate(
                {"adaptor": {"type": "nope"}, "operation": "get", "key": "k"}
            )
        )

        assert not output.success
        assert output.error_type == "AdaptorConfigError"

    async def test_sqlite_adaptor_from_config(self, tmp_path):
        path = str(tmp_path / "switches.db")
        adaptor_config = {"type": "sqlite", "namespace": "flags", "path": path}

        written = await Runner().run(
            RunnerInput.model_validate(
                {"adaptor": adaptor_config, "operation": "set", "key": "k", "value": "on"}
            )
        )
        read = await Runner().run(
            RunnerInput.model_validate({"adaptor": adaptor_config, "operation": "get", "key": "k"})
        )

        assert written.success
        assert read.success
        assert read.switch.value == "on"
        assert read.switch.metadata == {}


class TestMain:
    """Tests for the stdin/stdout entry point."""

    def test_main_success(self, monkeypatch, capsys):
        payload = {"operation": "set", "key": "k", "value": "on"}
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(payload)))

        assert main() == 0
        output = json.loads(capsys.readouterr().out)
        assert output["success"] is True
        assert output["switch"] == {"value": "on", "metadata": {}}

    def test_main_invalid_input(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("{not json"))

        assert main() == 1
        output = json.loads(capsys.readouterr().out)
        assert output["success"] is False
        assert output["error_type"] == "ValidationError"

    def test_main_miss(self, monkeypatch, capsys):
        payload = {"operation": "get", "key": "missing"}
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(payload)))

        assert main() == 1
        assert json.loads(capsys.readouterr().out)["error_type"] == "SwitchNotFound"
