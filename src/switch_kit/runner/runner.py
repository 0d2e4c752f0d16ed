# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Runner for reading or writing a single switch from a JSON request.

Orchestrates the full flow:
1. Create adaptor from configuration
2. Build and initialize a SwitchKit client
3. Perform the requested get/set
4. Return structured result
"""

from __future__ import annotations

from switch_kit.adaptors import StorageAdaptor
from switch_kit.client import SwitchKit
from switch_kit.exceptions import NotInitializedError

from .factory import AdaptorConfigError, AdaptorFactory
from .schema import RunnerInput, RunnerOutput, SwitchSchema


class Runner:
    """Runs one switch operation described by a :class:`RunnerInput`.

    Pass a custom adaptor to the constructor to override adaptor creation.

    Example:
        runner = Runner()
        output = await runner.run(input_data)
    """

    def __init__(self, adaptor: StorageAdaptor | None = None) -> None:
        self._injected_adaptor = adaptor

    async def run(self, input_data: RunnerInput) -> RunnerOutput:
        """Execute the operation.  Never raises; errors become output."""
        try:
            return await self._run_internal(input_data)
        except AdaptorConfigError as e:
            return RunnerOutput(success=False, error=str(e), error_type="AdaptorConfigError")
        except Exception as e:
            return RunnerOutput(success=False, error=str(e), error_type=type(e).__name__)

    async def _run_internal(self, input_data: RunnerInput) -> RunnerOutput:
        adaptor = self._injected_adaptor or AdaptorFactory.create(input_data.adaptor)
        owns_adaptor = self._injected_adaptor is None

        try:
            client = SwitchKit(adaptor)
            await client.init()
            if not client.initialized:
                return RunnerOutput(
                    success=False,
                    error=f"Unable to initialize '{input_data.adaptor.type}' adaptor",
                    error_type=NotInitializedError.__name__,
                )

            if input_data.operation == "set":
                return await self._set(client, input_data)
            return await self._get(client, input_data)
        finally:
            if owns_adaptor and hasattr(adaptor, "close"):
                await adaptor.close()

    async def _get(self, client: SwitchKit, input_data: RunnerInput) -> RunnerOutput:
        switch = await client.get(input_data.key)
        if switch is None:
            return RunnerOutput(
                success=False,
                error=f"Switch '{input_data.key}' not found",
                error_type="SwitchNotFound",
            )
        return RunnerOutput(success=True, switch=SwitchSchema(**switch.to_dict()))

    async def _set(self, client: SwitchKit, input_data: RunnerInput) -> RunnerOutput:
        if input_data.value is None:
            return RunnerOutput(
                success=False,
                error="'value' is required for the set operation",
                error_type="ValueError",
            )
        await client.set(input_data.key, input_data.value, input_data.metadata)
        # set() only caches after the adaptor confirmed the write
        if input_data.key not in client.cached_keys():
            return RunnerOutput(
                success=False,
                error=f"Unable to set switch '{input_data.key}'",
                error_type="SwitchWriteError",
            )
        switch = await client.get(input_data.key)
        return RunnerOutput(
            success=True,
            switch=SwitchSchema(**switch.to_dict()) if switch is not None else None,
        )
