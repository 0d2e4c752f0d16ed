# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Runner submodule for one-shot switch operations from JSON.

Usage:
    python -m switch_kit.runner < input.json > output.json

Exports:
    Runner: Builds a client, performs one get/set, reports the outcome
    AdaptorFactory: Creates storage adaptors from configuration
    RunnerInput: Input schema read from stdin
    RunnerOutput: Output schema written to stdout
"""

from .factory import AdaptorConfigError, AdaptorFactory
from .runner import Runner
from .schema import AdaptorConfigSchema, RunnerInput, RunnerOutput, SwitchSchema

__all__ = [
    "AdaptorConfigError",
    "AdaptorConfigSchema",
    "AdaptorFactory",
    "Runner",
    "RunnerInput",
    "RunnerOutput",
    "SwitchSchema",
]
