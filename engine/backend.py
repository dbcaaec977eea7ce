"""
backend.py — Operation execution backends
===========================================
    await backend.perform_operation(info, operation, value) -> List[Step]

LocalBackend runs the step generator in-process.  HttpBackend asks a
remote visualizer for the same sequence over the JSON endpoint

    POST <base_url>/api/algorithm/operation
      {"type": "bst", "operation": "insert", "value": 42}
    → {"success": true,  "executionSteps": [...]}
    | {"success": false, "errorMessage": "..."}

Both raise GenerationFailure for rejected requests; a remote payload that
decodes but breaks the sequence rules raises StructuralViolation.
"""

import asyncio
import logging
import random
from typing import List, Optional

import requests

from algorithms import AlgoInfo, Operation
from algorithms.generator import generate, validate_sequence
from algorithms.step import Step
from engine.errors import GenerationFailure

logger = logging.getLogger(__name__)


class LocalBackend:
    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng

    async def perform_operation(self, info: AlgoInfo, operation: Operation, value: float) -> List[Step]:
        try:
            return generate(info, operation, value, rng=self._rng)
        except ValueError as e:
            raise GenerationFailure(str(e)) from e


class HttpBackend:
    """
    Attributes:
        base_url : Root of the remote visualizer, e.g. "http://localhost:5000".
        timeout  : Seconds before a request is abandoned.
    """

    ENDPOINT = "/api/algorithm/operation"

    def __init__(self, base_url: str, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def perform_operation(self, info: AlgoInfo, operation: Operation, value: float) -> List[Step]:
        return await asyncio.to_thread(self._request, info, operation, value)

    def _request(self, info: AlgoInfo, operation: Operation, value: float) -> List[Step]:
        url = self.base_url + self.ENDPOINT
        payload = {"type": info.key, "operation": operation.value, "value": value}
        try:
            response = requests.post(url, json=payload, timeout=self.timeout)
            body = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("backend request to %s failed: %s", url, e)
            raise GenerationFailure(f"backend unavailable: {e}") from e

        if not isinstance(body, dict):
            raise GenerationFailure("malformed backend response")
        if not body.get("success"):
            raise GenerationFailure(body.get("errorMessage") or f"backend returned HTTP {response.status_code}")

        try:
            steps = [Step.from_dict(d) for d in body.get("executionSteps", [])]
        except (KeyError, TypeError, ValueError) as e:
            raise GenerationFailure(f"malformed execution steps: {e}") from e

        validate_sequence(steps)
        return steps
