"""Loader for recorded state vector datasets (local JSON file or HTTP)."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from flightloop.config import settings
from flightloop.models.state_vector import Dataset, StateVector

logger = logging.getLogger("flightloop.ingestors.dataset")


class DatasetError(RuntimeError):
    """Base class for dataset problems that prevent the replay from starting."""


class LoadError(DatasetError):
    """The data source is unreachable, returned an error, or is not valid JSON."""


class EmptyDatasetError(DatasetError):
    """The data source loaded fine but contains no usable state vectors."""


class MalformedRecordError(ValueError):
    """A single record lacks the fields required to place it in time and space."""


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def parse_state_vector(entry: Any) -> StateVector:
    """Validate one raw record from the ``states`` array.

    Raises :class:`MalformedRecordError` when ``time``, ``icao24`` or the
    coordinates are missing or of the wrong type.
    """

    if not isinstance(entry, dict):
        raise MalformedRecordError(f"expected an object, got {type(entry).__name__}")

    try:
        state = StateVector.model_validate(entry)
    except ValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
        raise MalformedRecordError(
            f"invalid fields: {', '.join(fields) or 'unknown'}"
        ) from exc

    if not state.icao24.strip():
        raise MalformedRecordError("blank icao24")
    return state


def build_dataset(payload: Any) -> Dataset:
    """Turn a decoded ``{date, states}`` payload into a sorted :class:`Dataset`."""

    if not isinstance(payload, dict):
        raise LoadError("Dataset payload must be a JSON object")

    raw_states = payload.get("states")
    if not isinstance(raw_states, list):
        raise LoadError("Dataset payload is missing a 'states' array")

    date = str(payload.get("date") or "")
    states: list[StateVector] = []
    skipped = 0
    for index, entry in enumerate(raw_states):
        try:
            states.append(parse_state_vector(entry))
        except MalformedRecordError as exc:
            skipped += 1
            logger.debug("Skipping malformed record %s: %s", index, exc)

    if skipped:
        logger.warning(
            "Skipped %s of %s malformed state vectors", skipped, len(raw_states)
        )

    if not states:
        raise EmptyDatasetError(f"No usable state vectors for {date or 'dataset'}")

    dataset = Dataset.from_states(date, states, skipped_records=skipped)
    logger.info("Loaded %s state vectors from %s", len(dataset), date or "dataset")
    return dataset


class DatasetLoader:
    """Fetch and validate a recorded day of state vectors."""

    def __init__(
        self,
        *,
        source: str | Path | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.source = str(source or settings.data_source)
        self.timeout = timeout or settings.load_timeout
        self.transport = transport

    async def load(self) -> Dataset:
        logger.info("Loading flight data from %s", self.source)
        payload = await self._fetch_payload()
        return build_dataset(payload)

    async def _fetch_payload(self) -> Any:
        if _is_url(self.source):
            return await self._fetch_remote()
        return await self._read_local()

    async def _fetch_remote(self) -> Any:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(self.source)
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.error("Dataset request timed out: %s", exc)
            raise LoadError("Dataset request timed out") from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Dataset source returned error: status=%s body=%s",
                exc.response.status_code,
                exc.response.text,
            )
            raise LoadError(
                f"Failed to load data file: HTTP {exc.response.status_code}"
            ) from exc
        except httpx.RequestError as exc:
            logger.error("Dataset request failed: %s", exc)
            raise LoadError("Dataset request failed") from exc

        try:
            return response.json()
        except ValueError as exc:
            logger.error("Failed to parse dataset JSON: %s", exc)
            raise LoadError("Dataset is not valid JSON") from exc

    async def _read_local(self) -> Any:
        path = Path(self.source)
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to read dataset file %s: %s", path, exc)
            raise LoadError(f"Failed to read data file: {path}") from exc

        try:
            return json.loads(text)
        except ValueError as exc:
            logger.error("Failed to parse dataset JSON from %s: %s", path, exc)
            raise LoadError("Dataset is not valid JSON") from exc


__all__ = [
    "DatasetError",
    "DatasetLoader",
    "EmptyDatasetError",
    "LoadError",
    "MalformedRecordError",
    "build_dataset",
    "parse_state_vector",
]
