"""HTTP implementation of CreditBureauClient."""

import asyncio
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx
import structlog

from seap_gateway.core.config import resolve_bureau_token, settings
from seap_gateway.core.metrics import (
    record_bureau_attempt_failure,
    record_bureau_failure,
    record_bureau_retry,
    record_bureau_success,
    track_bureau_latency,
)
from seap_gateway.domain.entities import BureauSummary, DebtRecord
from seap_gateway.domain.exceptions import (
    BureauCancelledException,
    BureauException,
    BureauHTTPException,
    BureauMaxRetriesExceededException,
    BureauTimeoutException,
    BureauUnknownException,
)
from seap_gateway.domain.interfaces import CreditBureauClient

from .bureau_simulator import simulate_bureau_response

logger = structlog.get_logger(__name__)


class HttpCreditBureauClient(CreditBureauClient):
    """
    HTTP client for the credit bureau debtor registry.

    Queries debts with a per-attempt timeout, bounded retries and
    exponential backoff. Without a configured token it answers from the
    deterministic simulator instead.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_attempts: int | None = None,
        backoff_base: float | None = None,
        token_provider: Callable[[], Optional[str]] = resolve_bureau_token,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._base_url = (base_url or settings.bureau_api_url).rstrip("/")
        self._timeout = timeout or settings.bureau_api_timeout
        self._max_attempts = max_attempts or settings.bureau_max_attempts
        self._backoff_base = backoff_base or settings.bureau_backoff_base
        self._token_provider = token_provider
        self._transport = transport
        self._sleep = sleep

    async def query(
        self,
        tax_id: str,
        cancel: Optional[asyncio.Event] = None,
    ) -> BureauSummary:
        """
        Query the registry for a tax identifier.

        Waits backoff_base ** attempt seconds between attempts (2s, 4s with
        the defaults) and none after the last one.
        """
        log = logger.bind(tax_id=tax_id)
        token = self._token_provider()

        if not token:
            summary = simulate_bureau_response(tax_id)
            record_bureau_success("simulated")
            log.info(
                "bureau_simulated_response",
                total_entities=summary.total_entities,
                disqualified=summary.disqualified,
            )
            return summary

        last_error: BureauException | None = None

        for attempt in range(1, self._max_attempts + 1):
            if cancel is not None and cancel.is_set():
                raise self._cancelled(log, attempt)

            try:
                with track_bureau_latency():
                    payload = await self._race(self._fetch(tax_id, token), cancel)
                summary = self._parse_response(tax_id, payload)

                record_bureau_success("live")
                log.info(
                    "bureau_query_succeeded",
                    attempt=attempt,
                    total_entities=summary.total_entities,
                    disqualified=summary.disqualified,
                )
                return summary

            except BureauCancelledException:
                raise self._cancelled(log, attempt)
            except BureauException as e:
                last_error = e
            except httpx.TimeoutException:
                last_error = BureauTimeoutException(self._timeout)
            except Exception as e:
                last_error = BureauUnknownException(f"Unexpected error: {str(e)}")

            record_bureau_attempt_failure(self._error_type(last_error))
            log.warning(
                "bureau_attempt_failed",
                attempt=attempt,
                max_attempts=self._max_attempts,
                error=last_error.code,
                message=last_error.message,
            )

            # Exponential backoff
            if attempt < self._max_attempts:
                record_bureau_retry()
                delay = self._backoff_base ** attempt
                try:
                    await self._race(self._sleep(delay), cancel)
                except BureauCancelledException:
                    raise self._cancelled(log, attempt)

        record_bureau_failure("live")
        log.error("bureau_retries_exhausted", max_attempts=self._max_attempts)
        raise BureauMaxRetriesExceededException(self._max_attempts, last_error)

    async def _fetch(self, tax_id: str, token: str) -> Any:
        """Perform one GET attempt and return the decoded JSON body."""
        url = f"{self._base_url}/Deudas/{tax_id}"
        headers = {
            "Authorization": f"BEARER {token}",
            "Accept": "application/json",
            "User-Agent": settings.bureau_user_agent,
        }

        async with httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            response = await client.get(url, headers=headers)

            if not response.is_success:
                raise BureauHTTPException(
                    status_code=response.status_code,
                    body=response.text[:200],
                )

            return response.json()

    @staticmethod
    async def _race(awaitable: Awaitable[Any], cancel: Optional[asyncio.Event]) -> Any:
        """
        Await `awaitable` unless `cancel` is set first.

        Raises:
            BureauCancelledException: If the event fired before completion
        """
        if cancel is None:
            return await awaitable

        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(cancel.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter},
                return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            waiter.cancel()

        if task in done:
            return task.result()

        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        raise BureauCancelledException()

    def _parse_response(self, tax_id: str, data: Dict[str, Any]) -> BureauSummary:
        """Reduce the raw registry payload into a summary."""
        if not isinstance(data, dict):
            raise BureauUnknownException("Unexpected credit bureau payload")

        debts = [DebtRecord.from_payload(item) for item in data.get("deudas") or []]
        return BureauSummary.from_debts(
            tax_id=tax_id,
            debts=debts,
            observations=data.get("observaciones") or [],
        )

    @staticmethod
    def _cancelled(log, attempt: int) -> BureauCancelledException:
        record_bureau_attempt_failure("cancelled")
        record_bureau_failure("live")
        log.warning("bureau_query_cancelled", attempt=attempt)
        return BureauCancelledException()

    @staticmethod
    def _error_type(error: BureauException) -> str:
        """Map a classified error to a metrics label."""
        if isinstance(error, BureauTimeoutException):
            return "timeout"
        if isinstance(error, BureauHTTPException):
            return "http_error"
        return "unknown"
