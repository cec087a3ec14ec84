"""API client for the Enterprise Search Content Source documents API."""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Union

import requests

from .config import Configuration, load_configuration
from .documents import normalize_documents
from .logging import get_logger
from .polling import DEFAULT_POLL_INTERVAL, DEFAULT_POLL_TIMEOUT, poll
from .request import Transport

Document = Mapping[Any, Any]


class Client:
    """Index, inspect and destroy Content Source documents.

    ``config`` defaults to :func:`load_configuration` (environment plus
    ``.env``). Keyword overrides take precedence over ``config`` for this
    instance only. ``clock`` and ``sleep`` drive the wait in
    :meth:`index_documents`.
    """

    def __init__(
        self,
        config: Optional[Configuration] = None,
        *,
        access_token: Optional[str] = None,
        endpoint: Optional[str] = None,
        open_timeout: Optional[float] = None,
        overall_timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        transport: Optional[Transport] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        base = config if config is not None else load_configuration()
        self.config = base.with_overrides(
            access_token=access_token,
            endpoint=endpoint,
            open_timeout=open_timeout,
            overall_timeout=overall_timeout,
        )
        self.transport = transport if transport is not None else Transport(self.config, session=session)
        self.log = get_logger("client")
        self._clock = clock
        self._sleep = sleep

    @property
    def access_token(self) -> Optional[str]:
        return self.config.access_token

    @property
    def open_timeout(self) -> float:
        return self.config.open_timeout

    @property
    def overall_timeout(self) -> float:
        return self.config.overall_timeout

    # ---------- receipts ----------
    def document_receipts(self, receipt_ids: Sequence[str]) -> List[Dict[str, Any]]:
        """Fetch the current Document Receipts for ``receipt_ids`` in one request."""
        return self.transport.get(
            "ent/document_receipts/bulk_show.json",
            {"ids": ",".join(str(i) for i in receipt_ids)},
        )

    # ---------- indexing ----------
    def index_documents(
        self,
        content_source_key: str,
        documents: Union[Document, Iterable[Document]],
        *,
        timeout: float = DEFAULT_POLL_TIMEOUT,
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> List[Dict[str, Any]]:
        """Index a batch of documents and wait until every receipt leaves ``pending``.

        Returns the processed receipts. Raises InvalidDocument before anything
        is sent if a document is missing required fields, and Timeout when the
        receipts are still pending after ``timeout`` seconds.
        """
        receipt_ids = self.async_index_documents(content_source_key, documents)

        def _all_processed() -> Union[List[Dict[str, Any]], bool]:
            receipts = self.document_receipts(receipt_ids)
            pending = sum(1 for r in receipts if r.get("status") == "pending")
            if pending:
                self.log.debug(f"{pending}/{len(receipts)} receipt(s) still pending")
                return False
            return receipts

        receipts = poll(
            _all_processed,
            timeout=timeout,
            interval=interval,
            clock=self._clock,
            sleep=self._sleep,
        )
        self.log.info(f"All {len(receipts)} receipt(s) for source {content_source_key} processed")
        return receipts

    def async_index_documents(
        self,
        content_source_key: str,
        documents: Union[Document, Iterable[Document]],
    ) -> List[str]:
        """Index a batch of documents and return their receipt IDs without waiting."""
        normalized = normalize_documents(documents)
        self.log.info(f"Submitting {len(normalized)} document(s) to source {content_source_key}")
        res = self._create_or_update_documents(content_source_key, normalized)
        return [r["id"] for r in res["document_receipts"]]

    def destroy_documents(
        self,
        content_source_key: str,
        document_ids: Union[str, Iterable[str]],
    ) -> List[Dict[str, Any]]:
        """Destroy documents by external ID; one result per ID, in input order."""
        if isinstance(document_ids, str):
            document_ids = [document_ids]
        ids = list(document_ids)
        self.log.info(f"Destroying {len(ids)} document(s) from source {content_source_key}")
        return self.transport.post(
            f"ent/sources/{content_source_key}/documents/bulk_destroy.json", ids
        )

    def _create_or_update_documents(
        self,
        content_source_key: str,
        documents: List[Dict[str, Any]],
    ) -> Dict[str, Any]:
        return self.transport.post(
            f"ent/sources/{content_source_key}/documents/bulk_create.json", documents
        )

    def close(self) -> None:
        self.transport.close()
