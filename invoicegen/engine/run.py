from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from .. import config
from ..models import RenderLog, RenderStatus, get_session, init_db
from ..storage import artifact_path, clear_artifacts, record_artifacts
from .defaults import missing_required_inputs
from .document import ResolvedDocument
from .errors import InvalidInvoiceValue, InvalidLineItem, InvoiceEngineError, UnknownTemplate
from .records import InvoiceRecord
from .render import render
from .templates import get_template


logger = logging.getLogger(__name__)

Job = Tuple[str, InvoiceRecord, str]

FAIL_CODES = {
    InvalidLineItem: "INVALID_LINE_ITEM",
    InvalidInvoiceValue: "INVALID_INVOICE_VALUE",
    UnknownTemplate: "UNKNOWN_TEMPLATE",
}


def fail_code_for(exc: Exception) -> str:
    for error_type, code in FAIL_CODES.items():
        if isinstance(exc, error_type):
            return code
    if isinstance(exc, InvoiceEngineError):
        return "VALIDATION_FAILED"
    return "PIPELINE_ERROR"


def _write_error(slug: str, message: str) -> Path:
    error_path = artifact_path(slug, "error", base_dir=config.OUT_DIR)
    error_path.write_text(message, encoding="utf-8")
    return error_path


def process_invoice(
    slug: str,
    record: InvoiceRecord,
    template_id: str,
    today: Optional[date] = None,
    strict: bool = False,
) -> Tuple[ResolvedDocument, List[Tuple[str, Path]]]:
    """Render one record and write its document. Raises on any engine error."""
    if strict:
        get_template(template_id, strict=True)
        missing = missing_required_inputs(record)
        if missing:
            raise InvalidInvoiceValue(f"Missing required input: {', '.join(missing)}", field=missing[0])
    document = render(record, template_id, today=today)
    document_path = artifact_path(slug, "document", base_dir=config.OUT_DIR)
    document_path.write_text(document.to_json(), encoding="utf-8")
    return document, [("document", document_path)]


def run_batch(
    jobs: Iterable[Job],
    today: Optional[date] = None,
    strict: bool = False,
) -> Dict[str, List[str]]:
    init_db()
    results: Dict[str, List[str]] = {"READY": [], "FAILED": []}
    for slug, record, template_id in jobs:
        clear_artifacts(slug)
        document: Optional[ResolvedDocument] = None
        artifacts: List[Tuple[str, Path]] = []
        try:
            document, artifacts = process_invoice(slug, record, template_id, today=today, strict=strict)
        except InvoiceEngineError as exc:
            logger.warning("Render failed for %s: %s", slug, exc)
            fail_code, fail_detail = fail_code_for(exc), str(exc)
        except Exception as exc:
            logger.exception("Pipeline error for %s", slug)
            fail_code, fail_detail = fail_code_for(exc), str(exc) or type(exc).__name__

        log = RenderLog(
            slug=slug,
            template_id=document.template_id if document else get_template(template_id).key,
            requested_template=str(template_id or ""),
            invoice_number=record.invoice_number or "",
        )
        if document is not None:
            log.status = RenderStatus.READY
            log.tax_rate = float(document.table.tax_rate)
            log.total = format(document.table.totals.total, "f")
        else:
            log.status = RenderStatus.FAILED
            log.fail_code = fail_code
            log.fail_detail = fail_detail
            artifacts = [("error", _write_error(slug, fail_detail))]

        with get_session() as session:
            session.add(log)
            session.commit()
            session.refresh(log)
        record_artifacts(log, artifacts)
        results[log.status.value].append(slug)
    return results
