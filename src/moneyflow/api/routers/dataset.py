"""Dataset export and import endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import Response

from moneyflow.api.deps import (
    get_owner_id,
    get_snapshot_exporter,
    get_snapshot_importer,
    require_confirmation,
)
from moneyflow.api.schemas import ImportSummaryResponse
from moneyflow.core.timezone import today_utc
from moneyflow.transfer import SnapshotExporter, SnapshotImporter

router = APIRouter(prefix="/dataset", tags=["dataset"])


@router.get("/export")
def export_dataset(
    owner_id: str = Depends(get_owner_id),
    exporter: SnapshotExporter = Depends(get_snapshot_exporter),
) -> Response:
    """Download the caller's whole ledger as a JSON snapshot."""
    filename = f"moneyflow-backup-{today_utc().isoformat()}.json"
    return Response(
        content=exporter.export_json(owner_id),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/validate")
def validate_dataset(
    payload: Any = Body(...),
    importer: SnapshotImporter = Depends(get_snapshot_importer),
) -> dict[str, Any]:
    """Check a snapshot without importing it."""
    check = importer.validate(payload)
    return {"valid": check.is_valid, "errors": check.errors}


@router.post(
    "/import",
    response_model=ImportSummaryResponse,
    dependencies=[Depends(require_confirmation)],
)
def import_dataset(
    payload: Any = Body(...),
    owner_id: str = Depends(get_owner_id),
    importer: SnapshotImporter = Depends(get_snapshot_importer),
) -> ImportSummaryResponse:
    """Replace the caller's ledger with the uploaded snapshot."""
    return ImportSummaryResponse.model_validate(importer.import_snapshot(owner_id, payload))
