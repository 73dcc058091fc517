"""
Guest list API routes - requires authentication
"""

from typing import Optional
from fastapi import APIRouter, Depends, File, Query, Response, UploadFile
from sqlalchemy.orm import Session

from eventra.core.config import settings
from eventra.core.db import get_db
from eventra.core.errors import ValidationFailedError
from eventra.schemas.guest import GuestCreate, GuestResponse, GuestStatus, GuestUpdate
from eventra.services.access_service import AccessService
from eventra.services.excel_service import ExcelService
from eventra.services.guest_service import GuestService
from eventra.services.realtime_service import broadcaster
from eventra.utils.responses import error_response, serialize, serialize_many, success_response
from eventra.utils.security import AuthUser, get_current_user

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

@router.get("/guests/template")
async def download_template():
    """Download the guest list import template"""
    template_bytes = ExcelService.create_template()
    return Response(
        content=template_bytes,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": "attachment; filename=guest_list_template.xlsx"}
    )

@router.get("/events/{event_id}/guests")
async def list_guests(
    event_id: int,
    status: Optional[GuestStatus] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    event = AccessService.get_accessible_event(db, event_id, user)
    guests = GuestService.list_guests(db, event.id, status=status, search=search)
    return success_response(message="Guests retrieved", data=serialize_many(GuestResponse, guests))

@router.post("/events/{event_id}/guests")
async def create_guest(
    event_id: int,
    guest_data: GuestCreate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    event = AccessService.get_accessible_event(db, event_id, user)
    guest = GuestService.create_guest(db, event.id, guest_data)

    data = serialize(GuestResponse, guest)
    await broadcaster.guest_created(event.id, data)

    return success_response(message="Guest added successfully", data=data, status_code=201)

@router.get("/events/{event_id}/guests/stats")
async def get_guest_stats(
    event_id: int,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    """RSVP counts and response rate"""
    event = AccessService.get_accessible_event(db, event_id, user)
    return success_response(message="Guest statistics retrieved", data=GuestService.get_guest_stats(db, event.id))

@router.post("/events/{event_id}/guests/import")
async def import_guests(
    event_id: int,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    """Import guests from an Excel file; any invalid row rejects the whole file"""
    event = AccessService.get_accessible_event(db, event_id, user)

    if not file.filename or not file.filename.lower().endswith(ExcelService.ALLOWED_EXTENSIONS):
        raise ValidationFailedError("Invalid file format. Please upload an Excel file (.xlsx or .xls)")

    file_content = await file.read()
    if len(file_content) > settings.MAX_UPLOAD_SIZE:
        raise ValidationFailedError("File is too large")

    success, errors, imported_count = ExcelService.process_excel_upload(
        file_content=file_content,
        event_id=event.id,
        db=db,
        filename=file.filename
    )

    if not success:
        return error_response(
            message="Excel file validation failed",
            error_code="IMPORT_FAILED",
            details=errors,
            status_code=422
        )

    await broadcaster.guests_imported(event.id, imported_count)

    return success_response(
        message=f"Excel file processed successfully. {imported_count} guests imported.",
        data={"imported_count": imported_count}
    )

@router.get("/events/{event_id}/guests/export")
async def export_guests(
    event_id: int,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    event = AccessService.get_accessible_event(db, event_id, user)
    excel_bytes = ExcelService.export_current_data(event.id, db)
    return Response(
        content=excel_bytes,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename=event_{event.id}_guests.xlsx"}
    )

@router.get("/guests/{guest_id}")
async def get_guest(
    guest_id: int,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    guest, _ = GuestService.get_guest_for_user(db, guest_id, user)
    return success_response(message="Guest retrieved", data=serialize(GuestResponse, guest))

@router.put("/guests/{guest_id}")
async def update_guest(
    guest_id: int,
    guest_update: GuestUpdate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    guest, event = GuestService.get_guest_for_user(db, guest_id, user)
    guest = GuestService.update_guest(db, guest, guest_update)

    data = serialize(GuestResponse, guest)
    await broadcaster.guest_updated(event.id, data)

    return success_response(message="Guest updated successfully", data=data)

@router.delete("/guests/{guest_id}", status_code=204)
async def delete_guest(
    guest_id: int,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    guest, event = GuestService.get_guest_for_user(db, guest_id, user)
    GuestService.delete_guest(db, guest)
    await broadcaster.guest_deleted(event.id, guest_id)
    return Response(status_code=204)
