"""
Tests for guest endpoints and spreadsheet import/export
"""

import io

import pandas as pd

from eventra.services.excel_service import ExcelService

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

def make_workbook(rows, columns=("Name", "Email", "Status")):
    df = pd.DataFrame(rows, columns=list(columns))
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Guest List")
    return buffer.getvalue()

def test_duplicate_guest_email(client, auth_headers, create_event):
    event = create_event()
    headers = auth_headers()

    response = client.post(f"/api/events/{event['id']}/guests", json={"name": "Ana", "email": "Ana@Example.com"}, headers=headers)
    assert response.status_code == 201
    assert response.json()["data"]["status"] == "invited"

    response = client.post(f"/api/events/{event['id']}/guests", json={"name": "Ana", "email": "ana@example.com"}, headers=headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Guest with this email already exists for this event"

def test_same_email_on_another_event(client, auth_headers, create_event):
    first = create_event(name="First")
    second = create_event(name="Second")
    headers = auth_headers()

    client.post(f"/api/events/{first['id']}/guests", json={"name": "Ana", "email": "ana@example.com"}, headers=headers)
    response = client.post(f"/api/events/{second['id']}/guests", json={"name": "Ana", "email": "ana@example.com"}, headers=headers)

    assert response.status_code == 201

def test_invalid_email_rejected(client, auth_headers, create_event):
    event = create_event()

    response = client.post(f"/api/events/{event['id']}/guests", json={"name": "Ana", "email": "nope"}, headers=auth_headers())

    assert response.status_code == 422

def test_update_delete_and_stats(client, auth_headers, create_event):
    event = create_event()
    headers = auth_headers()
    guest = client.post(f"/api/events/{event['id']}/guests", json={"name": "Ana", "email": "ana@example.com"}, headers=headers).json()["data"]
    client.post(f"/api/events/{event['id']}/guests", json={"name": "Ben", "email": "ben@example.com"}, headers=headers)

    response = client.put(f"/api/guests/{guest['id']}", json={"status": "confirmed"}, headers=headers)
    assert response.json()["data"]["status"] == "confirmed"

    stats = client.get(f"/api/events/{event['id']}/guests/stats", headers=headers).json()["data"]
    assert stats == {"total": 2, "invited": 1, "confirmed": 1, "declined": 0, "response_rate": 50}

    assert client.delete(f"/api/guests/{guest['id']}", headers=headers).status_code == 204
    assert client.get(f"/api/guests/{guest['id']}", headers=headers).status_code == 404

def test_list_guests_with_filters(client, auth_headers, create_event):
    event = create_event()
    headers = auth_headers()
    client.post(f"/api/events/{event['id']}/guests", json={"name": "Ana Lima", "email": "ana@example.com", "status": "confirmed"}, headers=headers)
    client.post(f"/api/events/{event['id']}/guests", json={"name": "Ben", "email": "ben@example.com"}, headers=headers)

    confirmed = client.get(f"/api/events/{event['id']}/guests?status=confirmed", headers=headers).json()["data"]
    assert [g["name"] for g in confirmed] == ["Ana Lima"]

    found = client.get(f"/api/events/{event['id']}/guests?search=BEN", headers=headers).json()["data"]
    assert [g["email"] for g in found] == ["ben@example.com"]

def test_import_guests(client, auth_headers, create_event):
    event = create_event()
    workbook = make_workbook([
        ["Ana", "ana@example.com", "confirmed"],
        ["Ben", "ben@example.com", None],
    ])

    response = client.post(
        f"/api/events/{event['id']}/guests/import",
        files={"file": ("guests.xlsx", workbook, XLSX)},
        headers=auth_headers()
    )

    assert response.status_code == 200, response.text
    assert response.json()["data"]["imported_count"] == 2

    stats = client.get(f"/api/events/{event['id']}/guests/stats", headers=auth_headers()).json()["data"]
    assert stats["confirmed"] == 1
    assert stats["invited"] == 1

def test_import_rejects_whole_file_on_bad_rows(client, auth_headers, create_event):
    event = create_event()
    client.post(f"/api/events/{event['id']}/guests", json={"name": "Existing", "email": "old@example.com"}, headers=auth_headers())
    workbook = make_workbook([
        ["Ana", "ana@example.com", "invited"],
        ["Bad", "not-an-email", "invited"],
        ["Dup", "ANA@example.com", "invited"],
        ["Old", "old@example.com", "invited"],
        ["Weird", "weird@example.com", "maybe"],
        [None, "noname@example.com", "invited"],
    ])

    response = client.post(
        f"/api/events/{event['id']}/guests/import",
        files={"file": ("guests.xlsx", workbook, XLSX)},
        headers=auth_headers()
    )

    assert response.status_code == 422
    errors = response.json()["details"]
    assert any(e.startswith("Row 3:") and "invalid email" in e for e in errors)
    assert any(e.startswith("Row 4:") and "duplicate email" in e for e in errors)
    assert any(e.startswith("Row 5:") and "already exists" in e for e in errors)
    assert any(e.startswith("Row 6:") and "invalid status" in e for e in errors)
    assert any(e.startswith("Row 7:") and "name is required" in e for e in errors)

    stats = client.get(f"/api/events/{event['id']}/guests/stats", headers=auth_headers()).json()["data"]
    assert stats["total"] == 1

def test_import_missing_columns(client, auth_headers, create_event):
    event = create_event()
    workbook = make_workbook([["Ana"]], columns=("Name",))

    response = client.post(
        f"/api/events/{event['id']}/guests/import",
        files={"file": ("guests.xlsx", workbook, XLSX)},
        headers=auth_headers()
    )

    assert response.status_code == 422
    assert response.json()["details"] == ["Missing required columns: email"]

def test_import_rejects_other_file_types(client, auth_headers, create_event):
    event = create_event()

    response = client.post(
        f"/api/events/{event['id']}/guests/import",
        files={"file": ("guests.csv", b"Name,Email\n", "text/csv")},
        headers=auth_headers()
    )

    assert response.status_code == 400

def test_export_and_template(client, auth_headers, create_event):
    event = create_event()
    client.post(f"/api/events/{event['id']}/guests", json={"name": "Ana", "email": "ana@example.com"}, headers=auth_headers())

    response = client.get(f"/api/events/{event['id']}/guests/export", headers=auth_headers())
    assert response.status_code == 200
    exported = pd.read_excel(io.BytesIO(response.content))
    assert list(exported["Email"]) == ["ana@example.com"]

    response = client.get("/api/guests/template")
    assert response.status_code == 200
    template = pd.read_excel(io.BytesIO(response.content))
    assert list(template.columns) == ["Name", "Email", "Status"]

def test_reader_engine_by_extension():
    assert ExcelService.reader_engine("guests.xlsx") == "openpyxl"
    assert ExcelService.reader_engine("LEGACY.XLS") == "xlrd"
    assert ExcelService.reader_engine(None) is None

def test_xls_upload_is_read_with_xlrd(client, auth_headers, create_event):
    event = create_event()
    workbook = make_workbook([["Ana", "ana@example.com", "invited"]])

    # xlsx bytes under a legacy name: xlrd is installed and refuses the format itself
    response = client.post(
        f"/api/events/{event['id']}/guests/import",
        files={"file": ("guests.xls", workbook, "application/vnd.ms-excel")},
        headers=auth_headers()
    )

    assert response.status_code == 422
    errors = response.json()["details"]
    assert errors[0].startswith("Could not read Excel file")
    assert "Missing optional dependency" not in errors[0]
