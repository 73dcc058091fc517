"""
Excel processing service for guest list import/export
"""

import io
from typing import Dict, List, Optional, Tuple

import pandas as pd
from email_validator import EmailNotValidError, validate_email
from sqlalchemy.orm import Session

from eventra.models import Guest
from eventra.services.guest_service import GuestService

GUEST_STATUSES = ("invited", "confirmed", "declined")

class ExcelService:
    """Service for handling Excel operations"""

    REQUIRED_COLUMNS = ['name', 'email']
    OPTIONAL_COLUMNS = ['status']
    ALLOWED_EXTENSIONS = ('.xlsx', '.xls')
    # pandas reader engine per extension; legacy .xls needs xlrd
    READER_ENGINES = {'.xlsx': 'openpyxl', '.xls': 'xlrd'}

    @staticmethod
    def create_template() -> bytes:
        """Create Excel template with the guest list columns"""
        df = pd.DataFrame(columns=['Name', 'Email', 'Status'])

        # Sample rows for guidance
        sample_data = [
            ['Sample Guest 1', 'guest1@example.com', 'invited'],
            ['Sample Guest 2', 'guest2@example.com', 'confirmed'],
        ]

        for row in sample_data:
            df.loc[len(df)] = row

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name='Guest List')

        return buffer.getvalue()

    @staticmethod
    def map_columns(df: pd.DataFrame) -> Dict[str, str]:
        """Map normalized column names to the sheet's own headers"""
        column_mapping = {}
        for col in df.columns:
            col_lower = str(col).lower().strip()
            if col_lower in ExcelService.REQUIRED_COLUMNS + ExcelService.OPTIONAL_COLUMNS:
                column_mapping[col_lower] = col
        return column_mapping

    @staticmethod
    def validate_excel_structure(df: pd.DataFrame) -> Tuple[bool, List[str]]:
        """Validate Excel file structure"""
        errors = []

        column_mapping = ExcelService.map_columns(df)
        missing_columns = [col for col in ExcelService.REQUIRED_COLUMNS if col not in column_mapping]

        if missing_columns:
            errors.append(f"Missing required columns: {', '.join(missing_columns)}")
        elif df.empty:
            errors.append("The file contains no guest rows")

        return len(errors) == 0, errors

    @staticmethod
    def _cell(row: pd.Series, column: Optional[str]) -> str:
        if column is None or pd.isna(row[column]):
            return ''
        return str(row[column]).strip()

    @staticmethod
    def extract_rows(df: pd.DataFrame, db: Session, event_id: int) -> Tuple[List[Dict[str, str]], List[str]]:
        """Validate every row and collect the guests to create"""
        column_mapping = ExcelService.map_columns(df)
        errors = []
        guests = []
        seen_emails = {}

        for index, row in df.iterrows():
            row_number = index + 2  # header is row 1
            name = ExcelService._cell(row, column_mapping['name'])
            email = ExcelService._cell(row, column_mapping['email'])
            status = ExcelService._cell(row, column_mapping.get('status')).lower() or 'invited'

            # Fully blank rows are skipped
            if not name and not email:
                continue

            if not name:
                errors.append(f"Row {row_number}: name is required")
            if not email:
                errors.append(f"Row {row_number}: email is required")
                continue

            try:
                validate_email(email, check_deliverability=False)
            except EmailNotValidError:
                errors.append(f"Row {row_number}: invalid email '{email}'")
                continue

            if status not in GUEST_STATUSES:
                errors.append(
                    f"Row {row_number}: invalid status '{status}' (expected one of {', '.join(GUEST_STATUSES)})"
                )

            normalized = GuestService.normalize_email(email)
            if normalized in seen_emails:
                errors.append(f"Row {row_number}: duplicate email '{email}' (also on row {seen_emails[normalized]})")
                continue
            seen_emails[normalized] = row_number

            if GuestService.email_taken(db, event_id, normalized):
                errors.append(f"Row {row_number}: guest with email '{email}' already exists for this event")
                continue

            guests.append({"name": name, "email": normalized, "status": status})

        return guests, errors

    @staticmethod
    def reader_engine(filename: Optional[str]) -> Optional[str]:
        """Engine for pd.read_excel, None lets pandas sniff the content"""
        name = (filename or '').lower()
        for extension, engine in ExcelService.READER_ENGINES.items():
            if name.endswith(extension):
                return engine
        return None

    @staticmethod
    def process_excel_upload(
        file_content: bytes,
        event_id: int,
        db: Session,
        filename: Optional[str] = None
    ) -> Tuple[bool, List[str], int]:
        """Import guests from a spreadsheet; nothing is imported when any row is invalid"""
        try:
            df = pd.read_excel(
                io.BytesIO(file_content),
                dtype=str,
                engine=ExcelService.reader_engine(filename)
            )
        except Exception as e:
            return False, [f"Could not read Excel file: {str(e)}"], 0

        valid_structure, structure_errors = ExcelService.validate_excel_structure(df)
        if not valid_structure:
            return False, structure_errors, 0

        guests, row_errors = ExcelService.extract_rows(df, db, event_id)
        if row_errors:
            return False, row_errors, 0

        try:
            for guest in guests:
                db.add(Guest(event_id=event_id, **guest))
            db.commit()
        except Exception:
            db.rollback()
            raise

        return True, [], len(guests)

    @staticmethod
    def export_current_data(event_id: int, db: Session) -> bytes:
        """Export current guest data to Excel"""
        guests = GuestService.list_guests(db, event_id)

        data = [
            {
                'Name': guest.name,
                'Email': guest.email,
                'Status': guest.status,
                'Added': guest.created_at.strftime('%Y-%m-%d %H:%M') if guest.created_at else '',
            }
            for guest in guests
        ]

        df = pd.DataFrame(data, columns=['Name', 'Email', 'Status', 'Added'])

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name='Guest List')

        return buffer.getvalue()
