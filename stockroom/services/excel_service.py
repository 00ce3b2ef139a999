"""
Excel Service - xlsx templates, uploads and summary export
"""
import pandas as pd
from io import BytesIO
from typing import Any, Dict, Iterable, List
from zipfile import BadZipFile
from openpyxl.utils.exceptions import InvalidFileException

from stockroom.core import ValidationFailure
from stockroom.schemas.stock import StockSummary
from stockroom.services.import_service import ImportService

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

SUMMARY_COLUMNS = {
    "product_name": "Product",
    "rack": "Rack",
    "opening_stock": "Opening Stock",
    "inward_total": "Inward",
    "outward_total": "Outward",
    "current_stock": "Current Stock",
}


def _to_bytes(df: pd.DataFrame, sheet_name: str) -> bytes:
    output = BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
    return output.getvalue()


class ExcelService:

    @staticmethod
    def template(entity: str) -> bytes:
        """Workbook with only the header row for the entity"""
        return _to_bytes(pd.DataFrame(columns=ImportService.template(entity)), entity)

    @staticmethod
    def parse_workbook(content: bytes) -> List[Dict[str, Any]]:
        """First sheet as a list of row dicts keyed by header; blank cells become None"""
        try:
            df = pd.read_excel(BytesIO(content), sheet_name=0, engine="openpyxl")
        except (BadZipFile, InvalidFileException, ValueError, KeyError, OSError) as e:
            raise ValidationFailure(f"Could not read workbook: {e}") from e

        df = df.dropna(how="all")
        if df.empty:
            raise ValidationFailure("No data found in the file")

        df.columns = [str(column).strip() for column in df.columns]
        df = df.astype(object).where(pd.notnull(df), None)
        return df.to_dict(orient="records")

    @staticmethod
    def summary_workbook(rows: Iterable[StockSummary]) -> bytes:
        records = [row.model_dump() for row in rows]
        df = pd.DataFrame(records, columns=list(SUMMARY_COLUMNS)).rename(columns=SUMMARY_COLUMNS)
        return _to_bytes(df, "Stock Summary")
