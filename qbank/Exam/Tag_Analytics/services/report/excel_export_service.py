"""Excel Export Service - Report Export Utilities (SoC)"""
import re
from typing import Dict, List
from flask import Response
import pandas as pd
from io import BytesIO
from qbank.Exam.Tag_Analytics.config.settings import ExportConfig
from qbank.Exam.Tag_Analytics.utils.analysis.export_flattener import ExportTables

INSIGHT_COLUMNS = {"tag": "Tag", "failPct": "Fail (%)", "category": "Category", "action": "Action"}

class ExcelExportService:
    """Service for exporting tag report data to Excel format"""

    @staticmethod
    def build_workbook(tables: ExportTables, insights: List[Dict]) -> BytesIO:
        """Write the four report sheets into an in-memory workbook"""
        sheets = {
            ExportConfig.CONSOLIDATED_SHEET: pd.DataFrame(tables.consolidated, columns=tables.consolidated_columns),
            ExportConfig.DETAILED_SHEET: pd.DataFrame(tables.detailed, columns=tables.detailed_columns),
            ExportConfig.STUDENT_SUMMARY_SHEET: pd.DataFrame(tables.students, columns=tables.student_columns),
            ExportConfig.INSIGHTS_SHEET: pd.DataFrame(
                [{INSIGHT_COLUMNS[k]: i.get(k) for k in INSIGHT_COLUMNS} for i in insights],
                columns=list(INSIGHT_COLUMNS.values())
            ),
        }

        output = BytesIO()
        with pd.ExcelWriter(output, engine='openpyxl') as writer:
            for sheet_name, df in sheets.items():
                df.to_excel(writer, sheet_name=sheet_name, index=False)

        output.seek(0)
        return output

    @staticmethod
    def export_tag_report_to_excel(tables: ExportTables, insights: List[Dict], filename: str) -> Response:
        """Convert flattened tag report tables to Excel and return Flask response"""
        output = ExcelExportService.build_workbook(tables, insights)
        filename = re.sub(r"[^A-Za-z0-9_-]+", "_", filename).strip("_") + ".xlsx"

        # Create response with proper headers for download
        return Response(
            output.getvalue(),
            mimetype=ExportConfig.EXCEL_MIMETYPE,
            headers={
                'Content-Disposition': f'attachment; filename="{filename}"',
                'Cache-Control': 'no-cache',
                'Access-Control-Expose-Headers': 'Content-Disposition'
            }
        )
