"""
Excel Report Generator for Verification Module.

Generates Excel workbooks with:
- A summary sheet (one row per test case)
- Per-case comparison tables (solver value vs golden vs errors)
- Optional bar charts of solver vs golden values
"""

import io
import math
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
import plotly.graph_objects as go
import xlsxwriter
from xlsxwriter.exceptions import DuplicateWorksheetName

from .comparator import CaseComparison, get_tolerance
from .runner import SolverResults


# Constants
IMG_WIDTH_PX = 800
IMG_HEIGHT_PX = 400
IMG_SCALE = 2
DISPLAY_SCALE = 0.5


def summary_frame(comparisons: List[CaseComparison]) -> pd.DataFrame:
    """One row per case: outcome, error and pass/fail columns."""
    rows = []
    for comp in comparisons:
        rows.append({
            "Case": comp.case_id,
            "Expected": comp.expected_outcome or "",
            "Actual": comp.actual_outcome or "",
            "Max Rel Error (%)": comp.overall_max_rel_error,
            "Residual": comp.residual_norm,
            "Status": "PASS" if comp.overall_pass else "FAIL",
        })
    return pd.DataFrame(rows, columns=["Case", "Expected", "Actual", "Max Rel Error (%)", "Residual", "Status"])


def solution_frame(comparison: CaseComparison) -> pd.DataFrame:
    """Per-unknown comparison table for a solved case."""
    field_comp = comparison.solution
    if field_comp is None or field_comp.count == 0:
        return pd.DataFrame()
    return pd.DataFrame({
        "Unknown": [f"x{i}" for i in range(field_comp.count)],
        "Model Value": field_comp.model_values[:field_comp.count],
        "Golden": field_comp.ref_values[:field_comp.count],
        "Abs Error": field_comp.abs_errors,
        "Rel Error (%)": field_comp.rel_errors,
    })


class VerificationReporter:
    """
    Generates Excel verification reports.

    Usage:
        reporter = VerificationReporter()
        reporter.add_case_comparison(comparison, solver_result)
        reporter.save("reports/verification.xlsx")
    """

    def __init__(self, output_path: Optional[str] = None, include_charts: bool = False):
        """
        Initialize the reporter.

        Args:
            output_path: Path to save the Excel file (optional, can set later)
            include_charts: Render plotly charts into case sheets
        """
        self.output_path = Path(output_path) if output_path else None
        self.include_charts = include_charts
        self.comparisons: List[Tuple[CaseComparison, SolverResults]] = []

    def add_case_comparison(self, comparison: CaseComparison, solver_result: SolverResults):
        """
        Add a case comparison to the report.

        Args:
            comparison: CaseComparison results
            solver_result: Solver output data
        """
        self.comparisons.append((comparison, solver_result))

    def generate(self, output_path: Optional[str] = None) -> bytes:
        """
        Generate the Excel workbook.

        Args:
            output_path: Optional path to save file (overrides constructor path)

        Returns:
            Excel file as bytes
        """
        if output_path:
            self.output_path = Path(output_path)

        output = io.BytesIO()
        workbook = xlsxwriter.Workbook(output, {'in_memory': True})

        formats = self._create_formats(workbook)

        self._write_summary_sheet(workbook, formats)

        for comparison, solver_result in self.comparisons:
            self._write_case_sheet(workbook, formats, comparison, solver_result)

        workbook.close()
        output.seek(0)

        if self.output_path:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.output_path, 'wb') as f:
                f.write(output.getvalue())
            output.seek(0)

        return output.getvalue()

    def save(self, output_path: str):
        """
        Generate and save the Excel report.

        Args:
            output_path: Path to save the file
        """
        self.generate(output_path)

    def _create_formats(self, workbook) -> Dict[str, Any]:
        """Create all cell formats for the workbook."""
        return {
            "header_main": workbook.add_format({
                'bold': True, 'font_size': 14, 'bg_color': '#1F4E79',
                'font_color': 'white', 'border': 1, 'align': 'center', 'valign': 'vcenter'
            }),
            "header": workbook.add_format({
                'bold': True, 'bg_color': '#D9E1F2', 'border': 1,
                'align': 'center', 'valign': 'vcenter', 'text_wrap': True
            }),
            "header_pass": workbook.add_format({
                'bold': True, 'bg_color': '#C6EFCE', 'font_color': '#006100',
                'border': 1, 'align': 'center'
            }),
            "header_fail": workbook.add_format({
                'bold': True, 'bg_color': '#FFC7CE', 'font_color': '#9C0006',
                'border': 1, 'align': 'center'
            }),
            "num_6dec": workbook.add_format({'num_format': '0.000000', 'border': 1}),
            "sci": workbook.add_format({'num_format': '0.00E+00', 'border': 1}),
            "error_good": workbook.add_format({
                'num_format': '0.00E+00', 'border': 1,
                'bg_color': '#C6EFCE', 'font_color': '#006100'
            }),
            "error_bad": workbook.add_format({
                'num_format': '0.00E+00', 'border': 1,
                'bg_color': '#FFC7CE', 'font_color': '#9C0006'
            }),
            "text": workbook.add_format({'border': 1, 'align': 'left'}),
            "text_center": workbook.add_format({'border': 1, 'align': 'center'}),
            "text_bold": workbook.add_format({'bold': True, 'border': 1}),
        }

    def _write_summary_sheet(self, workbook, formats: Dict):
        """Write the summary sheet with overall results."""
        ws = workbook.add_worksheet("Summary")

        ws.merge_range(0, 0, 0, 5, "Gaussian Elimination Verification Report", formats["header_main"])
        ws.write(1, 0, f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}")
        ws.write(2, 0, f"Total Cases: {len(self.comparisons)}")

        df = summary_frame([comparison for comparison, _ in self.comparisons])

        row = 4
        for col, header in enumerate(df.columns):
            ws.write(row, col, header, formats["header"])

        for _, record in df.iterrows():
            row += 1
            passed = record["Status"] == "PASS"
            status_fmt = formats["header_pass"] if passed else formats["header_fail"]
            ws.write(row, 0, record["Case"], formats["text"])
            ws.write(row, 1, record["Expected"], formats["text_center"])
            ws.write(row, 2, record["Actual"], formats["text_center"])
            ws.write(row, 3, record["Max Rel Error (%)"], formats["sci"])
            ws.write(row, 4, record["Residual"], formats["sci"])
            ws.write(row, 5, record["Status"], status_fmt)

        ws.set_column(0, 0, 20)
        ws.set_column(1, 2, 14)
        ws.set_column(3, 4, 18)
        ws.set_column(5, 5, 10)

    def _write_case_sheet(
        self,
        workbook,
        formats: Dict,
        comparison: CaseComparison,
        solver_result: SolverResults,
    ):
        """Write a sheet for a single case comparison."""
        # Excel limits sheet names to 31 characters
        sheet_name = comparison.case_id[:31]
        for ch in "[]:*?/\\":
            sheet_name = sheet_name.replace(ch, "-")

        try:
            ws = workbook.add_worksheet(sheet_name)
        except DuplicateWorksheetName:
            ws = workbook.add_worksheet()

        ws.merge_range(0, 0, 0, 5, f"Verification: {comparison.case_id}", formats["header_main"])
        ws.write(1, 0, f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}")

        status = "PASS" if comparison.overall_pass else "FAIL"
        ws.write(2, 0, f"Status: {status}",
                 formats["header_pass"] if comparison.overall_pass else formats["header_fail"])
        ws.write(2, 2, f"Expected: {comparison.expected_outcome}")
        ws.write(2, 4, f"Actual: {comparison.actual_outcome}")
        ws.write(3, 0, f"Output text: {solver_result.output_text!r}")

        row = 5
        for note in comparison.notes:
            ws.write(row, 0, note, formats["text"])
            row += 1
        if comparison.notes:
            row += 1

        df = solution_frame(comparison)
        row = self._write_solution_table(ws, formats, row, df)

        if self.include_charts and not df.empty:
            fig = self._create_comparison_chart(
                title=f"Solution vs Golden - {comparison.case_id}",
                x_labels=list(df["Unknown"]),
                model_values=list(df["Model Value"]),
                ref_values=list(df["Golden"]),
            )
            self._insert_chart(ws, row + 1, 0, "Solution", fig)

    def _write_solution_table(self, ws, formats: Dict, start_row: int, df: pd.DataFrame) -> int:
        """Write the per-unknown comparison table."""
        if df.empty:
            ws.write(start_row, 0, "No solution values to compare", formats["text"])
            return start_row + 1

        ws.merge_range(start_row, 0, start_row, len(df.columns) - 1,
                       "Solution Comparison", formats["header_main"])
        row = start_row + 1
        for col, header in enumerate(df.columns):
            ws.write(row, col, header, formats["header"])
        row += 1

        rel_tol = get_tolerance("solution", "rel")
        abs_tol = get_tolerance("solution", "abs")
        for _, record in df.iterrows():
            ws.write(row, 0, record["Unknown"], formats["text"])
            ws.write(row, 1, record["Model Value"], formats["num_6dec"])
            ws.write(row, 2, record["Golden"], formats["num_6dec"])
            ok = record["Abs Error"] <= abs_tol or record["Rel Error (%)"] <= rel_tol
            fmt = formats["error_good"] if ok else formats["error_bad"]
            ws.write(row, 3, record["Abs Error"], fmt)
            ws.write(row, 4, record["Rel Error (%)"], fmt)
            row += 1

        ws.set_column(0, 0, 25)
        ws.set_column(1, 4, 15)
        return row

    def _create_comparison_chart(
        self,
        title: str,
        x_labels: List[str],
        model_values: List[float],
        ref_values: List[float],
    ) -> go.Figure:
        """Create a grouped bar chart comparing solver vs golden."""
        fig = go.Figure()

        fig.add_trace(go.Bar(
            name='Model',
            x=x_labels,
            y=model_values,
            marker_color='#1f77b4'
        ))

        fig.add_trace(go.Bar(
            name='Golden',
            x=x_labels,
            y=ref_values,
            marker_color='#ff7f0e'
        ))

        fig.update_layout(
            title=title,
            xaxis_title='Unknown',
            yaxis_title='Value',
            barmode='group',
            legend=dict(orientation='h', yanchor='bottom', y=1.02, xanchor='right', x=1),
            margin=dict(l=50, r=50, t=50, b=50),
        )

        return fig

    def _insert_chart(self, ws, row: int, col: int, caption: str, fig: go.Figure) -> int:
        """Insert a Plotly figure as an image."""
        try:
            img_bytes = fig.to_image(format="png", width=IMG_WIDTH_PX, height=IMG_HEIGHT_PX, scale=IMG_SCALE)
        except (ValueError, RuntimeError) as e:
            # Static export needs the kaleido engine
            ws.write(row, col, f"Error generating chart: {e}")
            return row + 2

        ws.write(row, col, f"Figure: {caption}")
        ws.insert_image(row + 1, col, f'{caption}.png', {
            'image_data': io.BytesIO(img_bytes),
            'x_scale': DISPLAY_SCALE,
            'y_scale': DISPLAY_SCALE
        })

        display_height = IMG_HEIGHT_PX * DISPLAY_SCALE
        rows_needed = math.ceil(display_height / 15) + 3
        return row + rows_needed


def generate_markdown_summary(comparisons: List[CaseComparison]) -> str:
    """
    Generate a Markdown summary of verification results.

    Args:
        comparisons: List of CaseComparison objects

    Returns:
        Markdown formatted string
    """
    lines = [
        "# Gaussian Elimination Verification Summary",
        "",
        f"**Generated:** {datetime.now().strftime('%Y-%m-%d %H:%M')}",
        f"**Total Cases:** {len(comparisons)}",
        "",
        "## Results",
        "",
        "| Case | Expected | Actual | Status | Max Rel Error (%) |",
        "|------|----------|--------|--------|-------------------|",
    ]

    passed = 0
    for comp in comparisons:
        status = "✅ PASS" if comp.overall_pass else "❌ FAIL"
        if comp.overall_pass:
            passed += 1
        lines.append(
            f"| {comp.case_id} | {comp.expected_outcome} | {comp.actual_outcome} "
            f"| {status} | {comp.overall_max_rel_error:.3e} |"
        )

    lines.extend([
        "",
        f"**Overall:** {passed}/{len(comparisons)} passed",
    ])

    return "\n".join(lines)


__all__ = [
    "VerificationReporter",
    "generate_markdown_summary",
    "solution_frame",
    "summary_frame",
]
