from __future__ import annotations
from io import BytesIO
import pandas as pd

SUMMARY_SHEET = "Results"
CONFLICTING_SHEET = "Conflicting Results"


def export_report_bytes(df: pd.DataFrame, title: str, sheet_name: str = SUMMARY_SHEET) -> bytes:
    """
    One-sheet report workbook:
      row 1 - title (upper case, merged over the table width)
      row 2 - column headers
      row 3+ - data
    """
    bio = BytesIO()

    with pd.ExcelWriter(bio, engine="xlsxwriter") as writer:
        # startrow=1 leaves row 1 for the title
        df.to_excel(writer, index=False, sheet_name=sheet_name, startrow=1)

        wb = writer.book
        ws = writer.sheets[sheet_name]

        fmt_title = wb.add_format({"bold": True, "valign": "vcenter"})
        fmt_header = wb.add_format({"bold": True, "bg_color": "#F2F2F2", "border": 1, "valign": "vcenter"})

        last_col = max(0, len(df.columns) - 1)
        if last_col > 0:
            ws.merge_range(0, 0, 0, last_col, title.upper(), fmt_title)
        else:
            ws.write(0, 0, title.upper(), fmt_title)

        for col, name in enumerate(df.columns):
            ws.write(1, col, name, fmt_header)
            values = df[name].astype(str).tolist() if len(df) else []
            w = max([len(str(name))] + [len(v) for v in values])
            ws.set_column(col, col, min(60, max(10, w + 2)))

        ws.freeze_panes(2, 0)

    return bio.getvalue()
