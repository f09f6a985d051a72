"""Multi-sheet Excel workbook export."""

from __future__ import annotations

from io import BytesIO

import pandas as pd


def _write_sheet(writer: pd.ExcelWriter, df: pd.DataFrame, sheet_name: str, header_fmt) -> None:
    df.to_excel(writer, sheet_name=sheet_name, index=False)
    ws = writer.sheets[sheet_name]
    for i, col in enumerate(df.columns):
        ws.write(0, i, col, header_fmt)
        ws.set_column(i, i, max(15, len(str(col)) + 5))


def create_analytics_workbook(
    projection_df: pd.DataFrame | None = None,
    bundles_df: pd.DataFrame | None = None,
    day_of_week_df: pd.DataFrame | None = None,
    optimal_df: pd.DataFrame | None = None,
    pricing_df: pd.DataFrame | None = None,
    summary_text: str = "",
) -> BytesIO:
    """Create a multi-sheet Excel workbook with every available result."""
    output = BytesIO()

    with pd.ExcelWriter(output, engine="xlsxwriter") as writer:
        workbook = writer.book

        header_fmt = workbook.add_format({
            "bold": True,
            "bg_color": "#1f77b4",
            "font_color": "#ffffff",
            "border": 1,
        })

        if projection_df is not None and len(projection_df) > 0:
            _write_sheet(writer, projection_df, "Revenue Projection", header_fmt)
            ws = writer.sheets["Revenue Projection"]
            # Highlight projected rows
            col = list(projection_df.columns).index("is_projected")
            ws.conditional_format(
                1, 0, len(projection_df), len(projection_df.columns) - 1,
                {
                    "type": "formula",
                    "criteria": f"=${chr(ord('A') + col)}2=TRUE",
                    "format": workbook.add_format({"font_color": "#7f7f7f", "italic": True}),
                },
            )

        if bundles_df is not None and len(bundles_df) > 0:
            _write_sheet(writer, bundles_df, "Product Bundles", header_fmt)
            ws = writer.sheets["Product Bundles"]
            col = list(bundles_df.columns).index("lift")
            ws.conditional_format(
                1, col, len(bundles_df), col,
                {
                    "type": "3_color_scale",
                    "min_color": "#F8696B",
                    "mid_color": "#FFEB84",
                    "max_color": "#63BE7B",
                },
            )

        if day_of_week_df is not None and len(day_of_week_df) > 0:
            _write_sheet(writer, day_of_week_df, "Day of Week", header_fmt)

        if optimal_df is not None and len(optimal_df) > 0:
            _write_sheet(writer, optimal_df, "Optimal Products", header_fmt)

        if pricing_df is not None and len(pricing_df) > 0:
            _write_sheet(writer, pricing_df, "Price Recommendations", header_fmt)
            ws = writer.sheets["Price Recommendations"]
            col = list(pricing_df.columns).index("revenue_change_pct")
            ws.conditional_format(
                1, col, len(pricing_df), col,
                {"type": "data_bar", "bar_color": "#63BE7B"},
            )

        if summary_text:
            ws = workbook.add_worksheet("Summary")
            writer.sheets["Summary"] = ws
            title_fmt = workbook.add_format({"bold": True, "font_size": 14})
            text_fmt = workbook.add_format({"text_wrap": True, "valign": "top"})

            ws.set_column(0, 0, 100)
            ws.write(0, 0, "Sales Analytics Summary", title_fmt)
            for i, paragraph in enumerate(summary_text.split("\n\n")):
                ws.write(i + 2, 0, paragraph, text_fmt)

    output.seek(0)
    return output
