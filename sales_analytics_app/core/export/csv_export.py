"""CSV export utilities."""

from __future__ import annotations

from io import BytesIO

import pandas as pd


def export_frame_csv(df: pd.DataFrame) -> BytesIO:
    """Export any result table to CSV."""
    output = BytesIO()
    df.to_csv(output, index=False)
    output.seek(0)
    return output
