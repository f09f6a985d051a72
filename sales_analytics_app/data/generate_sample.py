"""Generate sample sales transactions for trying out the dashboard.

Run: python data/generate_sample.py
Creates: data/sample_sales.xlsx
"""

import numpy as np
import pandas as pd
from pathlib import Path

# (product_id, name, unit price)
CATALOG = [
    ("p-espresso", "Espresso Beans", 14.50),
    ("p-grinder", "Burr Grinder", 89.00),
    ("p-filter", "Paper Filters", 4.25),
    ("p-dripper", "Pour-Over Dripper", 24.00),
    ("p-mug", "Ceramic Mug", 12.00),
    ("p-kettle", "Gooseneck Kettle", 65.00),
    ("p-tea", "Green Tea", 9.75),
    ("p-scale", "Coffee Scale", 32.00),
]

# Products bought together more often than chance
AFFINITIES = [
    ("p-dripper", "p-filter", 0.7),
    ("p-grinder", "p-espresso", 0.5),
    ("p-kettle", "p-dripper", 0.35),
]

# Relative traffic Sunday..Saturday
WEEKDAY_TRAFFIC = [1.4, 0.7, 0.8, 0.9, 1.0, 1.3, 1.6]


def generate_sample_sales(
    start_date: str = "2023-01-01",
    n_days: int = 730,
    base_orders_per_day: float = 6.0,
    yearly_growth: float = 0.12,
    seasonal_amplitude: float = 0.3,
    stores: tuple[str, ...] = ("store-north", "store-south"),
    deleted_product_rate: float = 0.02,
    promo_rate: float = 0.15,
    promo_discount: float = 0.15,
    seed: int = 42,
) -> pd.DataFrame:
    """Generate line-item sales with growth, weekday and yearly seasonality, and basket affinities.

    On promotion days a product sells at a discount and in larger quantities,
    which gives the price recommendations more than one price point.
    """
    rng = np.random.default_rng(seed)
    prices = {pid: price for pid, _, price in CATALOG}
    names = {pid: name for pid, name, _ in CATALOG}
    product_ids = [pid for pid, _, _ in CATALOG]

    rows = []
    sale_no = 0
    for day in pd.date_range(start=start_date, periods=n_days, freq="D"):
        t = (day - pd.Timestamp(start_date)).days / 365
        weekday = (day.dayofweek + 1) % 7
        # Holiday peak in December, summer lull
        seasonal = 1 + seasonal_amplitude * np.cos(2 * np.pi * (day.dayofyear - 350) / 365)
        rate = base_orders_per_day * (1 + yearly_growth) ** t * WEEKDAY_TRAFFIC[weekday] * seasonal
        on_promo = {pid for pid in product_ids if rng.random() < promo_rate}
        for _ in range(rng.poisson(rate)):
            sale_no += 1
            moment = day + pd.Timedelta(minutes=int(rng.integers(8 * 60, 21 * 60)))
            basket = {str(rng.choice(product_ids))}
            for a, b, p in AFFINITIES:
                if a in basket and rng.random() < p:
                    basket.add(b)
            if rng.random() < 0.25:
                basket.add(str(rng.choice(product_ids)))

            store = str(rng.choice(stores))
            for pid in sorted(basket):
                deleted = rng.random() < deleted_product_rate
                rows.append({
                    "sale_id": f"S{sale_no:06d}",
                    "date": moment,
                    "user_id": store,
                    "product_id": None if deleted else pid,
                    "product_name": None if deleted else names[pid],
                    "quantity": int(rng.integers(2, 6) if pid in on_promo else rng.integers(1, 4)),
                    "unit_price": round(prices[pid] * (1 - promo_discount), 2) if pid in on_promo else prices[pid],
                })

    return pd.DataFrame(rows)


if __name__ == "__main__":
    output_path = Path(__file__).parent / "sample_sales.xlsx"
    df = generate_sample_sales()
    df.to_excel(output_path, index=False, engine="openpyxl")
    print(f"Sample data generated: {output_path}")
    print(f"  Line items: {len(df):,}  Sales: {df['sale_id'].nunique():,}")
    print(f"  Date range: {df['date'].min()} to {df['date'].max()}")
    print(df.head())
