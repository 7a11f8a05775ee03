import pandas as pd
from loguru import logger

from epicurve import InsufficientFitDataError, Report
from epicurve.projection import combine
from epicurve.sources import TableLoader
from config import (
    DATA_PATH, OUTPUT_DIR, COLUMNS, FIT_START, DEGREE, HORIZON,
    ZERO_AS_MISSING, CLAMP_INCREMENTS, CLAMP_PROJECTION,
)


def main():
    """
    Run the surveillance pipeline once over DATA_PATH.
    Outputs (in OUTPUT_DIR):
      - national_totals.csv
      - anomalies.csv
      - cfr.csv
      - daily_deaths.csv  (observed + projected)
    """
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    logger.add(OUTPUT_DIR / "report.log", mode="w")

    report = Report(
        loader=TableLoader(DATA_PATH, columns=COLUMNS),
        fit_start=FIT_START,
        degree=DEGREE,
        horizon=HORIZON,
        zero_as_missing=ZERO_AS_MISSING,
        clamp_increments=CLAMP_INCREMENTS,
        clamp_projection=CLAMP_PROJECTION,
        progress=True,
    )
    logger.info(f"{len(report.regions)} regions, {len(report.dates)} report dates from {DATA_PATH}")

    outputs = {
        "national_totals": report.totals(),
        "anomalies": report.anomalies(),
        "cfr": report.cfr(),
    }
    if not outputs["anomalies"].empty:
        logger.warning(f"{len(outputs['anomalies'])} decreasing cumulative death count(s), see anomalies.csv")

    # a failed fit still leaves the observed series worth writing
    observed = report.national_daily()
    try:
        model = report.fit(observed)
        daily = combine(observed, report.projection(model, observed))
        logger.info(
            f"Degree-{model.degree} fit on {model.n_obs} days from {model.window_start.date()}, "
            f"R^2={model.rsquared:.4f}"
        )
    except InsufficientFitDataError as e:
        logger.error(f"Curve fit skipped: {e}")
        daily = observed.assign(source="observed")
    outputs["daily_deaths"] = daily

    for name, df in outputs.items():
        path = OUTPUT_DIR / f"{name}.csv"
        df.to_csv(path, index=False)
        logger.info(f"Saved {name} ({len(df)} rows) to {path}")

    projected = daily[daily["source"] == "projected"]
    if not projected.empty:
        summary = projected.assign(date=pd.to_datetime(projected["date"]).dt.date)
        print("\n=== Projected daily deaths ===")
        print(summary.to_string(index=False))

    return outputs


if __name__ == "__main__":
    outputs = main()
