#file: frontend/utils.py

import pandas as pd

TREND_LABELS = {"improving": "📉 Improving", "worsening": "📈 Worsening", "stable": "➖ Stable"}


def sensors_to_frame(sensors) :
    """Flatten sensor payloads (nested readings) into one row per sensor."""
    if not sensors :
        return pd.DataFrame()

    rows = []
    for sensor in sensors :
        row = {k : v for k, v in sensor.items() if k != "readings"}
        row.update(sensor.get("readings") or {})
        rows.append(row)
    df = pd.DataFrame(rows)
    df["timestamp"] = pd.to_datetime(df["timestamp"])
    return df.rename(columns = {"latitude" : "lat", "longitude" : "lon", "location" : "name"})


def stations_to_frame(stations) :
    if not stations :
        return pd.DataFrame()
    df = pd.DataFrame(stations)
    return df.rename(columns = {"latitude" : "lat", "longitude" : "lon"})


def forecast_to_frame(forecast_payload, timeframe_hours = 72) :
    """Join history and forecast into one timeline with a 'kind' column."""
    if not forecast_payload :
        return pd.DataFrame()

    historical = pd.DataFrame(forecast_payload.get("historical", []))
    forecast = pd.DataFrame(forecast_payload.get("forecast", [])).head(timeframe_hours)
    historical["kind"] = "Historical"
    forecast["kind"] = "Forecast"
    df = pd.concat([historical, forecast], ignore_index = True)
    if df.empty :
        return df
    df["timestamp"] = pd.to_datetime(df["timestamp"], utc = True)
    return df.sort_values(by = "timestamp")


def trend_label(trend) :
    return TREND_LABELS.get(trend, trend)


def status_color_map(data_frame, label_column = "status") :
    """Map each status label to the colour the backend sent with it."""
    if data_frame.empty or "color" not in data_frame.columns or label_column not in data_frame.columns :
        return {}
    pairs = data_frame[[label_column, "color"]].dropna().drop_duplicates(subset = label_column)
    return dict(zip(pairs[label_column], pairs["color"]))
