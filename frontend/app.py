#file: frontend/app.py

import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import asyncio
import pandas as pd
import streamlit as st

st.set_page_config(page_title="Delhi-NCR Air Quality", page_icon="🌍", layout="wide")
pd.options.display.float_format = "{:.2f}".format

from frontend.data_fetch import fetch_current_aqi, fetch_forecast, fetch_hyperlocal_aqi, fetch_sensors, fetch_stations
from frontend.utils import forecast_to_frame, sensors_to_frame, stations_to_frame, trend_label
from frontend.ui_elements import display_aqi_card, display_forecast_chart, display_hyperlocal, display_map

DEFAULT_LAT, DEFAULT_LON = 28.6139, 77.209

st.title("Delhi-NCR Air Quality")

# Current city-wide AQI
current = asyncio.run(fetch_current_aqi())
if current :
    display_aqi_card(current)
else :
    st.error("Backend unavailable.")
    st.stop()

tab_map, tab_hyperlocal, tab_forecast = st.tabs(["Map", "Hyperlocal", "Forecast"])

with tab_map:
    stations = stations_to_frame(asyncio.run(fetch_stations()))
    sensor_payload = asyncio.run(fetch_sensors())
    sensors = sensors_to_frame(sensor_payload["sensors"])

    col1, col2 = st.columns([2, 1])
    with col1:
        if not stations.empty :
            display_map(stations, title = "Monitoring stations")
    with col2:
        network = sensor_payload.get("network_status")
        if network :
            st.subheader("IoT sensor network")
            st.metric("Online", f"{network['online_sensors']} / {network['total_sensors']}")
            st.metric("Avg battery", f"{network['average_battery_level']}%")
            st.metric("Avg signal", f"{network['average_signal_strength']}%")
    if not sensors.empty :
        st.dataframe(sensors[["sensor_id", "name", "status", "pm25", "pm10", "no2", "battery_level"]], hide_index = True)

with tab_hyperlocal:
    col1, col2, col3 = st.columns(3)
    with col1:
        lat = st.number_input("Latitude", value = DEFAULT_LAT, format = "%.4f")
    with col2:
        lon = st.number_input("Longitude", value = DEFAULT_LON, format = "%.4f")
    with col3:
        radius = st.slider("Radius (km)", min_value = 1, max_value = 50, value = 5)

    result = asyncio.run(fetch_hyperlocal_aqi(lat, lon, radius))
    if result :
        display_hyperlocal(result)
    else :
        st.warning("Hyperlocal lookup unavailable.")

with tab_forecast:
    timeframes = {"24h" : 24, "48h" : 48, "72h" : 72}
    selected_timeframe = st.radio("Forecast window", list(timeframes.keys()), horizontal = True)

    payload = asyncio.run(fetch_forecast())
    if payload :
        st.metric("Trend", trend_label(payload["trend"]))
        df = forecast_to_frame(payload, timeframes[selected_timeframe])
        display_forecast_chart(df)
    else :
        st.warning("Forecast unavailable.")
