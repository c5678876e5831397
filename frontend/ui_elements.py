#file: frontend/ui_elements.py

import streamlit as st
import pandas as pd
import plotly.express as px

from frontend.utils import status_color_map


def display_aqi_card(current) :
    """Headline AQI with status and the pollutant breakdown."""
    col1, col2, col3 = st.columns(3)
    col1.metric("AQI", current["aqi"])
    col2.metric("Status", current["status"])
    col3.metric("Main pollutant", current["main_pollutant"])
    pollutants = {k : v for k, v in current["pollutants"].items() if v is not None}
    st.dataframe(pd.DataFrame([pollutants]), hide_index = True)
    st.caption(f"Source: {current['source']} · updated {current['last_updated']}")


def display_map(station_df, color_column = "status", title = "Station Locations") :
    """Display a map with station or sensor locations."""
    if "size" not in station_df.columns :
        station_df["size"] = 10

    fig_map = px.scatter_mapbox(
        station_df,
        lat = "lat",
        lon = "lon",
        hover_name = "name",
        hover_data = [c for c in ("aqi", "status", "pm25") if c in station_df.columns],
        size = "size",
        color = color_column,
        color_discrete_map = status_color_map(station_df, color_column),
        zoom = 9,
        height = 500,
        title = title
    )
    fig_map.update_layout(
        mapbox_style = "open-street-map",
        margin = {
            "r" : 0,
            "t" : 30,
            "l" : 0,
            "b" : 0
        }
    )

    st.plotly_chart(fig_map)


def display_hyperlocal(result) :
    if result["no_data"] :
        st.warning(result["recommendations"][0])
        return
    col1, col2, col3 = st.columns(3)
    col1.metric(result["location"], result["aqi"], help = result["status"])
    col2.metric("Confidence", f"{result['confidence']}%")
    col3.metric("Sensors", result["sensor_count"])
    for recommendation in result["recommendations"] :
        st.write(f"- {recommendation}")


def display_forecast_chart(data_frame) :
    """Line chart of historical and forecast AQI plus forecast confidence."""
    fig = px.line(
        data_frame,
        x = "timestamp",
        y = "aqi",
        color = "kind",
        title = "AQI: last 7 days and forecast",
        labels = {
            "kind" : "Series",
            "timestamp" : "Time",
            "aqi" : "AQI"
        }
    )
    fig.update_layout(
        legend=dict(
            orientation="h",
            yanchor="top",
            y=-0.2,
            xanchor="center",
            x=0.5
        )
    )
    st.plotly_chart(fig)

    forecast = data_frame[data_frame["kind"] == "Forecast"]
    if not forecast.empty and "confidence" in forecast.columns :
        fig_conf = px.area(forecast, x = "timestamp", y = "confidence", title = "Forecast confidence (%)")
        st.plotly_chart(fig_conf)
