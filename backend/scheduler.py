# file: backend/scheduler.py

import threading
import schedule
import logging
import time

from backend.config import SENSOR_REFRESH_MINUTES
from backend.sensors import SensorRegistry


def run_schedule(registry: SensorRegistry, minutes: int = SENSOR_REFRESH_MINUTES) -> threading.Thread :
    """Schedule periodic refresh of the sensor registry."""

    def job() :
        try :
            registry.refresh()
        except Exception as e :
            logging.error(f"Scheduled sensor refresh failed: {e}")

    schedule.every(minutes).minutes.do(job)

    def run_continuously() :
        while True :
            schedule.run_pending()
            time.sleep(30)

    thread = threading.Thread(target = run_continuously, daemon = True)
    thread.start()
    logging.info(f"Scheduler started in background thread, refreshing sensors every {minutes} min")
    return thread
