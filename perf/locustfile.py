"""Locust load script for the stream addon.
Usage:
  STREMIO_SOURCE="<source id>" locust -f perf/locustfile.py --host http://localhost:8000
"""
import os
from locust import HttpUser, task, between

SOURCE = os.getenv("STREMIO_SOURCE", "")
MOVIE_ID = os.getenv("STREMIO_MOVIE_ID", "tt0137523")
SERIES_ID = os.getenv("STREMIO_SERIES_ID", "tt0903747")


class StremioUser(HttpUser):
    wait_time = between(0.2, 1.0)

    def on_start(self):
        if not SOURCE:
            raise RuntimeError("Set STREMIO_SOURCE env var before running locust")

    @task(1)
    def manifest(self):
        self.client.get(f"/{SOURCE}/manifest.json")

    @task(3)
    def movie_streams(self):
        self.client.get(f"/{SOURCE}/stream/movie/{MOVIE_ID}.json")

    @task(3)
    def series_streams(self):
        self.client.get(f"/{SOURCE}/stream/series/{SERIES_ID}:1:1.json")

    @task(1)
    def sweep_episodes(self):
        # Consecutive episodes, as binge playback would request them
        for episode in range(1, 4):
            self.client.get(f"/{SOURCE}/stream/series/{SERIES_ID}:1:{episode}.json")
