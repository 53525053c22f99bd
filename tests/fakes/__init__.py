from .strava import StravaClientFake

__all__ = ["StravaClientFake"]
