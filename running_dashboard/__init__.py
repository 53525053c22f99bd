"""Personal running dashboard backed by the Strava API."""
