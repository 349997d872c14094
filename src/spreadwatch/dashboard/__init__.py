"""Market list views and the web dashboard."""
