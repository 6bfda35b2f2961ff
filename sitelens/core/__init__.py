"""Scrape-and-enhance pipeline."""
