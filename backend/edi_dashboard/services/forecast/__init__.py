"""Forecast storage and chart aggregation."""
