"""Export utilities for map layers."""

from .geojson import save_feature_collection, segments_to_feature_collection

__all__ = ["segments_to_feature_collection", "save_feature_collection"]
