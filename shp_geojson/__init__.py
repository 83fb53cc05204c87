"""Shapefile to GeoJSON conversion pipeline.

Reads a shapefile dataset in DHDN / Gauss-Krüger zone 4, classifies its
features through a type-code table, reprojects coordinates to WGS 84 and
writes one GeoJSON file per designation plus a combined file.
"""

__version__ = "0.1.0"
