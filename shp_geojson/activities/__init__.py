"""Pipeline stage functions.

Each activity performs one pass over the collection:
- load_shapefile: Read the shapefile pair and default missing attributes
- classify_features: Attach designations from the type table
- reproject_features: Gauss-Krüger zone 4 → WGS 84
- write_geojson: Write per-designation files and the combined file
"""
