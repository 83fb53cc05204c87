"""Pipeline orchestration.

Runs the stages in a fixed order:
1. Load shapefile → fill defaults
2. Classify features
3. Reproject to WGS 84
4. Write partitions + combined file
"""
