"""Allow ``python -m shp_geojson``."""

import sys

from shp_geojson.cli import main

sys.exit(main())
