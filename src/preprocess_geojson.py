# preprocess_geojson.py
# Builds the dashboard inputs from the raw UNOSAT export:
#   - bombing.geojson: point features only
#   - muni_totals.json: destroyed buildings per municipality, largest first
import argparse
import json
import os

import geopandas as gpd
import pandas as pd

from settings import STATIC_DIR


def keep_points(gdf):
    return gdf[gdf.geometry.geom_type == "Point"].copy()


def municipality_totals(points, munis) -> pd.DataFrame:
    """Sum NUMPOINTS (1 when missing) of the points falling inside each municipality."""
    points = points.copy()
    if "NUMPOINTS" in points.columns:
        points["NUMPOINTS"] = points["NUMPOINTS"].fillna(1)
    else:
        points["NUMPOINTS"] = 1
    if points.crs is not None and munis.crs is not None and points.crs != munis.crs:
        points = points.to_crs(munis.crs)

    joined = gpd.sjoin(points[["NUMPOINTS", "geometry"]], munis[["NAME", "geometry"]], how="inner", predicate="within")
    return (
        joined.groupby("NAME", as_index=False)["NUMPOINTS"]
              .sum()
              .sort_values("NUMPOINTS", ascending=False, kind="stable")
              .reset_index(drop=True)
    )


def main(argv=None):
    parser = argparse.ArgumentParser(description="Prepare dashboard GeoJSON and municipality totals.")
    parser.add_argument("raw_points", help="UNOSAT damage export (any format geopandas can read)")
    parser.add_argument("munis", help="Municipality polygons with a NAME column")
    parser.add_argument("--out-dir", default=str(STATIC_DIR))
    args = parser.parse_args(argv)

    os.makedirs(args.out_dir, exist_ok=True)

    print("Loading raw points...")
    raw = gpd.read_file(args.raw_points)
    points = keep_points(raw)
    print(f"Kept {len(points)} of {len(raw)} features (points only).")
    points_path = os.path.join(args.out_dir, "bombing.geojson")
    points.to_file(points_path, driver="GeoJSON")
    print(f"  ✓ Saved points → {points_path}")

    munis = gpd.read_file(args.munis)
    totals = municipality_totals(points, munis)
    totals_path = os.path.join(args.out_dir, "muni_totals.json")
    with open(totals_path, "w") as f:
        json.dump(totals.to_dict(orient="records"), f, indent=2)
    print(f"  ✓ Saved {len(totals)} municipality totals → {totals_path}")
    print("Done.")


if __name__ == "__main__":
    main()
