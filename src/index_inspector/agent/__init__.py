"""Pipeline orchestration and the extraction loop."""
