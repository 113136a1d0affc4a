"""HTTP boundary for echem_pipeline."""
