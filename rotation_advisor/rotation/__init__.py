"""
Crop-rotation advisory engine: pure functions over in-memory planting
history, no DB or I/O.

Modules
-------
soil        : estimate_soil_status() — N/P/K heuristic from the last 3 seasons.
blocking    : compute_blocked_families() — families still inside their interval.
recommender : score_family() + recommend_families() — ranks allowed families.
species     : advise_species() — safe / warning / blocked verdict for one species.
history     : group-by helpers shared by the modules above.
advisor     : calculate_rotation_advice() — composes everything above.
"""
