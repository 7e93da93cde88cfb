from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'walls_seeded': 0,
        'regions': 0,
        'largest_region': 0,
        'cells_demoted': 0,
        'tiles_floor': 0,
        'tiles_wall': 0,
        'spawners': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
