"""
Subway station catalogue used to build hybrid (taxi + subway) candidates.
Stations are listed in travel order, nearest to the origin first.
"""

from typing import Dict, List


# Daxing Airport Express + Line 4 + Changping Line, airport side first
DAXING_CHANGPING_CORRIDOR: List[Dict] = [
    {"name": "大兴机场站", "lng": 116.410742, "lat": 39.509723},
    {"name": "大兴新城站", "lng": 116.338611, "lat": 39.728831},
    {"name": "草桥站", "lng": 116.345678, "lat": 39.856789},
    {"name": "西单站", "lng": 116.374762, "lat": 39.912289},
    {"name": "西直门站", "lng": 116.347382, "lat": 39.942327},
    {"name": "北京北站", "lng": 116.358065, "lat": 39.953039},
    {"name": "生命科学园站", "lng": 116.293678, "lat": 40.072345},
]


def get_corridor_stations(reverse: bool = False) -> List[Dict]:
    """Return a copy of the corridor, optionally in the opposite direction."""
    stations = [dict(station) for station in DAXING_CHANGPING_CORRIDOR]
    if reverse:
        stations.reverse()
    return stations
